"""
Shared regexes and keyword tables for resume text segmentation.

The section keyword table is an ordered tuple, not a dict lookup: when a line
contains keywords of several section types, the type listed first wins.
"""

import re
from typing import List, Optional, Tuple


# ============================================================================
# Section keyword table (order matters)
# ============================================================================

SECTION_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("personal", ("contact", "personal", "profile", "name", "email", "phone", "address")),
    ("summary", ("summary", "objective", "profile", "about", "overview")),
    ("experience", ("experience", "work", "employment", "career", "professional", "history")),
    ("education", ("education", "academic", "university", "college", "degree", "school")),
    ("skills", ("skills", "technical", "expertise", "competencies", "technologies", "tools")),
    ("projects", ("projects", "portfolio", "achievements", "accomplishments")),
    ("certifications", ("certifications", "certificates", "credentials", "licenses")),
)


def keywords_for(section_type: str) -> Tuple[str, ...]:
    for name, keywords in SECTION_KEYWORDS:
        if name == section_type:
            return keywords
    return ()


# ============================================================================
# Contact patterns
# ============================================================================

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
# Optional country code, then 3-3-4 digits with flexible separators
PHONE_RE = re.compile(r"(?:\+?\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}")
URL_RE = re.compile(r"\bhttps?://[^\s)>\]]+", re.IGNORECASE)
LINKEDIN_RE = re.compile(r"\b(?:https?://)?(?:www\.)?linkedin\.com/[^\s)>\]]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"\b(?:https?://)?(?:www\.)?github\.com/[A-Za-z0-9_.-]+", re.IGNORECASE)

NAME_BLOCKLIST = ("resume", "cv")


# ============================================================================
# Dates
# ============================================================================

MONTH_YEAR = r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?\s+\d{4}\b"
SLASH_DATE = r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"
YEAR_RANGE = r"\b\d{4}\s*(?:-|–|to)\s*\d{4}\b"

DATE_RE = re.compile(rf"{MONTH_YEAR}|{SLASH_DATE}|{YEAR_RANGE}", re.IGNORECASE)
SINGLE_DATE_RE = re.compile(rf"{MONTH_YEAR}|{SLASH_DATE}|\b\d{{4}}\b", re.IGNORECASE)
YEAR_RANGE_RE = re.compile(r"\b(\d{4})\s*(?:-|–|to)\s*(\d{4})\b", re.IGNORECASE)
# Ongoing only when the word closes the range right after the start date
ONGOING_END_RE = re.compile(r"\s*(?:-|–|to)\s*(?:present|current|now)\b", re.IGNORECASE)


def extract_date_range(text: str) -> Tuple[Optional[str], Optional[str], bool]:
    """
    Pull (start, end, current) out of an experience header line.

    Examples:
      'Senior Dev | Acme | Jan 2020 - Present' -> ('Jan 2020', None, True)
      'Analyst | Bank | 2015 to 2018'         -> ('2015', '2018', False)
      'Dev | Acme | Jan 2018 - Dec 2019 | now at Beta' -> ('Jan 2018', 'Dec 2019', False)
    """
    m = YEAR_RANGE_RE.search(text)
    if m:
        return m.group(1), m.group(2), False

    dates = list(SINGLE_DATE_RE.finditer(text))
    if not dates:
        return None, None, False

    start = dates[0]
    if ONGOING_END_RE.match(text, start.end()):
        return start.group(0), None, True
    end = dates[1].group(0) if len(dates) > 1 else None
    return start.group(0), end, False


# ============================================================================
# Tokenizing
# ============================================================================

SKILL_DELIMITERS_RE = re.compile(r"[,;•·\-]")
PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")


def non_empty_lines(text: str) -> List[str]:
    return [ln.strip() for ln in text.split("\n") if ln.strip()]


def split_skill_tokens(line: str) -> List[str]:
    """
    Split a skills line on , ; • · - and keep tokens of 2-29 characters.

    A line made only of delimiters ('-, ;') yields no tokens.
    """
    tokens = [tok.strip() for tok in SKILL_DELIMITERS_RE.split(line)]
    return [tok for tok in tokens if 1 < len(tok) < 30]


def split_paragraphs(text: str) -> List[str]:
    return [p.strip() for p in PARAGRAPH_SPLIT_RE.split(text) if p.strip()]
