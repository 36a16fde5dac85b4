from typing import List, Optional
import logging

from folio_ingest.core.schemas import (
    DocumentParseResult,
    Education,
    Experience,
    PersonalInfo,
    ProfileRecord,
    Section,
    Skill,
)
from folio_ingest.core.section_parser import first_section, identify_sections
from folio_ingest.core.text_patterns import (
    DATE_RE,
    EMAIL_RE,
    GITHUB_RE,
    LINKEDIN_RE,
    NAME_BLOCKLIST,
    PHONE_RE,
    URL_RE,
    extract_date_range,
    non_empty_lines,
    split_paragraphs,
    split_skill_tokens,
)

logger = logging.getLogger(__name__)

NAME_SCAN_LINES = 5
EXPERIENCE_HEADER_MAX_LEN = 100
DESCRIPTION_MIN_LEN = 20
PARAGRAPH_MIN_LEN = 50
SUMMARY_FALLBACK_MIN_LEN = 100

DEFAULT_SKILL_LEVEL = 5
DEFAULT_SKILL_CATEGORY = "Professional"
DEFAULT_SKILL_YEARS = 2

EMPTY_TEXT_MESSAGE = "No text content could be extracted from the document."


def _looks_like_name(line: str) -> bool:
    if not (2 < len(line) < 50):
        return False
    if EMAIL_RE.search(line) or PHONE_RE.search(line):
        return False
    lowered = line.lower()
    return not any(word in lowered for word in NAME_BLOCKLIST)


def extract_personal_info(text: str) -> Optional[PersonalInfo]:
    info = PersonalInfo()

    m = EMAIL_RE.search(text)
    if m:
        info.email = m.group(0)

    m = PHONE_RE.search(text)
    if m:
        info.phone = m.group(0).strip()

    for line in non_empty_lines(text)[:NAME_SCAN_LINES]:
        if _looks_like_name(line):
            info.full_name = line
            break

    m = LINKEDIN_RE.search(text)
    if m:
        info.linkedin = m.group(0)
    m = GITHUB_RE.search(text)
    if m:
        info.github = m.group(0)
    for url in URL_RE.finditer(text):
        candidate = url.group(0)
        if "linkedin.com" not in candidate.lower() and "github.com" not in candidate.lower():
            info.website = candidate
            break

    if not info.model_dump(exclude_none=True):
        return None
    return info


def extract_summary(text: str, sections: List[Section]) -> Optional[str]:
    section = first_section(sections, "summary")
    if section:
        return section.content

    # Fallback: first substantial paragraph, only if it is long enough to be a summary
    paragraphs = [p for p in split_paragraphs(text) if len(p) > PARAGRAPH_MIN_LEN]
    if paragraphs and len(paragraphs[0]) > SUMMARY_FALLBACK_MIN_LEN:
        return paragraphs[0]
    return None


def _is_experience_header(line: str) -> bool:
    return bool(DATE_RE.search(line)) and len(line) < EXPERIENCE_HEADER_MAX_LEN


def _start_experience(line: str, number: int) -> Experience:
    start, end, current = extract_date_range(line)
    exp = Experience(id=f"exp-{number}", start_date=start, end_date=end, current=current)

    parts = [p.strip() for p in line.split("|")]
    if len(parts) >= 2:
        exp.title = parts[0] or None
        exp.company = parts[1] or None
    return exp


def extract_experience(sections: List[Section]) -> List[Experience]:
    section = first_section(sections, "experience")
    if not section:
        return []

    experiences: List[Experience] = []
    current: Optional[Experience] = None
    description: List[str] = []

    def _flush() -> None:
        if current is not None:
            if description:
                current.description = "\n".join(description)
            experiences.append(current)

    for line in non_empty_lines(section.content):
        if _is_experience_header(line):
            _flush()
            current = _start_experience(line, len(experiences) + 1)
            description = []
            logger.debug(f"  -> Found experience entry: title='{current.title}', company='{current.company}'")
        elif current is not None and len(line) > DESCRIPTION_MIN_LEN:
            description.append(line)

    _flush()
    return experiences


def extract_education(sections: List[Section]) -> List[Education]:
    # Deliberately coarse: the whole section becomes one entry's description
    section = first_section(sections, "education")
    if not section:
        return []
    return [Education(id="edu-1", description=section.content)]


def extract_skills(sections: List[Section]) -> List[Skill]:
    section = first_section(sections, "skills")
    if not section:
        return []

    skills: List[Skill] = []
    for line in non_empty_lines(section.content):
        for name in split_skill_tokens(line):
            skills.append(
                Skill(
                    id=f"skill-{len(skills) + 1}",
                    name=name,
                    level=DEFAULT_SKILL_LEVEL,
                    category=DEFAULT_SKILL_CATEGORY,
                    years_of_experience=DEFAULT_SKILL_YEARS,
                    certified=False,
                )
            )
    return skills


def extract_profile(raw_text: str) -> ProfileRecord:
    """
    Turn decoded resume text into a partial ProfileRecord.

    Fields that could not be extracted are left as None, never raised on.
    """
    sections = identify_sections(raw_text)
    record = ProfileRecord()

    record.personal_info = extract_personal_info(raw_text)
    record.summary = extract_summary(raw_text, sections)

    experience = extract_experience(sections)
    if experience:
        record.experience = experience

    education = extract_education(sections)
    if education:
        record.education = education

    skills = extract_skills(sections)
    if skills:
        record.skills = skills

    return record


def _partial_data_warnings(record: ProfileRecord) -> List[str]:
    warnings: List[str] = []
    if record.personal_info is None:
        warnings.append("No contact details detected in resume")
    if record.summary is None:
        warnings.append("No summary detected in resume")
    if record.experience is None:
        warnings.append("No experience entries detected in resume")
    if record.education is None:
        warnings.append("No education entries detected in resume")
    if record.skills is None:
        warnings.append("No skills detected in resume")
    return warnings


def parse_text(raw_text: str) -> DocumentParseResult:
    """
    Parse already-decoded resume text.

    Never raises: empty input and unexpected extraction failures come back as
    a result with success=False and a readable message in `errors`.
    """
    if not raw_text or not raw_text.strip():
        logger.warning("Parse rejected: empty text")
        return DocumentParseResult(
            success=False,
            raw_text=raw_text or "",
            errors=[EMPTY_TEXT_MESSAGE],
            error_kind="empty_extraction_result",
        )

    try:
        record = extract_profile(raw_text)
    except Exception as e:
        logger.exception("Resume text extraction failed")
        return DocumentParseResult(success=False, raw_text=raw_text, errors=[f"Resume parsing failed: {e}"])

    return DocumentParseResult(
        success=True,
        raw_text=raw_text,
        extracted_data=record,
        warnings=_partial_data_warnings(record),
    )
