"""
Confidence scoring for section detection.

Scores are diagnostic output for callers and tests. Nothing in the pipeline
drops or reorders a section because of its score.

Confidence Scale:
  1.0   = Every keyword of the section type present, or a short all-caps header
  0.3+  = Short all-caps line (typical section header)
  0.1   = Line seen before any section header (unknown)
"""

from typing import Tuple

from folio_ingest.core.text_patterns import keywords_for


UNKNOWN_SECTION_CONFIDENCE = 0.1
HEADER_BOOST = 0.3
HEADER_MAX_LEN = 50


class ConfidenceCalculator:
    """Central place for section confidence logic."""

    @staticmethod
    def keyword_matches(line: str, section_type: str) -> Tuple[int, int]:
        """Return (matched keywords, total keywords) for the section type."""
        keywords = keywords_for(section_type)
        lowered = line.lower()
        matched = sum(1 for kw in keywords if kw in lowered)
        return matched, len(keywords)

    @staticmethod
    def looks_like_header(line: str) -> bool:
        """Short line that is entirely upper-case (e.g. 'WORK EXPERIENCE')."""
        return len(line) < HEADER_MAX_LEN and line == line.upper()

    @staticmethod
    def section(line: str, section_type: str) -> float:
        """
        Confidence that `line` opens a section of `section_type`.

        Base is the share of the type's keywords found in the line, boosted by
        0.3 for header-shaped lines, capped at 1.0.
        """
        matched, total = ConfidenceCalculator.keyword_matches(line, section_type)
        if total == 0:
            return UNKNOWN_SECTION_CONFIDENCE

        confidence = min(matched / total, 1.0)
        if ConfidenceCalculator.looks_like_header(line):
            confidence += HEADER_BOOST

        return min(confidence, 1.0)
