from typing import List, Optional
import logging

from folio_ingest.core.confidence_calculator import ConfidenceCalculator, UNKNOWN_SECTION_CONFIDENCE
from folio_ingest.core.schemas import Section, SectionType
from folio_ingest.core.text_patterns import SECTION_KEYWORDS, non_empty_lines

logger = logging.getLogger(__name__)


def classify_line(line: str) -> SectionType:
    """
    Classify a line by the first section type whose keyword it contains.

    Matching is a case-insensitive substring test, walked in keyword-table
    order, so 'Professional Profile' is 'personal' (profile) rather than
    'experience' (professional).
    """
    lowered = line.lower()
    for section_type, keywords in SECTION_KEYWORDS:
        for keyword in keywords:
            if keyword in lowered:
                return section_type
    return "unknown"


def identify_sections(raw_text: str) -> List[Section]:
    """
    Split raw resume text into labeled sections.

    - A classified line whose type differs from the open section closes it
      and opens a new section starting with that line.
    - Unknown lines (and repeats of the open type) join the open section.
    - Unknown lines before any header become single-line 'unknown' sections.
    """
    sections: List[Section] = []
    current_type: Optional[SectionType] = None
    current_confidence = 0.0
    buffer: List[str] = []

    def _close() -> None:
        if current_type is not None and buffer:
            sections.append(
                Section(type=current_type, content="\n".join(buffer), confidence=current_confidence)
            )

    for line in non_empty_lines(raw_text):
        line_type = classify_line(line)

        if line_type != "unknown" and line_type != current_type:
            _close()
            current_type = line_type
            current_confidence = ConfidenceCalculator.section(line, line_type)
            buffer = [line]
            logger.debug(f"SECTION HEADER DETECTED: '{line}' -> section_type='{line_type}' confidence={current_confidence:.2f}")
        elif current_type is not None:
            buffer.append(line)
        else:
            sections.append(Section(type="unknown", content=line, confidence=UNKNOWN_SECTION_CONFIDENCE))

    _close()

    logger.debug(f"Identified {len(sections)} sections: {[s.type for s in sections]}")
    return sections


def first_section(sections: List[Section], section_type: SectionType) -> Optional[Section]:
    return next((s for s in sections if s.type == section_type), None)
