"""
File-level entry point: decode an uploaded resume and hand the text to the
extraction engine.

Decoding failures never escape as exceptions. They are raised internally as
DocumentParseError and converted into a failed DocumentParseResult, so the
caller can show `errors[0]` without wrapping business logic in try/except.
"""

from typing import Optional
import logging

from folio_ingest.config import get_settings
from folio_ingest.core.docx_extractor import extract_docx_text
from folio_ingest.core.pdf_extractor import extract_pdf_text
from folio_ingest.core.schemas import DocumentParseResult, ErrorKind
from folio_ingest.core.text_parser import EMPTY_TEXT_MESSAGE, parse_text

logger = logging.getLogger(__name__)

PDF_TYPES = {"application/pdf"}
DOCX_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
TEXT_TYPES = {"text/plain", "text/markdown"}
TEXT_EXTENSIONS = (".txt", ".md")


class DocumentParseError(Exception):
    """Decoding failure at the file boundary, tagged with its error kind."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def detect_kind(filename: str, content_type: str) -> str:
    """Return 'pdf', 'docx', 'text' or 'unsupported'."""
    filename = (filename or "").lower()
    content_type = (content_type or "").lower()

    if content_type in PDF_TYPES or filename.endswith(".pdf"):
        return "pdf"
    if content_type in DOCX_TYPES or filename.endswith(".docx"):
        return "docx"
    if content_type in TEXT_TYPES or filename.endswith(TEXT_EXTENSIONS):
        return "text"
    return "unsupported"


def decode_document(raw: bytes, filename: str = "", content_type: str = "") -> str:
    """Decode file bytes to text, raising DocumentParseError on failure."""
    kind = detect_kind(filename, content_type)

    if kind == "unsupported":
        described = content_type or filename or "unknown"
        raise DocumentParseError(
            "unsupported_input_kind",
            f"Unsupported file type: {described}. Please upload a PDF, Word (.docx) or text file.",
        )

    if kind == "text":
        return raw.decode("utf-8", errors="replace")

    try:
        if kind == "docx":
            return extract_docx_text(raw)
        text = extract_pdf_text(raw)
    except Exception as e:
        logger.warning(f"{kind.upper()} decoding failed: {e}")
        # Supported kind, unreadable file: nothing could be extracted
        raise DocumentParseError(
            "empty_extraction_result",
            f"{kind.upper()} parsing failed: the file appears to be corrupt or is not a valid {kind.upper()}.",
        ) from e

    if len(text.strip()) < get_settings().pdf_min_text_chars:
        raise DocumentParseError(
            "empty_extraction_result",
            "PDF appears to have no extractable text. OCR is not supported; "
            "please upload a Word or text version of the resume.",
        )
    return text


def parse_document(raw: bytes, filename: Optional[str] = None, content_type: Optional[str] = None) -> DocumentParseResult:
    """Decode `raw` according to its filename/content type and parse it."""
    try:
        text = decode_document(raw or b"", filename or "", content_type or "")
    except DocumentParseError as e:
        logger.warning(f"Document rejected ({e.kind}): {e.message}")
        return DocumentParseResult(success=False, errors=[e.message], error_kind=e.kind)

    if not text.strip():
        return DocumentParseResult(success=False, errors=[EMPTY_TEXT_MESSAGE], error_kind="empty_extraction_result")

    return parse_text(text)
