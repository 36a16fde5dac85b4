from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    service_name: str
    log_level: str

    # Upload boundary
    max_upload_bytes: int
    # PDFs with less text than this are treated as scans without a text layer
    pdf_min_text_chars: int


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Safe if .env is missing
    load_dotenv()
    return Settings(
        service_name=os.getenv("SERVICE_NAME", "folio-ingest"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024))),
        pdf_min_text_chars=int(os.getenv("PDF_MIN_TEXT_CHARS", "50")),
    )
