import logging

from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel

from folio_ingest.config import get_settings
from folio_ingest.core.document_parser import parse_document
from folio_ingest.core.schemas import DocumentParseResult
from folio_ingest.core.text_parser import parse_text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

ERROR_STATUS = {
    "unsupported_input_kind": 415,
    "empty_extraction_result": 422,
}


class TextParseRequest(BaseModel):
    text: str


@router.post(
    "/parse",
    response_model=DocumentParseResult,
    response_model_exclude_none=True,
    summary="Parse Resume File",
    description="Extract a partial profile record from a resume file (DOCX, PDF, TXT or MD).",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "raw_text": "Jane Roe\njane@x.com\n...",
                        "extracted_data": {
                            "personal_info": {"full_name": "Jane Roe", "email": "jane@x.com", "phone": "555-123-4567"},
                            "experience": [
                                {
                                    "id": "exp-1",
                                    "title": "Senior Dev",
                                    "company": "Acme",
                                    "start_date": "Jan 2020",
                                    "current": True,
                                    "achievements": [],
                                    "skills": []
                                }
                            ]
                        },
                        "errors": [],
                        "warnings": ["No education entries detected in resume"]
                    }
                }
            }
        },
        400: {"description": "Empty file uploaded"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no extractable text"}
    }
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (DOCX, PDF, TXT or MD format)")
):
    """
    Parse a resume file into a partial profile record.

    **Supported formats:**
    - DOCX (.docx)
    - PDF (.pdf) - Text-layer extraction only, OCR not supported
    - TXT / MD (.txt, .md)

    Legacy Word (.doc) files are rejected as unsupported.
    """
    limit = get_settings().max_upload_bytes
    # One byte past the limit is enough to reject without buffering the rest
    raw = await file.read(limit + 1)
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    if len(raw) > limit:
        raise HTTPException(status_code=413, detail="File too large.")

    result = parse_document(raw, filename=file.filename, content_type=file.content_type)
    if not result.success:
        logger.warning(
            f"Upload rejected: {file.filename}",
            extra={"route": "/parse", "error_kind": result.error_kind or "-"},
        )
        raise HTTPException(status_code=ERROR_STATUS.get(result.error_kind, 422), detail=result.errors[0])
    return result


@router.post(
    "/parse/text",
    response_model=DocumentParseResult,
    response_model_exclude_none=True,
    summary="Parse Resume Text",
    description="Extract a partial profile record from already-decoded resume text. Failures come back as a result with success=false.",
)
def parse_resume_text(body: TextParseRequest):
    return parse_text(body.text)
