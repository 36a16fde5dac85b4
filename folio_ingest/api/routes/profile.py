from fastapi import APIRouter
from pydantic import BaseModel, Field

from folio_ingest.core.profile_ops import apply_import, completion_percentage, has_data, sample_resume_text
from folio_ingest.core.schemas import ProfileRecord, ProfileStatus

router = APIRouter(prefix="/profile", tags=["profile"])


class ImportRequest(BaseModel):
    existing: ProfileRecord = Field(default_factory=ProfileRecord)
    imported: ProfileRecord


@router.post("/import", response_model=ProfileRecord, response_model_exclude_none=True, summary="Apply Imported Data")
def import_profile(body: ImportRequest):
    return apply_import(body.existing, body.imported)


@router.post("/status", response_model=ProfileStatus, summary="Profile Completion")
def profile_status(record: ProfileRecord):
    return ProfileStatus(has_data=has_data(record), completion_percentage=completion_percentage(record))


@router.get("/sample", summary="Sample Resume Text")
def sample():
    return {"text": sample_resume_text()}
