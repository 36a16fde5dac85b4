import logging

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from folio_ingest.core.linkedin_mapper import map_linkedin_to_profile, merge_with_existing_profile
from folio_ingest.core.schemas import LinkedInImportData, LinkedInMappingResult, MergeFlags, ProfileRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/linkedin", tags=["linkedin"])


class MergeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    existing: ProfileRecord = Field(default_factory=ProfileRecord)
    payload: LinkedInImportData
    flags: MergeFlags = Field(default_factory=MergeFlags)


@router.post(
    "/map",
    response_model=LinkedInMappingResult,
    response_model_exclude_none=True,
    summary="Map LinkedIn Payload",
    description="Map an already-fetched LinkedIn payload onto the profile record schema.",
)
def map_payload(payload: LinkedInImportData):
    return map_linkedin_to_profile(payload)


@router.post(
    "/merge",
    response_model=ProfileRecord,
    response_model_exclude_none=True,
    summary="Merge LinkedIn Payload",
    description="Map a LinkedIn payload and merge it into an existing profile record under the given flags.",
)
def merge_payload(body: MergeRequest):
    logger.info(
        f"Merging LinkedIn profile {body.payload.profile.id} with flags {body.flags.model_dump()}",
        extra={"route": "/linkedin/merge"},
    )
    return merge_with_existing_profile(body.existing, body.payload, body.flags)
