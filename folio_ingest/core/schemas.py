from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, Dict, List, Literal, Optional


SectionType = Literal[
    "personal", "summary", "experience", "education", "skills",
    "projects", "certifications", "unknown",
]
ErrorKind = Literal["unsupported_input_kind", "empty_extraction_result"]
ConfidenceScore = float  # 0.0 to 1.0


class Section(BaseModel):
    """A run of lines that belong to one detected resume section."""
    type: SectionType
    content: str = Field(..., description="Section lines joined with newlines, header line included")
    confidence: ConfidenceScore = Field(..., ge=0.0, le=1.0, description="Diagnostic only, never gates extraction")


# ---------------------------------------------------------------------------
# Profile record. None means "not extracted"; "" / [] means present but blank.
# ---------------------------------------------------------------------------

class PersonalInfo(BaseModel):
    full_name: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    whatsapp: Optional[str] = None
    avatar_url: Optional[str] = None


class Experience(BaseModel):
    id: str
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None  # MM/YYYY, YYYY or as written
    end_date: Optional[str] = None
    current: bool = False
    description: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _current_has_no_end(self) -> "Experience":
        if self.current and self.end_date is not None:
            self.end_date = None
        return self


class Education(BaseModel):
    id: str
    institution: Optional[str] = None
    degree: Optional[str] = None
    field: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None
    gpa: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)


class Skill(BaseModel):
    id: str
    name: str
    level: Optional[int] = Field(default=None, ge=1, le=10)
    category: Optional[str] = None
    years_of_experience: Optional[float] = None
    certified: bool = False


class Certificate(BaseModel):
    id: str
    name: str
    issuer: Optional[str] = None
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    credential_id: Optional[str] = None
    url: Optional[str] = None


class Language(BaseModel):
    id: str
    name: str
    proficiency: Optional[str] = None


class Project(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    github_url: Optional[str] = None
    featured: bool = False


class Theme(BaseModel):
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    accent_color: Optional[str] = None
    font_family: Optional[str] = None
    template: Optional[str] = None


class ProfileRecord(BaseModel):
    personal_info: Optional[PersonalInfo] = None
    summary: Optional[str] = None
    experience: Optional[List[Experience]] = None
    education: Optional[List[Education]] = None
    skills: Optional[List[Skill]] = None
    projects: Optional[List[Project]] = None
    certifications: Optional[List[Certificate]] = None
    languages: Optional[List[Language]] = None
    theme: Optional[Theme] = None


class DocumentParseResult(BaseModel):
    success: bool
    raw_text: str = ""
    extracted_data: ProfileRecord = Field(default_factory=ProfileRecord)
    errors: List[str] = Field(default_factory=list)
    error_kind: Optional[ErrorKind] = None
    warnings: List[str] = Field(default_factory=list, description="Sections the heuristics could not populate")


# ---------------------------------------------------------------------------
# External professional-network payload (camelCase on the wire)
# ---------------------------------------------------------------------------

class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PreferredLocale(_Payload):
    country: Optional[str] = None
    language: Optional[str] = None


class LocalizedText(_Payload):
    localized: Dict[str, str] = Field(default_factory=dict)
    preferred_locale: Optional[PreferredLocale] = Field(default=None, alias="preferredLocale")


class NamedPlace(_Payload):
    name: Optional[str] = None


class ProfilePicture(_Payload):
    display_image: Optional[str] = Field(default=None, alias="displayImage")


class LinkedInProfile(_Payload):
    id: str
    first_name: Optional[LocalizedText] = Field(default=None, alias="firstName")
    last_name: Optional[LocalizedText] = Field(default=None, alias="lastName")
    headline: Optional[LocalizedText] = None
    summary: Optional[LocalizedText] = None
    profile_picture: Optional[ProfilePicture] = Field(default=None, alias="profilePicture")
    location: Optional[NamedPlace] = None
    industry_name: Optional[str] = Field(default=None, alias="industryName")


class PartialDate(_Payload):
    month: Optional[int] = Field(default=None, ge=1, le=12)
    year: int


class LinkedInPosition(_Payload):
    id: Optional[int] = None
    title: str
    company_name: str = Field(alias="companyName")
    description: Optional[str] = None
    start_date: PartialDate = Field(alias="startDate")
    end_date: Optional[PartialDate] = Field(default=None, alias="endDate")
    is_current: bool = Field(default=False, alias="isCurrent")
    location: Optional[NamedPlace] = None


class LinkedInEducation(_Payload):
    id: Optional[int] = None
    school_name: str = Field(alias="schoolName")
    degree_name: Optional[str] = Field(default=None, alias="degreeName")
    field_of_study: Optional[str] = Field(default=None, alias="fieldOfStudy")
    start_date: Optional[PartialDate] = Field(default=None, alias="startDate")
    end_date: Optional[PartialDate] = Field(default=None, alias="endDate")
    description: Optional[str] = None


class LinkedInSkill(_Payload):
    name: str
    endorsement_count: Optional[int] = Field(default=None, alias="endorsementCount")


class Recommender(_Payload):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    headline: Optional[str] = None
    profile_picture: Optional[str] = Field(default=None, alias="profilePicture")


class LinkedInRecommendation(_Payload):
    id: str
    text: str
    recommender: Optional[Recommender] = None
    relationship_to_recommendee: Optional[str] = Field(default=None, alias="relationshipToRecommendee")
    created_at: Optional[str] = Field(default=None, alias="createdAt")


class PostEngagement(_Payload):
    likes: int = 0
    comments: int = 0
    shares: int = 0


class LinkedInPost(_Payload):
    id: str
    text: str
    published_at: Optional[str] = Field(default=None, alias="publishedAt")
    author: Optional[NamedPlace] = None
    engagement: Optional[PostEngagement] = None
    url: Optional[str] = None


class LinkedInImportData(_Payload):
    profile: LinkedInProfile
    positions: List[LinkedInPosition] = Field(default_factory=list)
    education: List[LinkedInEducation] = Field(default_factory=list)
    skills: List[LinkedInSkill] = Field(default_factory=list)
    recommendations: List[LinkedInRecommendation] = Field(default_factory=list)
    posts: List[LinkedInPost] = Field(default_factory=list)


class LinkedInMappingResult(BaseModel):
    mapped: ProfileRecord
    recommendations: List[LinkedInRecommendation] = Field(default_factory=list)
    posts: List[LinkedInPost] = Field(default_factory=list)
    unmapped: Dict[str, Any] = Field(default_factory=dict)


class MergeFlags(_Payload):
    overwrite_personal_info: bool = Field(default=False, alias="overwritePersonalInfo")
    merge_experience: bool = Field(default=False, alias="mergeExperience")
    merge_education: bool = Field(default=False, alias="mergeEducation")
    merge_skills: bool = Field(default=False, alias="mergeSkills")
    enhance_summary: bool = Field(default=False, alias="enhanceSummary")


class ProfileStatus(BaseModel):
    has_data: bool
    completion_percentage: int = Field(..., ge=0, le=100)
