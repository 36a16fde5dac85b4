"""
Map a professional-network (LinkedIn-shaped) payload onto the internal
ProfileRecord, and merge the mapped record into an existing one.

Everything here is pure: inputs are never mutated and every call returns new
models. Missing payload data maps to None / [] instead of raising.

Merge precedence (no conflict errors, only these rules):
  personal info   overwrite -> mapped wins where set; else existing wins
  experience      merge -> existing + mapped; else mapped (existing if mapped empty)
  education       same as experience
  skills          merge -> case-insensitive union, level = max; else replace
  summary         enhance -> mapped (existing if mapped blank); else existing
  certs/languages mapped wins only when non-empty
  projects/theme  always existing
"""

from typing import Dict, List, Optional, TypeVar
import logging
import re

from folio_ingest.core.schemas import (
    Certificate,
    Education,
    Experience,
    Language,
    LinkedInEducation,
    LinkedInImportData,
    LinkedInMappingResult,
    LinkedInPosition,
    LinkedInPost,
    LinkedInProfile,
    LinkedInRecommendation,
    LinkedInSkill,
    LocalizedText,
    MergeFlags,
    PartialDate,
    PersonalInfo,
    ProfileRecord,
    Skill,
)

logger = logging.getLogger(__name__)

PROFILE_URL_TEMPLATE = "https://linkedin.com/in/{id}"
DEFAULT_SKILL_CATEGORY = "Professional"
DEFAULT_SKILL_YEARS = 1

# Endorsement count -> level. Listed profile skills never go below 2.
ENDORSEMENT_LEVELS = ((50, 9), (25, 8), (15, 7), (10, 6), (5, 5), (2, 4), (1, 3))
MIN_SKILL_LEVEL = 2

STRENGTH_KEYWORDS = (
    "exceptional", "outstanding", "innovative", "strategic", "leadership",
    "results-driven", "analytical", "collaborative", "creative", "dedicated",
    "experienced", "knowledgeable", "professional", "reliable", "skilled",
)
TOPIC_KEYWORDS = (
    "AI", "artificial intelligence", "machine learning", "data science", "blockchain",
    "cloud computing", "digital transformation", "automation", "cybersecurity",
    "software development", "agile", "devops", "innovation", "strategy",
    "leadership", "management", "growth", "startup", "entrepreneurship",
)
MAX_STRENGTH_SENTENCE_LEN = 150
MAX_KEY_PHRASES = 5
SHOWN_KEY_PHRASES = 3
SHOWN_TOPICS = 3

STRENGTHS_HEADER = "**Key Strengths (from LinkedIn recommendations):**"
TOPICS_HEADER = "**Areas of Expertise & Thought Leadership:**"

SENTENCE_SPLIT_RE = re.compile(r"[.!?]")

T = TypeVar("T")


# ============================================================================
# Field mapping
# ============================================================================

def localized_text(value: Optional[LocalizedText]) -> str:
    """
    Pick the preferred-locale entry ('en_US'), else the first localized value.

    A missing or half-filled preferred locale falls back instead of failing.
    """
    if value is None or not value.localized:
        return ""
    locale = value.preferred_locale
    if locale is not None and locale.language and locale.country:
        key = f"{locale.language}_{locale.country}"
        if value.localized.get(key):
            return value.localized[key]
    return next(iter(value.localized.values()), "") or ""


def _or_none(value: Optional[str]) -> Optional[str]:
    return value if value else None


def map_profile(profile: LinkedInProfile) -> PersonalInfo:
    full_name = f"{localized_text(profile.first_name)} {localized_text(profile.last_name)}".strip()
    return PersonalInfo(
        full_name=_or_none(full_name),
        title=_or_none(localized_text(profile.headline)),
        location=_or_none(profile.location.name if profile.location else None),
        # Email and phone are not exposed by the network API
        avatar_url=_or_none(profile.profile_picture.display_image if profile.profile_picture else None),
        linkedin=PROFILE_URL_TEMPLATE.format(id=profile.id),
    )


def format_partial_date(date: Optional[PartialDate]) -> Optional[str]:
    """MM/YYYY when the month is known, else YYYY."""
    if date is None:
        return None
    if date.month:
        return f"{date.month:02d}/{date.year}"
    return str(date.year)


def map_positions(positions: List[LinkedInPosition]) -> List[Experience]:
    experiences: List[Experience] = []
    for index, position in enumerate(positions):
        ident = position.id if position.id is not None else index
        experiences.append(
            Experience(
                id=f"linkedin-exp-{ident}",
                title=position.title,
                company=position.company_name,
                location=_or_none(position.location.name if position.location else None),
                start_date=format_partial_date(position.start_date),
                end_date=None if position.is_current else format_partial_date(position.end_date),
                current=position.is_current,
                description=position.description or "",
            )
        )
    return experiences


def map_education(education: List[LinkedInEducation]) -> List[Education]:
    mapped: List[Education] = []
    for index, edu in enumerate(education):
        ident = edu.id if edu.id is not None else index
        mapped.append(
            Education(
                id=f"linkedin-edu-{ident}",
                institution=edu.school_name,
                degree=edu.degree_name or "",
                field=edu.field_of_study or "",
                start_date=str(edu.start_date.year) if edu.start_date else None,
                end_date=str(edu.end_date.year) if edu.end_date else None,
                description=edu.description or "",
            )
        )
    return mapped


def estimate_skill_level(endorsement_count: int) -> int:
    for threshold, level in ENDORSEMENT_LEVELS:
        if endorsement_count >= threshold:
            return level
    return MIN_SKILL_LEVEL


def map_skills(skills: List[LinkedInSkill]) -> List[Skill]:
    return [
        Skill(
            id=f"linkedin-skill-{index}",
            name=skill.name,
            level=estimate_skill_level(skill.endorsement_count or 0),
            category=DEFAULT_SKILL_CATEGORY,
            years_of_experience=DEFAULT_SKILL_YEARS,
            certified=False,
        )
        for index, skill in enumerate(skills)
    ]


def map_certificates(payload: LinkedInImportData) -> List[Certificate]:
    # Basic API access exposes no certifications; left for manual entry
    return []


def map_languages(payload: LinkedInImportData) -> List[Language]:
    # Basic API access exposes no language proficiency; left for manual entry
    return []


# ============================================================================
# Enhanced summary
# ============================================================================

def _contains(text: str, keyword: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(keyword.lower())}(?!\w)", text.lower()) is not None


def extract_key_phrases(recommendations: List[LinkedInRecommendation]) -> List[str]:
    """Sentences from recommendations that contain a laudatory keyword, one per keyword, top 5."""
    phrases: List[str] = []
    seen_keywords = set()

    for rec in recommendations:
        sentences = SENTENCE_SPLIT_RE.split(rec.text)
        for keyword in STRENGTH_KEYWORDS:
            if keyword in seen_keywords or not _contains(rec.text, keyword):
                continue
            sentence = next((s for s in sentences if _contains(s, keyword)), None)
            if sentence and len(sentence) < MAX_STRENGTH_SENTENCE_LEN:
                seen_keywords.add(keyword)
                phrase = sentence.strip()
                if phrase not in phrases:
                    phrases.append(phrase)

    return phrases[:MAX_KEY_PHRASES]


def extract_topics(posts: List[LinkedInPost]) -> List[str]:
    """Unique topic keywords mentioned across posts, in keyword-table order of discovery."""
    topics: List[str] = []
    for post in posts:
        for keyword in TOPIC_KEYWORDS:
            if keyword not in topics and _contains(post.text, keyword):
                topics.append(keyword)
    return topics


def _bullets(header: str, items: List[str]) -> str:
    return header + "\n" + "\n".join(f"• {item}" for item in items)


def create_enhanced_summary(
    original_summary: str,
    recommendations: List[LinkedInRecommendation],
    posts: List[LinkedInPost],
) -> str:
    """
    Append 'Key Strengths' and 'Areas of Expertise' blocks to a summary.

    Each block is added only when it has at least one line; with nothing to
    add the original summary is returned unchanged.
    """
    blocks: List[str] = []

    phrases = extract_key_phrases(recommendations)
    if phrases:
        blocks.append(_bullets(STRENGTHS_HEADER, phrases[:SHOWN_KEY_PHRASES]))

    topics = extract_topics(posts)
    if topics:
        blocks.append(_bullets(TOPICS_HEADER, topics[:SHOWN_TOPICS]))

    if not blocks:
        return original_summary
    if original_summary:
        blocks.insert(0, original_summary)
    return "\n\n".join(blocks)


# ============================================================================
# Whole-payload mapping and merge
# ============================================================================

def map_linkedin_to_profile(payload: LinkedInImportData) -> LinkedInMappingResult:
    profile = payload.profile
    summary = create_enhanced_summary(
        localized_text(profile.summary),
        payload.recommendations,
        payload.posts,
    )

    mapped = ProfileRecord(
        personal_info=map_profile(profile),
        summary=summary,
        experience=map_positions(payload.positions),
        education=map_education(payload.education),
        skills=map_skills(payload.skills),
        certifications=map_certificates(payload),
        languages=map_languages(payload),
    )
    logger.debug(
        f"Mapped LinkedIn profile {profile.id}: {len(payload.positions)} positions, "
        f"{len(payload.education)} education, {len(payload.skills)} skills"
    )

    return LinkedInMappingResult(
        mapped=mapped,
        recommendations=list(payload.recommendations),
        posts=list(payload.posts),
        unmapped={
            "original_profile": profile.model_dump(by_alias=True, exclude_none=True),
            "unmapped_fields": {
                "industry_name": profile.industry_name,
                "position_locations": [p.location.name for p in payload.positions if p.location and p.location.name],
            },
        },
    )


def _merge_personal_info(
    existing: Optional[PersonalInfo],
    mapped: Optional[PersonalInfo],
    overwrite: bool,
) -> Optional[PersonalInfo]:
    if existing is None and mapped is None:
        return None
    base = (existing or PersonalInfo()).model_dump(exclude_none=True)
    incoming = (mapped or PersonalInfo()).model_dump(exclude_none=True)

    # None means "not extracted", so only set fields take part in precedence
    merged = {**base, **incoming} if overwrite else {**incoming, **base}
    return PersonalInfo(**merged)


def _with_unique_ids(items: List[T]) -> List[T]:
    """
    Suffix colliding ids ('linkedin-skill-0' -> 'linkedin-skill-0-2').

    Earlier entries keep their id, so existing records stay stable across
    repeated imports of index-keyed payload entries.
    """
    seen = set()
    unique: List[T] = []
    for item in items:
        ident, n = item.id, 1
        while ident in seen:
            n += 1
            ident = f"{item.id}-{n}"
        seen.add(ident)
        unique.append(item if ident == item.id else item.model_copy(update={"id": ident}))
    return unique


def _concat_or_replace(existing: Optional[List[T]], mapped: Optional[List[T]], merge: bool) -> Optional[List[T]]:
    if merge:
        if existing is None and mapped is None:
            return None
        # No content dedup by company+date: duplicate entries are accepted, ids are not
        return _with_unique_ids([item.model_copy(deep=True) for item in (existing or []) + (mapped or [])])
    if mapped:
        return [item.model_copy(deep=True) for item in mapped]
    return [item.model_copy(deep=True) for item in existing] if existing is not None else None


def merge_unique_skills(existing: List[Skill], incoming: List[Skill]) -> List[Skill]:
    """
    Union by case-insensitive name. On collision the existing record is kept
    with level raised to the higher of the two. Appended skills whose id is
    already taken get a suffixed id.
    """
    merged: List[Skill] = [skill.model_copy(deep=True) for skill in existing]
    by_name: Dict[str, int] = {}
    for i, skill in enumerate(merged):
        by_name.setdefault(skill.name.lower(), i)

    for skill in incoming:
        key = skill.name.lower()
        if key in by_name:
            i = by_name[key]
            current = merged[i]
            levels = [lvl for lvl in (current.level, skill.level) if lvl is not None]
            if levels and max(levels) != current.level:
                merged[i] = current.model_copy(update={"level": max(levels)}, deep=True)
        else:
            by_name[key] = len(merged)
            merged.append(skill.model_copy(deep=True))

    return _with_unique_ids(merged)


def _pick_non_empty(existing: Optional[List[T]], mapped: Optional[List[T]]) -> Optional[List[T]]:
    if mapped:
        return [item.model_copy(deep=True) for item in mapped]
    return [item.model_copy(deep=True) for item in existing] if existing is not None else None


def merge_profiles(existing: ProfileRecord, mapped: ProfileRecord, flags: MergeFlags) -> ProfileRecord:
    """Merge an already-mapped record into `existing`; returns a new record."""
    if flags.merge_skills:
        skills = merge_unique_skills(existing.skills or [], mapped.skills or [])
        if existing.skills is None and mapped.skills is None:
            skills = None
    else:
        skills = _pick_non_empty(existing.skills, mapped.skills)

    if flags.enhance_summary:
        summary = mapped.summary if mapped.summary else existing.summary
    else:
        summary = existing.summary

    return ProfileRecord(
        personal_info=_merge_personal_info(existing.personal_info, mapped.personal_info, flags.overwrite_personal_info),
        summary=summary,
        experience=_concat_or_replace(existing.experience, mapped.experience, flags.merge_experience),
        education=_concat_or_replace(existing.education, mapped.education, flags.merge_education),
        skills=skills,
        certifications=_pick_non_empty(existing.certifications, mapped.certifications),
        languages=_pick_non_empty(existing.languages, mapped.languages),
        projects=[p.model_copy(deep=True) for p in existing.projects] if existing.projects is not None else None,
        theme=existing.theme.model_copy(deep=True) if existing.theme is not None else None,
    )


def merge_with_existing_profile(
    existing: ProfileRecord,
    payload: LinkedInImportData,
    flags: Optional[MergeFlags] = None,
) -> ProfileRecord:
    """Map `payload` and merge it into `existing` under `flags` (all off by default)."""
    mapped = map_linkedin_to_profile(payload).mapped
    return merge_profiles(existing, mapped, flags or MergeFlags())

