from typing import Optional

from folio_ingest.core.schemas import PersonalInfo, ProfileRecord, Theme


COMPLETION_SECTIONS = 6
SUMMARY_COMPLETE_LEN = 50


def _merge_fields(existing, imported, model):
    if existing is None and imported is None:
        return None
    merged = (existing or model()).model_dump(exclude_none=True)
    merged.update((imported or model()).model_dump(exclude_none=True))
    return model(**merged)


def apply_import(existing: ProfileRecord, imported: ProfileRecord) -> ProfileRecord:
    """
    Apply a partial record (parse or mapping output) onto an existing one.

    Top-level fields present in `imported` replace the existing ones;
    personal info and theme are merged field by field, imported winning.
    """
    incoming = imported.model_copy(deep=True)
    updates = {
        name: getattr(incoming, name)
        for name in ProfileRecord.model_fields
        if name not in ("personal_info", "theme") and getattr(incoming, name) is not None
    }
    updates["personal_info"] = _merge_fields(existing.personal_info, imported.personal_info, PersonalInfo)
    updates["theme"] = _merge_fields(existing.theme, imported.theme, Theme)
    return existing.model_copy(update=updates, deep=True)


def has_data(record: ProfileRecord) -> bool:
    info: Optional[PersonalInfo] = record.personal_info
    return bool(
        (info and (info.full_name or info.email))
        or record.summary
        or record.experience
        or record.education
        or record.skills
    )


def completion_percentage(record: ProfileRecord) -> int:
    """Share of the six builder sections that are filled in, rounded."""
    info = record.personal_info
    completed = 0

    # Personal info needs both name and email
    if info and info.full_name and info.email:
        completed += 1
    if record.summary and len(record.summary) > SUMMARY_COMPLETE_LEN:
        completed += 1
    if record.experience:
        completed += 1
    if record.education:
        completed += 1
    if record.skills:
        completed += 1
    if record.projects or record.certifications:
        completed += 1

    return round(completed / COMPLETION_SECTIONS * 100)


def sample_resume_text() -> str:
    return """John Smith
Senior Software Engineer

Email: john.smith@email.com
Phone: (555) 123-4567
Location: San Francisco, CA

SUMMARY
Software engineer with 8+ years building full-stack web applications and cloud services. Known for delivering scalable solutions that serve millions of users.

EXPERIENCE

Senior Software Engineer | TechCorp Inc. | Jan 2021 - Present
• Lead development of microservices architecture serving 10M+ active users
• Mentor junior developers and establish engineering best practices
• Implement CI/CD pipelines that reduced deployment time by 75%

Software Engineer | StartupXYZ | Jun 2019 - Dec 2020
• Developed customer-facing web applications using modern JavaScript frameworks
• Optimized database queries improving application performance by 40%

EDUCATION

Bachelor of Science in Computer Science | University of California, Berkeley | 2013 - 2017
• Graduated Magna Cum Laude

SKILLS

JavaScript, TypeScript, Python, Java
React, Vue.js, Node.js, Django
PostgreSQL, MongoDB, Redis
"""
