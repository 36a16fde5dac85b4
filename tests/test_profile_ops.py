from fastapi.testclient import TestClient

from folio_ingest.core.profile_ops import apply_import, completion_percentage, has_data, sample_resume_text
from folio_ingest.core.schemas import (
    Certificate,
    Education,
    Experience,
    PersonalInfo,
    ProfileRecord,
    Skill,
    Theme,
)
from folio_ingest.core.text_parser import parse_text
from folio_ingest.main import app

client = TestClient(app)

LONG_SUMMARY = "Platform engineer focused on reliable data systems and developer tooling."


def _full_record():
    return ProfileRecord(
        personal_info=PersonalInfo(full_name="Jane Roe", email="jane@x.com"),
        summary=LONG_SUMMARY,
        experience=[Experience(id="exp-1", title="Dev")],
        education=[Education(id="edu-1")],
        skills=[Skill(id="skill-1", name="Python")],
        certifications=[Certificate(id="c1", name="CKA")],
    )


# --- has_data ----------------------------------------------------------------

def test_empty_record_has_no_data():
    assert has_data(ProfileRecord()) is False


def test_name_or_email_counts_as_data():
    assert has_data(ProfileRecord(personal_info=PersonalInfo(email="jane@x.com"))) is True
    assert has_data(ProfileRecord(personal_info=PersonalInfo(full_name="Jane"))) is True


def test_phone_alone_is_not_data():
    assert has_data(ProfileRecord(personal_info=PersonalInfo(phone="555-123-4567"))) is False


def test_empty_lists_are_not_data():
    assert has_data(ProfileRecord(experience=[], skills=[], summary="")) is False


# --- completion --------------------------------------------------------------

def test_completion_bounds():
    assert completion_percentage(ProfileRecord()) == 0
    assert completion_percentage(_full_record()) == 100


def test_completion_rounds_single_section():
    record = ProfileRecord(skills=[Skill(id="skill-1", name="Python")])
    assert completion_percentage(record) == 17


def test_completion_needs_name_and_email_and_long_summary():
    record = ProfileRecord(
        personal_info=PersonalInfo(full_name="Jane Roe"),
        summary="Too short.",
    )
    assert completion_percentage(record) == 0


# --- apply_import ------------------------------------------------------------

def test_apply_import_replaces_present_fields_only():
    existing = _full_record()
    imported = ProfileRecord(
        personal_info=PersonalInfo(email="new@x.com", phone="555-000-1111"),
        skills=[Skill(id="skill-9", name="Go")],
    )
    result = apply_import(existing, imported)

    assert result.personal_info.full_name == "Jane Roe"
    assert result.personal_info.email == "new@x.com"
    assert result.personal_info.phone == "555-000-1111"
    assert [s.name for s in result.skills] == ["Go"]
    assert [e.id for e in result.experience] == ["exp-1"]
    assert result.summary == LONG_SUMMARY


def test_apply_import_blank_values_count_as_present():
    result = apply_import(_full_record(), ProfileRecord(experience=[], summary=""))
    assert result.experience == []
    assert result.summary == ""


def test_apply_import_merges_theme_fields():
    existing = ProfileRecord(theme=Theme(primary_color="#000", template="modern"))
    result = apply_import(existing, ProfileRecord(theme=Theme(template="classic")))

    assert result.theme.primary_color == "#000"
    assert result.theme.template == "classic"


def test_apply_import_does_not_mutate_inputs():
    existing = _full_record()
    imported = ProfileRecord(skills=[Skill(id="skill-9", name="Go")])
    before = existing.model_dump()

    result = apply_import(existing, imported)
    result.skills[0].name = "Changed"

    assert existing.model_dump() == before
    assert imported.skills[0].name == "Go"


# --- sample text -------------------------------------------------------------

def test_sample_resume_parses_fully():
    resp = parse_text(sample_resume_text())
    assert resp.success is True
    data = resp.extracted_data

    assert data.personal_info.full_name == "John Smith"
    assert data.personal_info.email == "john.smith@email.com"
    assert data.personal_info.phone == "(555) 123-4567"
    assert data.summary.startswith("SUMMARY\n")

    first, second = data.experience
    assert first.company == "TechCorp Inc."
    assert first.current is True
    assert len(first.description.split("\n")) == 3
    assert second.company == "StartupXYZ"
    assert (second.start_date, second.end_date) == ("Jun 2019", "Dec 2020")
    assert len(second.description.split("\n")) == 2

    assert [e.id for e in data.education] == ["edu-1"]
    names = [s.name for s in data.skills]
    assert "Python" in names
    assert "PostgreSQL" in names
    assert completion_percentage(data) == 83


# --- HTTP boundary -----------------------------------------------------------

def test_status_route():
    r = client.post("/profile/status", json=_full_record().model_dump(exclude_none=True))
    assert r.status_code == 200
    assert r.json() == {"has_data": True, "completion_percentage": 100}


def test_status_route_empty_record():
    r = client.post("/profile/status", json={})
    assert r.json() == {"has_data": False, "completion_percentage": 0}


def test_import_route():
    body = {
        "existing": {"personal_info": {"full_name": "Jane Roe"}, "summary": "Old."},
        "imported": {"personal_info": {"email": "jane@x.com"}, "skills": [{"id": "skill-1", "name": "Go"}]},
    }
    r = client.post("/profile/import", json=body)
    assert r.status_code == 200
    data = r.json()

    assert data["personal_info"] == {"full_name": "Jane Roe", "email": "jane@x.com"}
    assert data["summary"] == "Old."
    assert data["skills"][0]["name"] == "Go"


def test_sample_route():
    r = client.get("/profile/sample")
    assert r.status_code == 200
    assert r.json()["text"].startswith("John Smith")
