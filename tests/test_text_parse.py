import re

import pytest

from folio_ingest.core.text_parser import extract_profile, parse_text
from folio_ingest.core.text_patterns import extract_date_range


SCENARIO_TEXT = (
    "Jane Roe\njane@x.com\n555-123-4567\n\nSUMMARY\nBuilds things.\n\n"
    "EXPERIENCE\nSenior Dev | Acme | Jan 2020 - Present\nShipped stuff."
)


def test_end_to_end_contact_summary_and_current_job():
    resp = parse_text(SCENARIO_TEXT)
    assert resp.success is True
    assert resp.errors == []

    data = resp.extracted_data
    assert data.personal_info.full_name == "Jane Roe"
    assert data.personal_info.email == "jane@x.com"
    assert re.fullmatch(r"\d{3}-\d{3}-\d{4}", data.personal_info.phone)

    assert len(data.experience) == 1
    job = data.experience[0]
    assert job.id == "exp-1"
    assert job.title == "Senior Dev"
    assert job.company == "Acme"
    assert job.current is True
    assert job.start_date == "Jan 2020"
    assert job.end_date is None
    # 'Shipped stuff.' is too short to count as description
    assert job.description is None


def test_summary_section_content_is_used():
    data = extract_profile(SCENARIO_TEXT)
    assert data.summary == "SUMMARY\nBuilds things."


def test_missing_sections_are_omitted_and_warned():
    resp = parse_text(SCENARIO_TEXT)
    data = resp.extracted_data

    assert data.education is None
    assert data.skills is None
    assert "No education entries detected in resume" in resp.warnings
    assert "No skills detected in resume" in resp.warnings


def test_parse_is_idempotent():
    assert parse_text(SCENARIO_TEXT) == parse_text(SCENARIO_TEXT)
    assert extract_profile(SCENARIO_TEXT).model_dump() == extract_profile(SCENARIO_TEXT).model_dump()


@pytest.mark.parametrize("text", ["", "   ", "\n\n\t  \n"])
def test_empty_text_is_a_failure_result(text):
    resp = parse_text(text)

    assert resp.success is False
    assert resp.error_kind == "empty_extraction_result"
    assert resp.errors == ["No text content could be extracted from the document."]
    assert resp.extracted_data.model_dump(exclude_none=True) == {}


@pytest.mark.parametrize(
    "text",
    [
        "|||",
        "\x00\x01",
        "2020-2021",
        "a" * 10000,
        "• • •\n- - -",
        "SKILLS\n-, ;",
        "EXPERIENCE\n| | Jan 2020",
    ],
)
def test_parse_never_raises(text):
    resp = parse_text(text)
    assert resp.success is True


def test_personal_info_omitted_when_nothing_found():
    data = extract_profile("resume\nmy cv\nab")
    assert data.personal_info is None


def test_name_skips_resume_and_contact_lines():
    text = "RESUME\njane@x.com\n(555) 123-4567\nJane Q. Roe\nEXPERIENCE"
    info = extract_profile(text).personal_info

    assert info.full_name == "Jane Q. Roe"
    assert info.email == "jane@x.com"
    assert info.phone == "(555) 123-4567"


def test_name_only_from_first_five_lines():
    text = "jane@x.com\n555-123-4567\nresume\nmy cv\nx\nJane Roe"
    info = extract_profile(text).personal_info

    assert info.full_name is None
    assert info.email == "jane@x.com"


def test_name_length_bounds():
    text = "JR\n" + "J" * 50 + "\nJane Roe"
    assert extract_profile(text).personal_info.full_name == "Jane Roe"


def test_first_email_and_phone_win():
    text = "Jane Roe\nfirst@x.com second@y.org\n+1 555-111-2222 / 555-333-4444"
    info = extract_profile(text).personal_info

    assert info.email == "first@x.com"
    assert info.phone.endswith("555-111-2222")


def test_links_are_extracted():
    text = (
        "Jane Roe\n"
        "https://www.linkedin.com/in/janeroe\n"
        "https://github.com/janeroe\n"
        "https://janeroe.dev"
    )
    info = extract_profile(text).personal_info

    assert info.linkedin == "https://www.linkedin.com/in/janeroe"
    assert info.github == "https://github.com/janeroe"
    assert info.website == "https://janeroe.dev"


def test_summary_falls_back_to_first_long_paragraph():
    para = (
        "Builder of reliable data pipelines and streaming systems for retail "
        "analytics teams across three continents since 2012."
    )
    assert len(para) > 100
    data = extract_profile(f"Alex Doe\n\n{para}")

    assert data.summary == para


def test_short_first_paragraph_gives_no_summary():
    para = "Builder of data pipelines for retail analytics teams since 2012."
    assert 50 < len(para) <= 100
    data = extract_profile(f"Alex Doe\n\n{para}")

    assert data.summary is None


def test_multiple_experience_entries_with_descriptions():
    text = (
        "EXPERIENCE\n"
        "Senior Engineer | TechCorp | Jan 2021 - Present\n"
        "• Led the platform team through a migration to event sourcing\n"
        "short line\n"
        "Engineer | StartupXYZ | Jun 2019 - Dec 2020\n"
        "• Optimized database queries improving performance by 40%\n"
        "Analyst | Bank | 2015 to 2018\n"
    )
    jobs = extract_profile(text).experience

    assert [j.id for j in jobs] == ["exp-1", "exp-2", "exp-3"]
    assert jobs[0].current is True
    assert jobs[0].description == "• Led the platform team through a migration to event sourcing"
    assert jobs[1].title == "Engineer"
    assert jobs[1].company == "StartupXYZ"
    assert jobs[1].start_date == "Jun 2019"
    assert jobs[1].end_date == "Dec 2020"
    assert jobs[1].current is False
    assert jobs[2].start_date == "2015"
    assert jobs[2].end_date == "2018"
    assert jobs[2].description is None


def test_experience_line_without_pipes_keeps_dates_only():
    jobs = extract_profile("EXPERIENCE\nJan 2019 - Mar 2020").experience

    assert len(jobs) == 1
    assert jobs[0].title is None
    assert jobs[0].company is None
    assert jobs[0].start_date == "Jan 2019"
    assert jobs[0].end_date == "Mar 2020"


def test_long_dated_line_is_description_not_boundary():
    long_line = "Delivered the Jan 2020 relaunch of the storefront " + "x" * 60
    assert len(long_line) >= 100
    text = f"EXPERIENCE\nDev | Acme | 2018 - 2020\n{long_line}"
    jobs = extract_profile(text).experience

    assert len(jobs) == 1
    assert jobs[0].description == long_line


@pytest.mark.parametrize(
    "line, expected",
    [
        ("Senior Dev | Acme | Jan 2020 - Present", ("Jan 2020", None, True)),
        ("Senior Dev | Acme | Jan 2020 to current", ("Jan 2020", None, True)),
        ("Senior Dev | Acme | Jan 2020 – Now", ("Jan 2020", None, True)),
        ("Dev | Acme | Jan 2018 - Dec 2019 | now at Beta", ("Jan 2018", "Dec 2019", False)),
        ("Current role | Acme | Jan 2018 - Dec 2019", ("Jan 2018", "Dec 2019", False)),
        ("Dev | Acme | Jan 2018 - nowhere", ("Jan 2018", None, False)),
    ],
)
def test_date_range_ongoing_only_when_it_closes_the_range(line, expected):
    assert extract_date_range(line) == expected


def test_later_now_keeps_real_end_date():
    jobs = extract_profile("EXPERIENCE\nDev | Acme | Jan 2018 - Dec 2019 | now at Beta").experience

    assert jobs[0].start_date == "Jan 2018"
    assert jobs[0].end_date == "Dec 2019"
    assert jobs[0].current is False


def test_slash_dates_open_entries():
    jobs = extract_profile("EXPERIENCE\nDev | Acme | 1/15/2019 - 3/1/2020").experience

    assert jobs[0].start_date == "1/15/2019"
    assert jobs[0].end_date == "3/1/2020"


def test_education_is_one_coarse_entry():
    text = "EDUCATION\nBSc Computer Science\nState University 2010 - 2014"
    education = extract_profile(text).education

    assert len(education) == 1
    assert education[0].id == "edu-1"
    assert education[0].description == text
    assert education[0].institution is None


def test_only_first_section_of_a_type_is_used():
    text = "EDUCATION\nFirst U\nSKILLS\nPython\nEDUCATION\nSecond U"
    education = extract_profile(text).education

    assert education[0].description == "EDUCATION\nFirst U"
