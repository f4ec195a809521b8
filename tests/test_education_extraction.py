"""Tests for education extraction."""

from resume_parser.core.education_parser import extract_education, find_degree, institution_name
from resume_parser.core.patterns import primary_library, robust_library
from resume_parser.core.resume_parser import ResumeParser


DUAL_DEGREE_BODY = (
    "DePaul University, Chicago, Illinois\n"
    "Bachelor's in Computer Science\n"
    "2012 - 2016\n"
    "Velammal Engineering College, Chennai, India\n"
    "Bachelor's in Technology\n"
    "2009 - 2013"
)


def test_dual_degree_layout():
    education = extract_education(DUAL_DEGREE_BODY, primary_library())
    assert len(education) == 2

    first, second = education
    assert first.institution == "DePaul University"
    assert first.study_type == "Bachelor's"
    assert first.area == "Computer Science"
    assert (first.start_date, first.end_date) == ("2012", "2016")
    assert first.location == "Chicago, Illinois"

    assert second.institution == "Velammal Engineering College"
    assert second.area == "Technology"
    assert (second.start_date, second.end_date) == ("2009", "2013")
    assert second.location == "Chennai, India"


def test_degree_after_date_line():
    body = "DePaul University 2012 - 2016\nBachelor's in Computer Science"
    education = extract_education(body, primary_library())
    assert len(education) == 1
    assert education[0].institution == "DePaul University"
    assert education[0].area == "Computer Science"


def test_in_preferred_over_of():
    body = "State University\nBachelor of Science in Computer Science\n2015 - 2019"
    education = extract_education(body, primary_library())
    assert education[0].study_type == "Bachelor's"
    assert education[0].area == "Computer Science"


def test_primary_requires_institution_and_degree():
    body = "State University\n2015 - 2019"
    assert extract_education(body, primary_library()) == []

    education = extract_education(body, robust_library())
    assert len(education) == 1
    assert education[0].institution == "State University"
    assert education[0].study_type == ""


def test_undated_entries_only_in_robust_tier():
    body = "MIT\nBachelor of Science in Physics\nStanford University"
    assert extract_education(body, primary_library()) == []

    education = extract_education(body, robust_library())
    assert [(e.institution, e.study_type, e.area) for e in education] == [
        ("", "Bachelor's", "Physics"),
        ("Stanford University", "", ""),
    ]


def test_degree_priority_and_location():
    lib = primary_library()
    info = find_degree("Bachelor's in Computer Science, Chicago, Illinois", lib)
    assert (info.study_type, info.area, info.location) == ("Bachelor's", "Computer Science", "Chicago, Illinois")
    assert find_degree("Master's and Bachelor's", lib).study_type == "Master's"
    assert find_degree("PhD in Physics", lib).study_type == "PhD"
    assert not find_degree("Sales Associate", primary_library()).area


def test_abbreviated_degree_in_robust_tier():
    info = find_degree("B.S. in Biology", robust_library())
    assert (info.study_type, info.area) == ("Bachelor's", "Biology")
    assert not find_degree("B.S. in Biology", primary_library()).found


def test_institution_name_cut_at_comma():
    assert institution_name("• DePaul University, Chicago, Illinois") == "DePaul University"


def test_empty_body():
    assert extract_education("", primary_library()) == []
    assert extract_education(None, robust_library()) == []


MISSING_SECTION_TEXT = (
    "Jane Doe\n"
    "jane@x.com\n\n"
    "SUMMARY\n"
    "Backend engineer.\n\n"
    "State University\n"
    "Bachelor of Science in Computer Science\n"
    "2012 - 2016"
)


def test_robust_searches_full_text_without_education_section():
    assert extract_education(None, primary_library(), full_text=MISSING_SECTION_TEXT) == []

    education = extract_education(None, robust_library(), full_text=MISSING_SECTION_TEXT)
    assert len(education) == 1
    assert education[0].institution == "State University"
    assert education[0].area == "Computer Science"
    assert (education[0].start_date, education[0].end_date) == ("2012", "2016")


def test_degree_block_without_header_is_education_not_work():
    outcome = ResumeParser().parse_with_diagnostics(MISSING_SECTION_TEXT)
    assert outcome.tier == "robust"
    assert outcome.record.work == []
    assert outcome.record.education[0].institution == "State University"
