"""Tests for header-driven and content-driven section segmentation."""

from resume_parser.core.patterns import primary_library, robust_library
from resume_parser.core.schemas import SectionKind
from resume_parser.core.sections import (
    find_header_matches,
    identify_sections,
    is_header_line,
    locate_sections_fuzzy,
)


def test_repeated_headers_are_concatenated_in_order():
    text = (
        "Jane Doe\n\n"
        "PROFESSIONAL EXPERIENCE\nAcme\n\n"
        "EDUCATION\nMIT\n\n"
        "PROFESSIONAL EXPERIENCE\nGlobex"
    )
    sections = identify_sections(text, primary_library())
    assert sections[SectionKind.EXPERIENCE] == "Acme\n\nGlobex"
    assert sections[SectionKind.EDUCATION] == "MIT"


def test_compound_header_with_qualifier():
    matches = find_header_matches("WORK EXPERIENCE\nAcme", primary_library())
    assert len(matches) == 1
    assert matches[0].kind == SectionKind.EXPERIENCE
    assert matches[0].compound


def test_sentence_mentioning_a_keyword_is_not_a_header():
    text = "EXPERIENCE\nGained hands-on experience\nwith Python"
    matches = find_header_matches(text, primary_library())
    assert [m.start for m in matches] == [0]


def test_letter_spaced_header():
    sections = identify_sections("E D U C A T I O N\nState University", primary_library())
    assert sections[SectionKind.EDUCATION] == "State University"


def test_colon_header():
    sections = identify_sections("Skills:\nPython, Go", primary_library())
    assert sections[SectionKind.SKILLS] == "Python, Go"


def test_empty_body_differs_from_missing_section():
    sections = identify_sections("EDUCATION\nSKILLS\nPython, Go", primary_library())
    assert sections[SectionKind.EDUCATION] == ""
    assert sections[SectionKind.SKILLS] == "Python, Go"
    assert SectionKind.EXPERIENCE not in sections


def test_languages_become_skills_without_skills_header():
    sections = identify_sections("LANGUAGES\nEnglish, Spanish", primary_library())
    assert sections[SectionKind.SKILLS] == "English, Spanish"
    assert SectionKind.LANGUAGES not in sections


def test_languages_dropped_when_skills_header_present():
    text = "SKILLS\nPython, Go\n\nLANGUAGES\nEnglish, Spanish"
    sections = identify_sections(text, primary_library())
    assert sections[SectionKind.SKILLS] == "Python, Go"


def test_inline_colon_header_in_robust_tier_only():
    text = "Skills: Python, Go"
    assert identify_sections(text, primary_library()) == {}
    assert identify_sections(text, robust_library())[SectionKind.SKILLS] == "Python, Go"


def test_primary_without_headers_is_empty():
    assert identify_sections("Jane Doe\nAcme Corp\nJan 2020 - Present", primary_library()) == {}


def test_fuzzy_location_from_content_signals():
    text = (
        "Jane Doe\n"
        "Acme Corp\n"
        "Jan 2020 - Present\n"
        "Built things\n"
        "State University\n"
        "Python, Go, SQL"
    )
    sections = identify_sections(text, robust_library())
    assert "State University" in sections[SectionKind.EDUCATION]
    assert "Jan 2020 - Present" in sections[SectionKind.EXPERIENCE]
    assert "Python, Go, SQL" in sections[SectionKind.SKILLS]


def test_fuzzy_skills_line_with_date_is_not_skills():
    sections = locate_sections_fuzzy("Acme, Globex, Initech 2019", robust_library())
    assert SectionKind.SKILLS not in sections
    assert SectionKind.EXPERIENCE in sections


def test_is_header_line():
    assert is_header_line("  TECHNICAL SKILLS  ", primary_library())
    assert not is_header_line("Senior Developer, Acme Corp", primary_library())


def test_empty_text():
    assert identify_sections("", primary_library()) == {}
    assert identify_sections("", robust_library()) == {}
