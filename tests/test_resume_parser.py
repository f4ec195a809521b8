"""End-to-end tests for the two-tier parser and record cleanup."""

from resume_parser.core.cleanup import clean_record
from resume_parser.core.resume_parser import (
    ResumeParser,
    collect_warnings,
    has_structural_content,
    parse,
)
from resume_parser.core.schemas import Basics, ResumeRecord, SkillGroup, WorkEntry, empty_record


FULL_RESUME = """Jane Doe | jane.doe@example.com | (555) 123-4567
Senior Software Engineer
San Francisco, CA

SUMMARY
Backend engineer focused on payments.

EXPERIENCE
Senior Developer, Acme Corp
Jan 2020 - Present
• Built the billing platform

EDUCATION
State University
Bachelor of Science in Computer Science
2012 - 2016

SKILLS
Languages: Python, Go
Tools: Docker, Kubernetes

PROJECTS
Shopping System | React, Node.js
• Built a cart

CERTIFICATIONS
AWS Certified Developer - Jan 2022
"""

NO_HEADER_RESUME = """John Smith
john@example.com

Software Engineer, Initech Solutions
Jan 2019 - Dec 2021
Built reporting tools
"""


class TestFullResume:

    def test_primary_tier_handles_well_formed_resume(self):
        outcome = ResumeParser().parse_with_diagnostics(FULL_RESUME)
        assert outcome.tier == "primary"
        assert outcome.sections_found == [
            "summary", "experience", "education", "skills", "projects", "certifications",
        ]

    def test_record_contents(self):
        record = parse(FULL_RESUME)

        assert record.basics.name == "Jane Doe"
        assert record.basics.label == "Senior Software Engineer"
        assert record.basics.email == "jane.doe@example.com"
        assert record.basics.location == "San Francisco, CA"
        assert record.basics.summary == "Backend engineer focused on payments."

        assert len(record.work) == 1
        assert record.work[0].position == "Senior Developer"
        assert record.work[0].company == "Acme Corp"
        assert record.work[0].end_date == "Present"

        assert record.education[0].institution == "State University"
        assert record.education[0].area == "Computer Science"

        assert [g.name for g in record.skills] == ["Languages", "Tools"]
        assert record.projects[0].name == "Shopping System"
        assert record.certifications[0].name == "AWS Certified Developer"
        assert record.certifications[0].date == "Jan 2022"

    def test_no_warnings_for_complete_resume(self):
        assert collect_warnings(parse(FULL_RESUME)) == []


class TestEscalation:

    def test_no_headers_escalates_to_robust(self):
        outcome = ResumeParser().parse_with_diagnostics(NO_HEADER_RESUME)
        assert outcome.tier == "robust"
        assert len(outcome.record.work) >= 1
        job = outcome.record.work[0]
        assert job.position == "Software Engineer"
        assert job.company == "Initech Solutions"
        assert (job.start_date, job.end_date) == ("Jan 2019", "Dec 2021")

    def test_robust_disabled_returns_primary_result(self):
        outcome = ResumeParser(enable_robust=False).parse_with_diagnostics(NO_HEADER_RESUME)
        assert outcome.tier == "primary"
        assert outcome.record.work == []
        assert outcome.record.basics.name == "John Smith"

    def test_structural_content(self):
        assert not has_structural_content(ResumeRecord())
        assert not has_structural_content(ResumeRecord(basics=Basics(name="Jane", email="j@x.com")))
        assert has_structural_content(ResumeRecord(skills=[SkillGroup(keywords=["Python"])]))


class TestTotality:

    def test_empty_and_none(self):
        for text in ("", None, "   \n\n  "):
            record = parse(text)
            assert record == empty_record()

    def test_empty_input_warnings(self):
        assert collect_warnings(parse("")) == [
            "No candidate name detected",
            "No email address detected",
            "No work experience entries detected",
            "No education entries detected",
            "No skills detected",
        ]


class TestCleanRecord:

    def _dirty(self) -> ResumeRecord:
        return ResumeRecord(
            basics=Basics(name="  Jane   Doe "),
            work=[
                WorkEntry(
                    position="Director of Communicati on",
                    company="Service - now ",
                    start_date="Jun 21",
                    end_date="present",
                )
            ],
            skills=[SkillGroup(name="Tools", keywords=[" Docker ", "", "Go"])],
        )

    def test_repairs_fields(self):
        cleaned = clean_record(self._dirty())
        assert cleaned.basics.name == "Jane Doe"
        assert cleaned.work[0].position == "Director of Communication"
        assert cleaned.work[0].company == "ServiceNow"
        assert (cleaned.work[0].start_date, cleaned.work[0].end_date) == ("Jun 2021", "Present")
        assert cleaned.skills[0].keywords == ["Docker", "Go"]

    def test_input_is_not_mutated(self):
        dirty = self._dirty()
        clean_record(dirty)
        assert dirty.work[0].company == "Service - now "

    def test_idempotent(self):
        once = clean_record(self._dirty())
        assert clean_record(once) == once
