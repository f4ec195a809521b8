from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


ParseTier = Literal["primary", "robust"]


class SectionKind(str, Enum):
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    SUMMARY = "summary"
    CERTIFICATIONS = "certifications"
    # Header-only kind: folded into SKILLS by the segmenter, never a SectionMap key.
    LANGUAGES = "languages"


class _RecordModel(BaseModel):
    """Serializes with camelCase keys (startDate, studyType) like the JSON Resume format."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Basics(_RecordModel):
    name: str = ""
    label: str = Field(default="", description="Headline / professional title")
    email: str = ""
    phone: str = ""
    url: str = ""
    location: str = ""
    summary: str = ""


class WorkEntry(_RecordModel):
    position: str = ""
    company: str = ""
    start_date: str = ""  # "Jan 2020", "2019", "06/2021"
    end_date: str = ""  # same shapes, or "Present"
    summary: str = ""


class EducationEntry(_RecordModel):
    institution: str = ""
    study_type: str = ""  # Bachelor's, Master's, PhD, Associate
    area: str = ""  # field of study
    start_date: str = ""
    end_date: str = ""
    location: str = ""


class SkillGroup(_RecordModel):
    name: str = "Skills"
    keywords: List[str] = Field(default_factory=list)


class ProjectEntry(_RecordModel):
    name: str = ""
    keywords: List[str] = Field(default_factory=list)
    summary: str = ""


class CertificationEntry(_RecordModel):
    name: str = ""
    date: str = ""
    issuer: str = ""


class ResumeRecord(_RecordModel):
    """Structured résumé. Every field is always present; misses are empty values."""
    basics: Basics = Field(default_factory=Basics)
    work: List[WorkEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[SkillGroup] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)


class ParseResponse(BaseModel):
    resume: ResumeRecord
    tier: ParseTier = Field(..., description="Which extraction tier produced the record")
    sections_found: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class TextParseRequest(BaseModel):
    text: str = ""


def empty_record() -> ResumeRecord:
    return ResumeRecord()


def sample_record() -> ResumeRecord:
    """Fixed record used by presentation layers to preview templates without data."""
    return ResumeRecord(
        basics=Basics(
            name="Jane Doe",
            label="Product Designer",
            email="jane.doe@example.com",
            phone="+1 555-123-4567",
            url="https://janedoe.design",
            location="San Francisco, CA",
            summary=(
                "Creative product designer with 8+ years building delightful user "
                "experiences across web and mobile platforms."
            ),
        ),
        work=[
            WorkEntry(
                position="Senior Product Designer",
                company="Acme Corp",
                start_date="Jan 2020",
                end_date="Present",
                summary=(
                    "Leading design for core web products. Focused on usability, "
                    "accessibility, and scalable design systems."
                ),
            )
        ],
        education=[
            EducationEntry(
                institution="University of Design",
                study_type="Bachelor's",
                area="Interaction Design",
                start_date="2010",
                end_date="2014",
                location="Boston, MA",
            )
        ],
        skills=[
            SkillGroup(name="Design", keywords=["Figma", "Sketch", "Prototyping"]),
            SkillGroup(name="Front-end", keywords=["HTML", "CSS", "JavaScript"]),
        ],
        projects=[
            ProjectEntry(
                name="Design System Revamp",
                keywords=["Design System", "Accessibility"],
                summary="Led a cross-functional initiative to standardize components and tokens.",
            )
        ],
    )
