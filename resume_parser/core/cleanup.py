"""
Post-extraction cleanup of a finished ResumeRecord.

Works on a deep copy and is idempotent: clean_record(clean_record(r)) == clean_record(r).
"""

from typing import List

from resume_parser.core.dates import normalize_date_token
from resume_parser.core.schemas import ResumeRecord
from resume_parser.core.text_normalization import (
    collapse_whitespace,
    fix_extraction_artifacts,
    normalize_field_text,
)


def clean_org_field(text: str) -> str:
    """Company / position: whitespace, known artifacts, split words."""
    text = collapse_whitespace(text)
    text = fix_extraction_artifacts(text)
    return normalize_field_text(text) or ""


def _clean_list(values: List[str]) -> List[str]:
    cleaned = (collapse_whitespace(v) for v in values)
    return [v for v in cleaned if v]


def clean_record(record: ResumeRecord) -> ResumeRecord:
    out = record.model_copy(deep=True)

    b = out.basics
    for attr in ("name", "label", "email", "phone", "url", "location", "summary"):
        setattr(b, attr, collapse_whitespace(getattr(b, attr)))

    for job in out.work:
        job.position = clean_org_field(job.position)
        job.company = clean_org_field(job.company)
        job.start_date = normalize_date_token(job.start_date)
        job.end_date = normalize_date_token(job.end_date)
        job.summary = collapse_whitespace(job.summary)

    for edu in out.education:
        edu.institution = collapse_whitespace(edu.institution)
        edu.study_type = collapse_whitespace(edu.study_type)
        edu.area = collapse_whitespace(edu.area)
        edu.location = collapse_whitespace(edu.location)
        edu.start_date = normalize_date_token(edu.start_date)
        edu.end_date = normalize_date_token(edu.end_date)

    for group in out.skills:
        group.name = collapse_whitespace(group.name)
        group.keywords = _clean_list(group.keywords)

    for project in out.projects:
        project.name = collapse_whitespace(project.name)
        project.summary = collapse_whitespace(project.summary)
        project.keywords = _clean_list(project.keywords)

    for cert in out.certifications:
        cert.name = collapse_whitespace(cert.name)
        cert.date = normalize_date_token(cert.date)
        cert.issuer = collapse_whitespace(cert.issuer)

    return out
