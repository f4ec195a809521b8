"""
Escalation controller: text in, ResumeRecord out.

Runs the full pipeline with the primary PatternLibrary. If that yields no
work, education, skills or projects, the whole pipeline is re-run once with
the robust library (broader catalogs, fuzzy segmentation, fallback branches)
and that result is returned as-is. Results of the two tiers are never merged.

parse() is total: any input, including "" and None, gives a fully-shaped record.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from resume_parser.core.basics_parser import extract_basics
from resume_parser.core.cleanup import clean_record
from resume_parser.core.education_parser import extract_education
from resume_parser.core.experience_parser import extract_work
from resume_parser.core.patterns import PatternLibrary, primary_library, robust_library
from resume_parser.core.schemas import ParseTier, ResumeRecord, SectionKind
from resume_parser.core.sections import SectionMap, identify_sections
from resume_parser.core.skills_parser import extract_certifications, extract_projects, extract_skills
from resume_parser.core.text_normalization import normalize_text

logger = logging.getLogger(__name__)


def has_structural_content(record: ResumeRecord) -> bool:
    """Work, education, skills or projects found. Contact info alone does not count."""
    return bool(record.work or record.education or record.skills or record.projects)


def collect_warnings(record: ResumeRecord) -> List[str]:
    warnings: List[str] = []
    if not record.basics.name:
        warnings.append("No candidate name detected")
    if not record.basics.email:
        warnings.append("No email address detected")
    if not record.work:
        warnings.append("No work experience entries detected")
    if not record.education:
        warnings.append("No education entries detected")
    if not record.skills:
        warnings.append("No skills detected")
    return warnings


@dataclass
class ParseOutcome:
    record: ResumeRecord
    tier: ParseTier
    sections_found: List[str] = field(default_factory=list)


def run_tier(text: str, library: PatternLibrary) -> Tuple[ResumeRecord, SectionMap]:
    """One complete pass (segmentation + every extractor) with a single library."""
    sections = identify_sections(text, library)
    logger.debug(f"{library.tier} tier sections: {[k.value for k in sections]}")

    record = ResumeRecord(
        basics=extract_basics(text, sections, library),
        work=extract_work(sections.get(SectionKind.EXPERIENCE), library, full_text=text),
        education=extract_education(sections.get(SectionKind.EDUCATION), library, full_text=text),
        skills=extract_skills(sections.get(SectionKind.SKILLS)),
        projects=extract_projects(sections.get(SectionKind.PROJECTS), library),
        certifications=extract_certifications(sections.get(SectionKind.CERTIFICATIONS)),
    )
    logger.debug(
        f"{library.tier} tier: work={len(record.work)} education={len(record.education)} "
        f"skills={len(record.skills)} projects={len(record.projects)} "
        f"certifications={len(record.certifications)}"
    )
    return record, sections


class ResumeParser:
    """
    Two-tier résumé parser.

    Args:
        primary: library for the first pass (default: primary_library())
        robust: library for the fallback pass (default: robust_library())
        enable_robust: when False the primary result is always returned

    Libraries are read-only once handed over, so one instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        primary: Optional[PatternLibrary] = None,
        robust: Optional[PatternLibrary] = None,
        enable_robust: bool = True,
    ):
        self.primary = primary or primary_library()
        self.robust = robust or robust_library()
        self.enable_robust = enable_robust

    def parse_with_diagnostics(self, text: Optional[str]) -> ParseOutcome:
        normalized = normalize_text(text if isinstance(text, str) else "")

        record, sections = run_tier(normalized, self.primary)
        tier: ParseTier = "primary"

        if not has_structural_content(record) and self.enable_robust:
            logger.info("Primary tier found no structural content, escalating to robust tier")
            record, sections = run_tier(normalized, self.robust)
            tier = "robust"

        return ParseOutcome(
            record=clean_record(record),
            tier=tier,
            sections_found=[kind.value for kind in sections],
        )

    def parse(self, text: Optional[str]) -> ResumeRecord:
        return self.parse_with_diagnostics(text).record


_default_parser = ResumeParser()


def parse(text: Optional[str]) -> ResumeRecord:
    """Parse résumé text with the default two-tier configuration."""
    return _default_parser.parse(text)
