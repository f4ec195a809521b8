"""
Education extraction.

Anchored on date ranges, like work experience. Around each anchor:
- institution: nearest line above the date (within 300 chars) that carries
  an institution keyword, cut at its first comma
- degree: first degree keyword (master, bachelor, phd, associate, in that
  priority) after the date, up to the next anchor or the next institution line;
  if none, between the institution line and the date
- area: the "in <field>" (else "of <field>") phrase after the degree keyword
- location: "City, Region" after the field on the degree line, else after the
  institution name on the institution line

Handles both layouts:

    DePaul University, Chicago, Illinois          DePaul University   2012 - 2016
    Bachelor's in Computer Science                Bachelor's in Computer Science
    2012 - 2016
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from resume_parser.core.dates import DateRange, find_date_ranges
from resume_parser.core.patterns import CITY_REGION_RE, PatternLibrary, compiled
from resume_parser.core.schemas import EducationEntry, SectionKind
from resume_parser.core.text_normalization import strip_bullet

logger = logging.getLogger(__name__)

INSTITUTION_WINDOW_CHARS = 300
DEGREE_WINDOW_CHARS = 200
NAME_TRIM = " \t-|,:;"

# Field of study runs until a comma (which also precedes any "City, Region"),
# another separator, a number, or end of line
FIELD_BODY = r"([A-Za-z &()/.'-]+?)(?=[ \t]*(?:[,;:|•]|[ \t]-[ \t]|$)|[ \t]+\d)"
FIELD_IN_RE = re.compile(r"\bin[ \t]+" + FIELD_BODY)
FIELD_OF_RE = re.compile(r"\bof[ \t]+" + FIELD_BODY)


@dataclass
class DegreeInfo:
    study_type: str = ""
    area: str = ""
    location: str = ""

    @property
    def found(self) -> bool:
        return bool(self.study_type)


# ============================================================================
# Keyword helpers
# ============================================================================

def _institution_regex(library: PatternLibrary):
    ordered = sorted(library.institution_keywords, key=len, reverse=True)
    return compiled(r"\b(?:" + "|".join(re.escape(k) for k in ordered) + r")\b")


def has_institution_keyword(line: str, library: PatternLibrary) -> bool:
    if not line or not library.institution_keywords:
        return False
    return bool(_institution_regex(library).search(line))


def institution_name(line: str) -> str:
    """'• DePaul University, Chicago, Illinois' → 'DePaul University'."""
    return strip_bullet(line).split(",", 1)[0].strip(NAME_TRIM)


def find_institution(window: str, library: PatternLibrary) -> Tuple[str, str]:
    """Nearest institution line in window, scanning bottom-up. Returns (name, full line)."""
    for line in reversed(window.split("\n")):
        line = line.strip()
        if has_institution_keyword(line, library):
            return institution_name(line), line
    return "", ""


def _field_of_study(rest: str) -> Tuple[str, int]:
    """
    Field phrase right after a degree keyword, and where it ends in rest.

    "in" wins over "of" so "Bachelor of Science in Computer Science" gives
    "Computer Science".
    """
    for regex in (FIELD_IN_RE, FIELD_OF_RE):
        m = regex.search(rest)
        if m:
            field = m.group(1).strip(NAME_TRIM + ".")
            if field:
                return field, m.end()
    return "", 0


def find_degree(text: str, library: PatternLibrary) -> DegreeInfo:
    """First degree pattern (in priority order) found in text, with field and location."""
    if not text:
        return DegreeInfo()

    for pattern, study_type in library.degree_patterns:
        m = compiled(pattern).search(text)
        if not m:
            continue
        line_end = text.find("\n", m.end())
        rest = text[m.end():] if line_end == -1 else text[m.end():line_end]
        area, field_end = _field_of_study(rest)
        loc = CITY_REGION_RE.search(rest[field_end:])
        location = f"{loc.group(1)}, {loc.group(2)}" if loc else ""
        return DegreeInfo(study_type=study_type, area=area, location=location)

    return DegreeInfo()


def _location_after_name(institution_line: str) -> str:
    if "," not in institution_line:
        return ""
    loc = CITY_REGION_RE.search(institution_line.split(",", 1)[1])
    return f"{loc.group(1)}, {loc.group(2)}" if loc else ""


def _cut_at_next_institution(window: str, library: PatternLibrary) -> str:
    """Forward window stops where the next entry's institution line starts."""
    first_break = window.find("\n")
    if first_break == -1:
        return window
    offset = first_break + 1
    for line in window[offset:].split("\n"):
        if has_institution_keyword(line, library):
            return window[:offset]
        offset += len(line) + 1
    return window


# ============================================================================
# Extraction
# ============================================================================

def _entry_for_anchor(
    text: str, anchor: DateRange, next_anchor: Optional[DateRange], library: PatternLibrary
) -> Optional[EducationEntry]:
    back_start = max(0, anchor.offset - INSTITUTION_WINDOW_CHARS)
    back_window = text[back_start:anchor.offset]
    institution, institution_line = find_institution(back_window, library)

    forward_end = next_anchor.offset if next_anchor else anchor.end_offset + DEGREE_WINDOW_CHARS
    forward = _cut_at_next_institution(text[anchor.end_offset:forward_end], library)
    degree = find_degree(forward, library)

    if not degree.found:
        # Degree sits between the institution line (inclusive) and the date
        idx = back_window.rfind(institution_line) if institution_line else -1
        degree = find_degree(back_window[max(idx, 0):], library)

    if library.require_institution_and_degree:
        keep = bool(institution) and degree.found
    else:
        keep = bool(institution) or degree.found
    if not keep:
        logger.debug(f"Skipped education anchor: institution={bool(institution)} degree={degree.found}")
        return None

    return EducationEntry(
        institution=institution,
        study_type=degree.study_type,
        area=degree.area,
        start_date=anchor.start_date,
        end_date=anchor.end_date,
        location=degree.location or _location_after_name(institution_line),
    )


def extract_education_without_dates(text: str, library: PatternLibrary) -> List[EducationEntry]:
    """Robust fallback: every line with an institution or degree keyword is an undated entry."""
    entries: List[EducationEntry] = []
    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue
        institution = institution_name(line) if has_institution_keyword(line, library) else ""
        degree = find_degree(line, library)
        if institution or degree.found:
            entries.append(
                EducationEntry(
                    institution=institution,
                    study_type=degree.study_type,
                    area=degree.area,
                    location=degree.location or (_location_after_name(line) if institution else ""),
                )
            )
    return entries


def find_education_in_text(full_text: str, library: PatternLibrary) -> str:
    """
    Lines of the whole document around its education-keyword lines.

    Spans one line before the first hit to five lines past the last one (the
    library's education margins).
    """
    if not full_text or not library.education_keywords:
        return ""
    ordered = sorted(library.education_keywords, key=len, reverse=True)
    signal = compiled(r"(?<!\w)(?:" + "|".join(re.escape(k) for k in ordered) + ")")

    lines = full_text.split("\n")
    hits = [i for i, line in enumerate(lines) if signal.search(line)]
    if not hits:
        return ""
    before, after = library.fuzzy_margins.get(SectionKind.EDUCATION, (1, 5))
    lo = max(0, hits[0] - before)
    hi = min(len(lines), hits[-1] + after)
    logger.debug(f"Education searched in full text: lines {lo}-{hi}")
    return "\n".join(lines[lo:hi]).strip()


def extract_education(body: Optional[str], library: PatternLibrary, full_text: str = "") -> List[EducationEntry]:
    """
    Education entries for one education body.

    body is None when the document had no education section; the robust tier
    then searches the lines around education keywords in the full text.
    """
    if body is None and library.undated_education_fallback:
        body = find_education_in_text(full_text, library)
    if not body:
        return []

    anchors = find_date_ranges(body, library)
    if not anchors:
        if library.undated_education_fallback:
            return extract_education_without_dates(body, library)
        logger.debug("No education dates found")
        return []

    education: List[EducationEntry] = []
    for i, anchor in enumerate(anchors):
        nxt = anchors[i + 1] if i + 1 < len(anchors) else None
        entry = _entry_for_anchor(body, anchor, nxt, library)
        if entry is not None:
            education.append(entry)

    logger.debug(f"Returning {len(education)} education entries")
    return education
