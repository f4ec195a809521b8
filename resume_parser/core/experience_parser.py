"""
Work experience extraction.

Anchored on date ranges. For every anchor the position/company header is
found either on the date's own line ("• Volunteer Tutor   Jan 2019 - Present")
or on the lines just above it:

    Senior Developer, Acme Corp        <- block header (comma split)
    Jan 2020 - Present                 <- anchor
    • Built the billing platform       <- description
    Initech                            <- next entry's header, not description
    Data Engineer
    Mar 2017 - Dec 2019

The tie-break rules are small named policies (split_position_company,
apply_title_swap, collect_header_lines) so each can be tested on its own.

When a section has no anchors, the robust tier falls back to opening entries
on lines that carry a company suffix (Inc, LLC, Technologies...) or a job-title
keyword (Engineer, Manager...).
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from resume_parser.core.dates import DateRange, contains_date_fragment, find_date_ranges
from resume_parser.core.education_parser import find_degree, has_institution_keyword
from resume_parser.core.patterns import PatternLibrary, compiled, word_list_regex
from resume_parser.core.schemas import WorkEntry
from resume_parser.core.text_normalization import collapse_whitespace, is_bullet_line, strip_bullet

logger = logging.getLogger(__name__)

MAX_HEADER_LINES = 3
SAME_LINE_TRIM = " \t-|,:;"
TITLE_COMPANY_SPLIT_RE = re.compile(r"\s*(?:,|\|| - |\bat\b|@)\s*", re.IGNORECASE)


@dataclass
class _Header:
    position: str
    company: str
    start: int  # offset where this entry's header text begins


# ============================================================================
# Named policies
# ============================================================================

def looks_like_job_title(text: str, library: PatternLibrary) -> bool:
    if not text or not library.job_title_keywords:
        return False
    return bool(compiled(word_list_regex(library.job_title_keywords)).search(text))


def has_company_indicator(text: str, library: PatternLibrary) -> bool:
    if not text or not library.company_indicators:
        return False
    return bool(compiled(word_list_regex(library.company_indicators)).search(text))


def split_position_company(header_lines: List[str]) -> Tuple[str, str]:
    """
    Block-case rule. header_lines is ordered closest-to-date first.

    - closest line has a comma: "Senior Developer, Acme Corp" → ("Senior Developer", "Acme Corp")
    - otherwise closest line is position, next-closest is company
    """
    if not header_lines:
        return "", ""
    closest = header_lines[0]
    if "," in closest:
        position, company = closest.split(",", 1)
        return position.strip(), company.strip()
    company = header_lines[1] if len(header_lines) > 1 else ""
    return closest, company


def apply_title_swap(position: str, company: str, library: PatternLibrary) -> Tuple[str, str]:
    """
    Swap position and company when only the company looks like a job title.

    Can misfire on title-like company names ("Principal Solutions Group"),
    so it only runs when the library enables it.
    """
    if not library.swap_title_company:
        return position, company
    if looks_like_job_title(company, library) and not looks_like_job_title(position, library):
        logger.debug("Swapping position/company: company line looks like a job title")
        return company, position
    return position, company


def collect_header_lines(text: str, line_start: int, floor: int) -> Tuple[List[str], int]:
    """
    Walk backward from line_start collecting up to 3 non-bullet, non-empty lines.

    Stops at a bullet line, at a blank line once something was collected, or
    at floor (the end of the previous anchor's line). Returns the lines
    closest-first and the offset where the earliest collected line begins.
    """
    collected: List[str] = []
    header_start = line_start
    pos = line_start

    while pos > floor and len(collected) < MAX_HEADER_LINES:
        prev_start = text.rfind("\n", floor, pos - 1) + 1
        if prev_start < floor:
            prev_start = floor
        line = text[prev_start:pos].strip()
        if not line:
            if collected:
                break
        elif is_bullet_line(line):
            break
        else:
            collected.append(line)
            header_start = prev_start
        pos = prev_start

    return collected, header_start


# ============================================================================
# Anchor-based extraction
# ============================================================================

def _line_bounds(text: str, offset: int) -> Tuple[int, int]:
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    return start, len(text) if end == -1 else end


def _entry_header(text: str, anchor: DateRange, floor: int, library: PatternLibrary) -> _Header:
    line_start, _ = _line_bounds(text, anchor.offset)
    before_on_line = text[line_start:anchor.offset].strip()

    if before_on_line:
        position = strip_bullet(before_on_line).strip(SAME_LINE_TRIM)
        return _Header(position=position, company="", start=line_start)

    lines, header_start = collect_header_lines(text, line_start, floor)
    position, company = split_position_company(lines)
    position, company = apply_title_swap(position, company, library)
    return _Header(position=position, company=company, start=header_start)


def summarize_description(text: str) -> str:
    """Bullet markers stripped, lines joined by single spaces."""
    parts = [strip_bullet(ln) for ln in text.split("\n")]
    return collapse_whitespace(" ".join(p for p in parts if p))


def extract_jobs_by_dates(text: str, anchors: List[DateRange], library: PatternLibrary) -> List[WorkEntry]:
    headers: List[_Header] = []
    floor = 0
    for anchor in anchors:
        headers.append(_entry_header(text, anchor, floor, library))
        _, line_end = _line_bounds(text, anchor.end_offset)
        floor = min(line_end, len(text))

    jobs: List[WorkEntry] = []
    for i, anchor in enumerate(anchors):
        desc_end = headers[i + 1].start if i + 1 < len(anchors) else len(text)
        # "Jan 2020 - Present | Remote": drop the separator left after the date
        description = text[anchor.end_offset:max(desc_end, anchor.end_offset)].lstrip(SAME_LINE_TRIM)
        jobs.append(
            WorkEntry(
                position=headers[i].position,
                company=headers[i].company,
                start_date=anchor.start_date,
                end_date=anchor.end_date,
                summary=summarize_description(description),
            )
        )
        logger.debug(f"Work entry {i + 1}: position={headers[i].position!r} company={headers[i].company!r}")
    return jobs


# ============================================================================
# Indicator-based fallback (robust tier)
# ============================================================================

def _split_title_and_company(line: str, library: PatternLibrary) -> Tuple[str, str]:
    parts = [p for p in TITLE_COMPANY_SPLIT_RE.split(line, maxsplit=1) if p and p.strip()]
    if len(parts) == 2:
        first, second = parts[0].strip(), parts[1].strip()
        if looks_like_job_title(second, library) and not looks_like_job_title(first, library):
            return second, first
        return first, second
    return line, ""


def extract_jobs_by_indicators(text: str, library: PatternLibrary) -> List[WorkEntry]:
    """
    Open a new entry on every non-bullet line with a company suffix or
    job-title keyword; following lines accumulate into its description.
    """
    lines = [ln.strip() for ln in text.split("\n") if ln.strip()]
    jobs: List[WorkEntry] = []
    current: Optional[WorkEntry] = None
    description: List[str] = []

    def _close():
        if current is not None:
            current.summary = summarize_description("\n".join(description))
            jobs.append(current)

    for i, line in enumerate(lines):
        if is_bullet_line(line):
            if current is not None:
                description.append(line)
            continue

        start_date = end_date = ""
        ranges = find_date_ranges(line, library)
        if ranges:
            start_date, end_date = ranges[0].start_date, ranges[0].end_date
            line = (line[:ranges[0].offset] + line[ranges[0].end_offset:]).strip(SAME_LINE_TRIM)
            if not line:
                if current is not None and not current.start_date:
                    current.start_date, current.end_date = start_date, end_date
                continue

        is_title = looks_like_job_title(line, library)
        is_company = has_company_indicator(line, library)
        if not (is_title or is_company):
            if current is not None:
                description.append(line)
            continue

        # "Title" directly followed by "Company" (or the reverse) is one entry
        if current is not None and not description and is_title != is_company:
            merged = False
            if is_company and not current.company:
                current.company, merged = line, True
            elif is_title and not current.position:
                current.position, merged = line, True
            if merged:
                if start_date and not current.start_date:
                    current.start_date, current.end_date = start_date, end_date
                continue

        _close()
        description = []
        if is_title and is_company:
            position, company = _split_title_and_company(line, library)
        elif is_title:
            position, company = line, ""
        else:
            # Only a line not owned by an earlier entry can name the position
            previous = lines[i - 1] if i > 0 and current is None else ""
            usable = previous and not is_bullet_line(previous) and not contains_date_fragment(previous, library)
            position, company = (previous if usable else ""), line
        current = WorkEntry(position=position, company=company, start_date=start_date, end_date=end_date)

    _close()
    logger.debug(f"Indicator fallback produced {len(jobs)} work entries")
    return jobs


def _is_education_paragraph(paragraph: str, library: PatternLibrary) -> bool:
    return has_institution_keyword(paragraph, library) and find_degree(paragraph, library).found


def find_experience_in_text(full_text: str, library: PatternLibrary) -> str:
    """Paragraphs of the whole document that mention a date, minus school-and-degree blocks."""
    paragraphs = [
        p for p in (full_text or "").split("\n\n")
        if contains_date_fragment(p, library) and not _is_education_paragraph(p, library)
    ]
    return "\n\n".join(paragraphs)


def extract_work(body: Optional[str], library: PatternLibrary, full_text: str = "") -> List[WorkEntry]:
    """
    Work entries for one experience body.

    body is None when the document had no experience section; the robust
    tier then searches date-bearing paragraphs of the full text instead.
    """
    if body is None and library.indicator_fallback:
        body = find_experience_in_text(full_text, library)
    if not body:
        return []

    anchors = find_date_ranges(body, library)
    if anchors:
        return extract_jobs_by_dates(body, anchors, library)

    if library.indicator_fallback:
        return extract_jobs_by_indicators(body, library)

    logger.debug("No work experience dates found")
    return []
