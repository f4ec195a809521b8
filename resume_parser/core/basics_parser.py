"""
Contact block extraction: name, headline label, email, phone, url, location, summary.

All lookups are first-match over ordered pattern lists from the active
PatternLibrary. Misses are empty strings.
"""

import logging
import re
from typing import List, Optional

from resume_parser.core.dates import contains_date_fragment
from resume_parser.core.patterns import CITY_STATE_CODE_RE, PatternLibrary, compiled, word_list_regex
from resume_parser.core.schemas import Basics, SectionKind
from resume_parser.core.sections import SectionMap, is_header_line
from resume_parser.core.text_normalization import collapse_whitespace

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
FIELD_SEPARATOR = "|"
# Digit groups at the end of a name line, e.g. "Jane Doe 555-123-4567"
TRAILING_PHONE_RE = re.compile(r"[\s,;:-]*\+?\(?\d[\d\s().-]{5,}$")
PHONE_SHAPE_RE = re.compile(r"\(?\d{3}\)?[-.\s]*\d{3}[-.\s]*\d{4}")


def _non_empty_lines(text: str) -> List[str]:
    return [ln.strip() for ln in text.split("\n") if ln.strip()]


def extract_name(text: str, library: Optional[PatternLibrary] = None) -> str:
    """
    First non-empty line, before any field separator, minus trailing phone digits.

    Examples:
    - "Jane Doe | jane@x.com | 555-123-4567" → "Jane Doe"
    - "John Smith 555 123 4567" → "John Smith"
    - "EDUCATION\\nState University" → "" (with a library: a header is never a name)
    """
    lines = _non_empty_lines(text)
    if not lines:
        return ""
    if library is not None and is_header_line(lines[0], library):
        return ""
    name = lines[0].split(FIELD_SEPARATOR, 1)[0]
    name = TRAILING_PHONE_RE.sub("", name)
    return name.strip()


def _is_label_candidate(line: str, library: PatternLibrary) -> bool:
    lower = line.lower()
    if "@" in line or FIELD_SEPARATOR in line:
        return False
    if PHONE_SHAPE_RE.search(line):
        return False
    if any(domain in lower for domain in library.profile_domains):
        return False
    if any(compiled(p).search(line) for p in library.url_patterns):
        return False
    if contains_date_fragment(line, library):
        return False
    if CITY_STATE_CODE_RE.search(line):
        return False
    return len(line) < library.label_max_chars


def extract_label(text: str, library: PatternLibrary) -> str:
    """
    Headline: the first of the few lines after the name that is not contact info.

    Scanning stops at the first section header line.
    """
    lines = _non_empty_lines(text)
    for line in lines[1:1 + library.label_scan_lines]:
        if is_header_line(line, library):
            break
        if _is_label_candidate(line, library):
            return line
    return ""


def extract_email(text: str) -> str:
    m = EMAIL_RE.search(text)
    return m.group(0) if m else ""


def extract_phone(text: str, library: PatternLibrary) -> str:
    """First match across phone patterns ordered most- to least-specific."""
    for pattern in library.phone_patterns:
        m = compiled(pattern, 0).search(text)
        if m:
            return collapse_whitespace(m.group(0))
    return ""


def extract_url(text: str, library: PatternLibrary) -> str:
    for pattern in library.url_patterns:
        m = compiled(pattern).search(text)
        if m:
            return m.group(0).rstrip(".,;:)")
    return ""


def extract_location(text: str, library: PatternLibrary) -> str:
    """
    Location from the contact block only (first N chars), to skip addresses later on.

    Matches that carry a job-title word ("Engineer, Google") are skipped.
    """
    head = text[:library.location_search_chars]
    title_re = compiled(word_list_regex(library.job_title_keywords)) if library.job_title_keywords else None
    for pattern in library.location_patterns:
        for m in compiled(pattern, re.MULTILINE).finditer(head):
            if title_re is not None and title_re.search(m.group(0)):
                continue
            return collapse_whitespace(m.group(0))
    return ""


def extract_basics(text: str, sections: SectionMap, library: PatternLibrary) -> Basics:
    if not text:
        return Basics()

    basics = Basics(
        name=extract_name(text, library),
        label=extract_label(text, library),
        email=extract_email(text),
        phone=extract_phone(text, library),
        url=extract_url(text, library),
        location=extract_location(text, library),
        summary=sections.get(SectionKind.SUMMARY, ""),
    )
    logger.debug(
        f"Basics: name={bool(basics.name)} label={bool(basics.label)} email={bool(basics.email)} "
        f"phone={bool(basics.phone)} url={bool(basics.url)} location={bool(basics.location)}"
    )
    return basics
