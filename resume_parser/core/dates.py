"""
Date handling: range anchors, 2-digit year expansion, token normalization.

Date ranges are the positional anchors for work and education entries.
Normalized tokens keep their original shape ("Jan 2020", "06/2021", "2019")
with any 2-digit year expanded to 4 digits; open-ended markers become
the literal "Present".
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from resume_parser.core.patterns import MONTH, PatternLibrary, compiled, date_range_regex

logger = logging.getLogger(__name__)

# 00-50 -> 2000-2050, 51-99 -> 1951-1999
TWO_DIGIT_YEAR_PIVOT = 50

PRESENT_RE = re.compile(r"^(?:present|current|now|ongoing)$", re.IGNORECASE)
MONTH_SHORT_YEAR_RE = re.compile(rf"^({MONTH}\.?)\s*'?(\d{{2}})$", re.IGNORECASE)
NUMERIC_SHORT_YEAR_RE = re.compile(r"^(\d{1,2})/(\d{2})$")
APOSTROPHE_YEAR_RE = re.compile(r"^'(\d{2})$")
GLUED_MONTH_YEAR_RE = re.compile(rf"^({MONTH}\.?)(\d{{4}})$", re.IGNORECASE)

# Single date inside a line (certifications): Month YYYY, MM/YYYY, or a bare year
SINGLE_DATE_RE = re.compile(
    rf"\b{MONTH}\.?[ \t]+\d{{4}}\b|\b\d{{1,2}}/\d{{4}}\b|\b(?:19|20)\d{{2}}\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class DateRange:
    """One date-range occurrence inside a section body."""

    start: str  # raw start token, e.g. "Jun 21"
    end: str  # raw end token or "present"/"current"
    offset: int  # index of the match in the searched text
    end_offset: int

    @property
    def start_date(self) -> str:
        return normalize_date_token(self.start)

    @property
    def end_date(self) -> str:
        return normalize_date_token(self.end)


def expand_two_digit_year(yy: int) -> int:
    return 2000 + yy if yy <= TWO_DIGIT_YEAR_PIVOT else 1900 + yy


def expand_year(token: str) -> str:
    """
    Expand the trailing 2-digit year of a date token to 4 digits.

    Examples:
    - "Jun 21" → "Jun 2021"
    - "Jun 85" → "Jun 1985"
    - "Jun 50" → "Jun 2050", "Jun 51" → "Jun 1951"
    - "06/19" → "06/2019"
    - "'19" → "2019"

    Tokens that already carry a 4-digit year (or no year) are returned unchanged.
    """
    if not token:
        return token or ""
    token = token.strip()

    m = MONTH_SHORT_YEAR_RE.match(token)
    if m:
        return f"{m.group(1)} {expand_two_digit_year(int(m.group(2)))}"

    m = NUMERIC_SHORT_YEAR_RE.match(token)
    if m:
        return f"{m.group(1)}/{expand_two_digit_year(int(m.group(2)))}"

    m = APOSTROPHE_YEAR_RE.match(token)
    if m:
        return str(expand_two_digit_year(int(m.group(1))))

    return token


def normalize_date_token(token: Optional[str]) -> str:
    """
    Normalize one side of a date range for the output record.

    - "present" / "CURRENT" / "now" → "Present"
    - "Jun 21" → "Jun 2021"
    - "Jan2020" → "Jan 2020"
    - "Summer  2020" → "Summer 2020"
    """
    if not token:
        return ""
    token = " ".join(token.split())
    if PRESENT_RE.match(token):
        return "Present"
    m = GLUED_MONTH_YEAR_RE.match(token)
    if m:
        return f"{m.group(1)} {m.group(2)}"
    return expand_year(token)


def find_date_ranges(text: str, library: PatternLibrary) -> List[DateRange]:
    """All date-range anchors in document order."""
    if not text:
        return []
    ranges = [
        DateRange(start=m.group("start"), end=m.group("end"), offset=m.start(), end_offset=m.end())
        for m in date_range_regex(library).finditer(text)
    ]
    logger.debug(f"Found {len(ranges)} date range anchors ({library.tier} tier)")
    return ranges


def contains_date_fragment(text: str, library: PatternLibrary) -> bool:
    """True if text mentions any date-shaped fragment (month-year, year, season, ...)."""
    if not text:
        return False
    return any(compiled(p).search(text) for p in library.date_fragment_patterns)


def find_single_date(line: str) -> Optional["re.Match[str]"]:
    return SINGLE_DATE_RE.search(line or "")
