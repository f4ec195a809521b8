"""
Section segmentation: split normalized résumé text into per-kind bodies.

Two strategies:
- identify_sections(): header-driven. Every keyword of the active
  PatternLibrary is matched as a standalone header line, a compound header
  ("PROFESSIONAL EXPERIENCE") or, in the robust tier, an inline "Skills:" header.
- locate_sections_fuzzy(): content-driven. Used only when no header matched
  and the library enables it; infers education / experience / skills regions
  from per-line signals.

A SectionMap holds at most one body per SectionKind. Repeated headers of the
same kind are concatenated in document order, separated by a blank line.
An empty body ("") means the header exists but nothing followed it; a missing
key means the section was not found.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List

from resume_parser.core.dates import contains_date_fragment
from resume_parser.core.patterns import PatternLibrary, compiled, keyword_regex
from resume_parser.core.schemas import SectionKind

logger = logging.getLogger(__name__)

SectionMap = Dict[SectionKind, str]

HEADER_FLAGS = re.IGNORECASE | re.MULTILINE
# Qualifying words must be capitalized even though the header match ignores case
QUALIFIER = r"(?-i:[A-Z&][A-Za-z&/'-]*)"
LIST_SEPARATOR_RE = re.compile(r"[,•|]")


@dataclass(frozen=True)
class HeaderMatch:
    kind: SectionKind
    keyword: str
    start: int
    length: int
    compound: bool = False

    @property
    def end(self) -> int:
        return self.start + self.length


def _header_regexes(library: PatternLibrary):
    """Yield (kind, keyword, compiled pattern, is_compound) for every header shape."""
    for kind, keywords in library.section_keywords.items():
        for kw in keywords:
            body = keyword_regex(kw)
            yield kind, kw, compiled(rf"^[ \t]*{body}[ \t]*:?[ \t]*$", HEADER_FLAGS), False
            if library.inline_colon_headers:
                yield kind, kw, compiled(rf"^[ \t]*{body}[ \t]*:", HEADER_FLAGS), False

    n = library.max_header_qualifiers
    for kind, keywords in library.compound_keywords.items():
        for kw in keywords:
            body = keyword_regex(kw)
            pattern = rf"^[ \t]*(?:{QUALIFIER}[ \t]+){{1,{n}}}{body}[ \t]*:?[ \t]*$"
            yield kind, kw, compiled(pattern, HEADER_FLAGS), True


def find_header_matches(text: str, library: PatternLibrary) -> List[HeaderMatch]:
    """
    All header occurrences, sorted by position and deduplicated.

    Ordering key is (offset, -length, compound): at one offset the longest
    match wins, and an exact keyword beats a compound one of equal length.
    A match that starts inside an already-kept match is dropped.
    """
    if not text:
        return []

    found: List[HeaderMatch] = []
    for kind, kw, regex, compound in _header_regexes(library):
        for m in regex.finditer(text):
            found.append(HeaderMatch(kind=kind, keyword=kw, start=m.start(), length=m.end() - m.start(), compound=compound))

    found.sort(key=lambda h: (h.start, -h.length, h.compound))

    kept: List[HeaderMatch] = []
    for h in found:
        if kept and h.start < kept[-1].end:
            continue
        kept.append(h)

    logger.debug(f"Headers found ({library.tier}): {[f'{h.kind.value}@{h.start}' for h in kept]}")
    return kept


def is_header_line(line: str, library: PatternLibrary) -> bool:
    return bool(find_header_matches(line.strip(), library))


def slice_sections(text: str, headers: List[HeaderMatch]) -> SectionMap:
    """
    Cut text into bodies between consecutive headers.

    A languages header always bounds the previous section. Its body is used
    as the skills body only when the document has no skills header at all.
    """
    has_skills_header = any(h.kind == SectionKind.SKILLS for h in headers)
    bodies: Dict[SectionKind, List[str]] = {}

    for i, header in enumerate(headers):
        stop = headers[i + 1].start if i + 1 < len(headers) else len(text)
        body = text[header.end:stop].strip()

        kind = header.kind
        if kind == SectionKind.LANGUAGES:
            if has_skills_header:
                logger.debug("Skipping languages section: distinct skills section present")
                continue
            kind = SectionKind.SKILLS

        bodies.setdefault(kind, []).append(body)

    return {kind: "\n\n".join(b for b in parts if b) for kind, parts in bodies.items()}


def _education_signal_regex(library: PatternLibrary):
    ordered = sorted(library.education_keywords, key=len, reverse=True)
    return compiled(r"(?<!\w)(?:" + "|".join(re.escape(k) for k in ordered) + ")")


def locate_sections_fuzzy(text: str, library: PatternLibrary) -> SectionMap:
    """
    Infer section bodies from content signals when no header matched.

    Signals (per line):
    - education: any education keyword (university, bachelor, mba, ...)
    - experience: any date fragment
    - skills: 2+ list separators (comma, bullet, pipe), under the length
      ceiling, and no date fragment

    Each region spans from `before` lines ahead of the first hit to `after`
    lines past the last hit (exclusive). Regions may overlap.
    """
    if not text:
        return {}

    lines = text.split("\n")
    edu_re = _education_signal_regex(library) if library.education_keywords else None
    hits: Dict[SectionKind, List[int]] = {
        SectionKind.EDUCATION: [],
        SectionKind.EXPERIENCE: [],
        SectionKind.SKILLS: [],
    }

    for i, line in enumerate(lines):
        if not line.strip():
            continue
        if edu_re is not None and edu_re.search(line):
            hits[SectionKind.EDUCATION].append(i)
        has_date = contains_date_fragment(line, library)
        if has_date:
            hits[SectionKind.EXPERIENCE].append(i)
        elif len(line) < library.skill_line_max_chars and len(LIST_SEPARATOR_RE.findall(line)) >= 2:
            hits[SectionKind.SKILLS].append(i)

    sections: SectionMap = {}
    for kind, indices in hits.items():
        if not indices:
            continue
        before, after = library.fuzzy_margins.get(kind, (1, 3))
        lo = max(0, indices[0] - before)
        hi = min(len(lines), indices[-1] + after)
        sections[kind] = "\n".join(lines[lo:hi]).strip()
        logger.debug(f"Fuzzy {kind.value} region: lines {lo}-{hi} ({len(indices)} signal lines)")

    return sections


def identify_sections(text: str, library: PatternLibrary) -> SectionMap:
    """
    Segment normalized text into a SectionMap using the given tier.

    Falls back to fuzzy location only when no header matched and the library
    enables fuzzy segmentation; otherwise an empty map is returned.
    """
    headers = find_header_matches(text, library)
    if headers:
        return slice_sections(text, headers)
    if library.fuzzy_segmentation:
        logger.debug("No section headers found; locating sections from content signals")
        return locate_sections_fuzzy(text, library)
    return {}
