"""
List-shaped sections: skills, projects, certifications.

Skills
    One group per line. "Category: a, b, c" names the group; lines without a
    colon go under "Skills". Splitting ignores separators inside parentheses:
    "Programming Languages: Java, Python, C++ (embedded, RTOS)" gives
    ["Java", "Python", "C++ (embedded, RTOS)"].

Projects
    "Name | tech1, tech2" header lines, each followed by bullet descriptions.

Certifications
    One entry per line; a date token splits the name from the date.
"""

import logging
import re
from typing import List, Optional

from resume_parser.core.dates import find_single_date, normalize_date_token
from resume_parser.core.patterns import PatternLibrary
from resume_parser.core.schemas import CertificationEntry, ProjectEntry, SkillGroup
from resume_parser.core.text_normalization import collapse_whitespace, is_bullet_line, strip_bullet

logger = logging.getLogger(__name__)

DEFAULT_SKILL_GROUP = "Skills"
SKILL_SEPARATORS = {",", ";", "•", "|"}

PROJECT_HEADER_RE = re.compile(r"^(?P<name>[A-Z][^\n|]*?)[ \t]*\|[ \t]*(?P<techs>[^\n]*)$", re.MULTILINE)
INLINE_BULLET_RE = re.compile(r"[•●▪]")
TECH_SPLIT_RE = re.compile(r"[,;]")
LOOSE_PROJECT_MAX_CHARS = 80
CERT_NAME_TRIM = " \t-|,:;(–"


# ============================================================================
# Skills
# ============================================================================

def split_skill_tokens(text: str) -> List[str]:
    """
    Split on , ; • | at parenthesis depth 0, trimming and dropping empty tokens.

    Examples:
    - "Java, Python, C++ (embedded)" → ["Java", "Python", "C++ (embedded)"]
    - "AWS (EC2, S3); Docker | K8s" → ["AWS (EC2, S3)", "Docker", "K8s"]
    """
    tokens: List[str] = []
    depth = 0
    buf: List[str] = []
    for ch in text or "":
        if ch == "(":
            depth += 1
        elif ch == ")" and depth > 0:
            depth -= 1
        if depth == 0 and ch in SKILL_SEPARATORS:
            tokens.append("".join(buf))
            buf = []
            continue
        buf.append(ch)
    tokens.append("".join(buf))
    return [t.strip() for t in tokens if t.strip()]


def extract_skills(body: Optional[str]) -> List[SkillGroup]:
    """One group per non-empty line; groups with the same name are kept separate."""
    if not body:
        return []

    groups: List[SkillGroup] = []
    for raw in body.split("\n"):
        line = strip_bullet(raw)
        if not line:
            continue
        if ":" in line:
            category, rest = line.split(":", 1)
            name = category.strip() or DEFAULT_SKILL_GROUP
            keywords = split_skill_tokens(rest)
        else:
            name = DEFAULT_SKILL_GROUP
            keywords = split_skill_tokens(line)
        if keywords:
            groups.append(SkillGroup(name=name, keywords=keywords))

    logger.debug(f"Extracted {len(groups)} skill groups")
    return groups


# ============================================================================
# Projects
# ============================================================================

def split_technologies(techs: str) -> List[str]:
    parts = (INLINE_BULLET_RE.sub("", p).strip() for p in TECH_SPLIT_RE.split(techs or ""))
    return [p for p in parts if p]


def _description(lines: List[str]) -> str:
    return collapse_whitespace(" ".join(strip_bullet(ln) for ln in lines if ln.strip()))


def _projects_from_headers(body: str, headers: List["re.Match[str]"]) -> List[ProjectEntry]:
    projects: List[ProjectEntry] = []
    for i, m in enumerate(headers):
        techs = m.group("techs")
        lead = ""
        bullet = INLINE_BULLET_RE.search(techs)
        if bullet:
            # "React, Node.js • Built a cart" carries the first description line
            lead = techs[bullet.start():]
            techs = techs[:bullet.start()]

        stop = headers[i + 1].start() if i + 1 < len(headers) else len(body)
        following = body[m.end():stop].split("\n")
        projects.append(
            ProjectEntry(
                name=m.group("name").strip(),
                keywords=split_technologies(techs),
                summary=_description([lead] + following),
            )
        )
    return projects


def _projects_from_loose_lines(body: str) -> List[ProjectEntry]:
    """Each short, capitalized, non-bullet line opens a project."""
    projects: List[ProjectEntry] = []
    name: Optional[str] = None
    desc: List[str] = []

    for raw in body.split("\n"):
        line = raw.strip()
        if not line:
            continue
        opens = not is_bullet_line(line) and line[0].isupper() and len(line) < LOOSE_PROJECT_MAX_CHARS
        if opens:
            if name is not None:
                projects.append(ProjectEntry(name=name, summary=_description(desc)))
            name, desc = line, []
        elif name is not None:
            desc.append(line)

    if name is not None:
        projects.append(ProjectEntry(name=name, summary=_description(desc)))
    return projects


def extract_projects(body: Optional[str], library: PatternLibrary) -> List[ProjectEntry]:
    if not body:
        return []

    headers = list(PROJECT_HEADER_RE.finditer(body))
    if headers:
        projects = _projects_from_headers(body, headers)
    elif library.loose_project_headers:
        projects = _projects_from_loose_lines(body)
    else:
        logger.debug("No 'Name | technologies' project headers found")
        projects = []

    kept = [p for p in projects if p.name and (p.keywords or p.summary)]
    logger.debug(f"Extracted {len(kept)} projects ({len(projects) - len(kept)} dropped as empty)")
    return kept


# ============================================================================
# Certifications
# ============================================================================

def extract_certifications(body: Optional[str]) -> List[CertificationEntry]:
    """
    One entry per line. Issuer is never inferred.

    Examples:
    - "AWS Certified Solutions Architect - Jan 2022" → name "AWS Certified Solutions Architect", date "Jan 2022"
    - "PMP 2019" → name "PMP", date "2019"
    - "Scrum Master" → name "Scrum Master", date ""
    """
    if not body:
        return []

    certs: List[CertificationEntry] = []
    for raw in body.split("\n"):
        line = strip_bullet(raw)
        if not line:
            continue
        m = find_single_date(line)
        if m:
            name = line[:m.start()].strip(CERT_NAME_TRIM) or line[m.end():].strip(CERT_NAME_TRIM + ")")
            certs.append(CertificationEntry(name=name, date=normalize_date_token(m.group(0))))
        else:
            certs.append(CertificationEntry(name=line))
    return certs
