"""
Header pattern library: the keyword and pattern catalogs that drive extraction.

Both extraction tiers run the same code; they differ only in which
PatternLibrary they are handed. The catalogs are plain lists so a host can
append custom keywords or patterns right after building a library, before
passing it to a ResumeParser. Once parsing starts the library is only read.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Tuple

from resume_parser.core.schemas import SectionKind


# ============================================================================
# Shared building blocks
# ============================================================================

MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
SEASON = r"(?:spring|summer|fall|autumn|winter)"

# Single date tokens usable on either side of a range
MONTH_YEAR_TOKEN = rf"{MONTH}\.?[ \t]+(?:\d{{4}}|'?\d{{2}})(?!\d)"
NUMERIC_MONTH_YEAR_TOKEN = r"\d{1,2}/(?:\d{4}|\d{2})(?!\d)"
YEAR_TOKEN = r"(?:19|20)\d{2}(?!\d)"
SEASON_YEAR_TOKEN = rf"{SEASON}[ \t]+\d{{4}}(?!\d)"
GLUED_MONTH_YEAR_TOKEN = rf"{MONTH}\.?\d{{4}}(?!\d)"
ABBREVIATED_YEAR_TOKEN = r"'\d{2}(?!\d)"

# Date fragments: "does this line mention a date at all"
DATE_FRAGMENT_PATTERNS = [
    rf"\b{MONTH}\.?[ \t]+\d{{4}}\b",  # Jan 2020, January 2020
    r"\b(?:19|20)\d{2}\b",  # 2020
    r"\b\d{1,2}[/-]\d{4}\b",  # 01/2020, 01-2020
    r"\b\d{4}[ \t]*-[ \t]*\d{4}\b",  # 2019 - 2021
    rf"\b{SEASON}[ \t]+\d{{4}}\b",  # Summer 2020
    r"(?<!\w)'\d{2}\b",  # '20
]

DEGREE_MASTER = (r"\bmaster(?:'s|s)?\b", "Master's")
DEGREE_BACHELOR = (r"\bbachelor(?:'s|s)?\b", "Bachelor's")
DEGREE_PHD = (r"\bph\.?\s?d\b\.?|\bdoctorate\b", "PhD")
DEGREE_ASSOCIATE = (r"\bassociate(?:'s)?\b", "Associate")

BASE_PHONE_PATTERNS = [
    r"\+[ \t]*\d{1,3}[ \t]+\d{3}[ \t]+\d{3}[ \t]+\d{4}",  # + 1 979 721 2039
    r"\+\d{1,3}[-. \t]?\d{3}[-. \t]?\d{3}[-. \t]?\d{4}",  # +1-979-721-2039
    r"\+?1[-. \t]?\(?\d{3}\)?[-. \t]?\d{3}[-. \t]?\d{4}",  # 1 (979) 721-2039
    r"\(?\d{3}\)?[-. \t]?\d{3}[-. \t]?\d{4}",  # (979) 721-2039
    r"\d{3}[ \t]+\d{3}[ \t]+\d{4}",  # 979   721   2039
]

URL_PATTERNS = [
    r"https?://[^\s|,;]+",
    r"www\.[^\s|,;]+",
    r"linkedin\.com/in/[^\s|,;]+",
    r"github\.com/[^\s|,;]+",
]

# Case-sensitive: capitalization is the signal here
LOCATION_PATTERNS = [
    r"(?:^|(?<=[|•·(]))[ \t]*([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+){0,2}),[ \t]*([A-Z]{2})\b",  # City, ST
    # One-word city only, so "Senior Developer, Acme Corp" is not a location
    r"(?:^|(?<=[|•·(]))[ \t]*([A-Z][a-z]+),[ \t]*([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)?)\b",  # City, Country
    r"([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)*),[ \t]*([A-Z]{2,})[ \t]*\d{5}",  # City, STATE 12345
]

CITY_REGION_RE = re.compile(r"([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)?),[ \t]*([A-Z][A-Za-z]{1,15}(?:[ \t]+[A-Z][a-z]+)?)")
CITY_STATE_CODE_RE = re.compile(r"[A-Z][a-z]+,\s*[A-Z]{2}")


@dataclass
class PatternLibrary:
    """One tier's catalogs and fallback switches."""

    tier: str
    section_keywords: Dict[SectionKind, List[str]]
    compound_keywords: Dict[SectionKind, List[str]]
    date_token_patterns: List[str]
    range_end_markers: List[str]
    date_fragment_patterns: List[str]
    education_keywords: List[str]
    institution_keywords: List[str]
    degree_patterns: List[Tuple[str, str]]
    company_indicators: List[str]
    job_title_keywords: List[str]
    profile_domains: List[str]
    phone_patterns: List[str]
    url_patterns: List[str] = field(default_factory=lambda: list(URL_PATTERNS))
    location_patterns: List[str] = field(default_factory=lambda: list(LOCATION_PATTERNS))
    fuzzy_margins: Dict[SectionKind, Tuple[int, int]] = field(default_factory=dict)
    max_header_qualifiers: int = 3
    location_search_chars: int = 500
    label_scan_lines: int = 4
    label_max_chars: int = 100
    skill_line_max_chars: int = 200
    # Fallback switches (robust tier)
    inline_colon_headers: bool = False
    fuzzy_segmentation: bool = False
    indicator_fallback: bool = False
    swap_title_company: bool = False
    require_institution_and_degree: bool = True
    undated_education_fallback: bool = False
    loose_project_headers: bool = False


# ============================================================================
# Regex helpers (compiled once per distinct pattern)
# ============================================================================

@lru_cache(maxsize=1024)
def compiled(pattern: str, flags: int = re.IGNORECASE) -> "re.Pattern[str]":
    return re.compile(pattern, flags)


def keyword_regex(keyword: str) -> str:
    """
    Regex source for a header keyword that tolerates letter-spaced headers.

    'education' also matches 'E D U C A T I O N'; words of multi-word keywords
    are separated by one or more spaces.
    """
    words = keyword.split()
    return r"[ \t]+".join(r"[ \t]?".join(re.escape(ch) for ch in word) for word in words)


def word_list_regex(words: List[str]) -> str:
    """Alternation of whole words (optionally plural), longest first."""
    ordered = sorted(set(w.lower() for w in words), key=len, reverse=True)
    return r"\b(?:" + "|".join(re.escape(w) for w in ordered) + r")s?\b"


def date_range_regex(library: PatternLibrary) -> "re.Pattern[str]":
    token = "|".join(f"(?:{p})" for p in library.date_token_patterns)
    end = "|".join(re.escape(m) for m in library.range_end_markers)
    return compiled(
        rf"(?<![\w/'])(?P<start>{token})[ \t]*(?:-|–|—|\bto\b)[ \t]*(?P<end>{token}|(?:{end})\b)",
        re.IGNORECASE,
    )


# ============================================================================
# Tier factories
# ============================================================================

def primary_library() -> PatternLibrary:
    """Catalog tuned for well-formed résumés."""
    return PatternLibrary(
        tier="primary",
        section_keywords={
            SectionKind.EXPERIENCE: ["experience", "employment", "work history", "career", "volunteering"],
            SectionKind.EDUCATION: ["education", "academic", "academics", "academic background"],
            SectionKind.PROJECTS: ["projects", "project", "portfolio"],
            SectionKind.SKILLS: ["skills", "skill", "competencies", "technical skills"],
            SectionKind.SUMMARY: ["summary", "profile", "objective"],
            SectionKind.CERTIFICATIONS: ["certifications", "licenses", "awards"],
            SectionKind.LANGUAGES: ["languages"],
        },
        compound_keywords={
            SectionKind.EXPERIENCE: ["experience", "employment", "work history", "volunteering"],
            SectionKind.PROJECTS: ["projects", "portfolio"],
            SectionKind.SKILLS: ["skills", "competencies"],
            SectionKind.SUMMARY: ["summary", "profile", "objective"],
        },
        date_token_patterns=[MONTH_YEAR_TOKEN, NUMERIC_MONTH_YEAR_TOKEN, YEAR_TOKEN],
        range_end_markers=["present", "current"],
        date_fragment_patterns=list(DATE_FRAGMENT_PATTERNS),
        education_keywords=["university", "college", "institute", "bachelor", "master", "phd", "diploma", "mba"],
        institution_keywords=["university", "college", "institute", "school", "academy"],
        degree_patterns=[DEGREE_MASTER, DEGREE_BACHELOR, DEGREE_PHD, DEGREE_ASSOCIATE],
        company_indicators=[],
        job_title_keywords=[
            "engineer", "developer", "manager", "analyst", "designer", "consultant",
            "director", "specialist", "coordinator", "lead", "senior", "junior",
            "associate", "principal", "staff", "intern",
        ],
        profile_domains=["linkedin.com", "github.com"],
        phone_patterns=list(BASE_PHONE_PATTERNS),
    )


def robust_library() -> PatternLibrary:
    """Broader catalog plus every fallback branch; used when the primary tier finds nothing."""
    return PatternLibrary(
        tier="robust",
        section_keywords={
            SectionKind.EXPERIENCE: [
                "experience", "work", "employment", "professional experience", "work experience",
                "work history", "career", "career history", "professional history",
                "relevant experience", "positions", "volunteering experience",
                "volunteer experience", "internship experience", "leadership experience",
                "teaching experience", "research experience",
            ],
            SectionKind.EDUCATION: [
                "education", "academic", "qualifications", "degrees", "academic background",
                "educational background", "academic qualifications",
                "certifications and education", "schooling",
            ],
            SectionKind.SKILLS: [
                "skills", "competencies", "technical skills", "core competencies", "expertise",
                "capabilities", "proficiencies", "technologies", "technical competencies",
                "key skills", "core skills",
            ],
            SectionKind.PROJECTS: [
                "projects", "portfolio", "key projects", "personal projects",
                "notable projects", "project experience", "work samples",
            ],
            SectionKind.SUMMARY: [
                "summary", "professional summary", "profile", "objective", "career objective",
                "about", "about me", "overview", "personal statement", "professional profile",
                "career summary",
            ],
            SectionKind.CERTIFICATIONS: [
                "certifications", "licenses", "credentials", "certificates",
                "professional certifications", "awards", "achievements",
            ],
            SectionKind.LANGUAGES: ["languages"],
        },
        compound_keywords={
            SectionKind.EXPERIENCE: ["experience"],
            SectionKind.SKILLS: ["skills", "skill"],
            SectionKind.EDUCATION: ["education", "academic"],
            SectionKind.PROJECTS: ["projects", "project"],
        },
        date_token_patterns=[
            MONTH_YEAR_TOKEN, SEASON_YEAR_TOKEN, GLUED_MONTH_YEAR_TOKEN,
            NUMERIC_MONTH_YEAR_TOKEN, YEAR_TOKEN, ABBREVIATED_YEAR_TOKEN,
        ],
        range_end_markers=["present", "current", "now", "ongoing"],
        date_fragment_patterns=list(DATE_FRAGMENT_PATTERNS),
        education_keywords=[
            "university", "college", "institute", "school", "academy", "polytechnic",
            "bachelor", "master", "phd", "doctorate", "diploma", "degree", "associate",
            "b.s.", "m.s.", "b.a.", "m.a.", "b.tech", "m.tech", "mba",
        ],
        institution_keywords=[
            "university", "college", "institute", "school", "academy", "polytechnic",
            "conservatory", "universidad", "universidade", "université", "universität",
            "università", "hochschule", "politecnico",
        ],
        degree_patterns=[
            DEGREE_MASTER,
            (r"(?<!\w)(?:m\.s\.|m\.a\.|m\.sc\.?|msc|m\.?tech|mba|m\.eng\.?)(?!\w)", "Master's"),
            DEGREE_BACHELOR,
            (r"(?<!\w)(?:b\.s\.|b\.a\.|b\.sc\.?|bsc|b\.?tech|b\.e\.|b\.eng\.?)(?!\w)", "Bachelor's"),
            DEGREE_PHD,
            DEGREE_ASSOCIATE,
        ],
        company_indicators=[
            "inc", "llc", "ltd", "corp", "corporation", "company", "co", "group",
            "technologies", "solutions", "systems", "services", "consulting",
            "partners", "software", "labs", "gmbh",
        ],
        job_title_keywords=[
            "engineer", "developer", "manager", "analyst", "designer", "consultant",
            "director", "specialist", "coordinator", "lead", "senior", "junior",
            "associate", "principal", "staff", "intern", "architect", "scientist",
        ],
        profile_domains=["linkedin.com", "github.com", "gitlab.com", "stackoverflow.com"],
        phone_patterns=list(BASE_PHONE_PATTERNS) + [r"\b\d{3}[-. \t]?\d{3}[-. \t]?\d{4}\b"],
        fuzzy_margins={
            SectionKind.EDUCATION: (1, 5),
            SectionKind.EXPERIENCE: (2, 10),
            SectionKind.SKILLS: (1, 3),
        },
        inline_colon_headers=True,
        fuzzy_segmentation=True,
        indicator_fallback=True,
        swap_title_company=True,
        require_institution_and_degree=False,
        undated_education_fallback=True,
        loose_project_headers=True,
    )
