"""
Text normalization utilities for cleaning up extracted résumé text.

Two levels:
- normalize_text(): canonicalizes a whole document before segmentation
- normalize_field_text() / fix_extraction_artifacts(): repair single fields
  (company, position) after extraction

Every function here is pure and idempotent: normalize_text(normalize_text(x))
equals normalize_text(x).
"""

import re
from typing import Optional


# ============================================================================
# Document-level normalization
# ============================================================================

ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\u200e\u200f\u2060\ufeff\u00ad]")
HORIZONTAL_WS_RE = re.compile("[ \t\u00a0\u2007\u202f\f\v]+")
DASH_RE = re.compile("[\u2010\u2011\u2012\u2013\u2014\u2015\u2212]")
SINGLE_QUOTE_RE = re.compile("[\u2018\u2019\u201a\u201b\u2032]")
DOUBLE_QUOTE_RE = re.compile("[\u201c\u201d\u201e\u201f\u2033]")
BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize_text(raw: Optional[str]) -> str:
    """
    Canonicalize raw extracted text.

    Order:
    1. Line endings to \\n
    2. Strip zero-width / invisible characters
    3. Collapse runs of spaces/tabs to one space, trim each line
    4. En/em/horizontal-bar dashes to "-"
    5. Curly quotes to straight quotes
    6. 3+ consecutive newlines (2+ blank lines) to exactly one blank line
    7. Trim the whole text

    Examples:
    - "Jan 2020 – Present" → "Jan 2020 - Present"
    - "Acme\\u200bCorp" → "AcmeCorp"
    - "EXPERIENCE\\n\\n\\n\\nDev" → "EXPERIENCE\\n\\nDev"
    """
    if not raw or not isinstance(raw, str):
        return ""

    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    text = ZERO_WIDTH_RE.sub("", text)
    text = HORIZONTAL_WS_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = DASH_RE.sub("-", text)
    text = SINGLE_QUOTE_RE.sub("'", text)
    text = DOUBLE_QUOTE_RE.sub('"', text)
    text = BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


# ============================================================================
# Line helpers
# ============================================================================

# A bullet is a symbol marker, or a dash/star/arrow followed by whitespace
BULLET_RE = re.compile(r"^\s*(?:[•●▪◦‣·■□➢➤►]+|[-*>+](?=\s))\s*")
WS_RE = re.compile(r"\s+")


def is_bullet_line(line: str) -> bool:
    return bool(BULLET_RE.match(line or ""))


def strip_bullet(line: str) -> str:
    """Remove a leading bullet marker: '• Built APIs' → 'Built APIs'."""
    return BULLET_RE.sub("", line or "", count=1).strip()


def collapse_whitespace(text: Optional[str]) -> str:
    if not text:
        return ""
    return WS_RE.sub(" ", text).strip()


# ============================================================================
# Field-level repairs
# ============================================================================

# Known text-extraction artifacts in company/position fields, applied in order
ARTIFACT_FIXES = [
    (re.compile(r"\bservice\s*-\s*now\b", re.IGNORECASE), "ServiceNow"),
    (re.compile(r"\b(service)\s*-\s*$", re.IGNORECASE), r"\1"),
]


def fix_extraction_artifacts(text: str) -> str:
    """
    Reassemble brand names split by extraction.

    Examples:
    - "Service - now" → "ServiceNow"
    - "SERVICE-NOW Inc" → "ServiceNow Inc"
    - "Customer Service -" → "Customer Service"
    """
    if not text:
        return text
    for pattern, replacement in ARTIFACT_FIXES:
        text = pattern.sub(replacement, text)
    return text.strip()


# Words that PDF extraction is known to break apart mid-word
SPLIT_WORD_REPAIRS = {"communication", "communications"}


def _rejoin(parts):
    joined = "".join(parts)
    if all(p.isalpha() for p in parts) and joined.lower() in SPLIT_WORD_REPAIRS:
        return joined
    return None


def normalize_field_text(text: str) -> str:
    """
    Rejoin known words split inside a structured field (position, company).

    Only words listed in SPLIT_WORD_REPAIRS are touched, so names and places
    are never merged by accident.

    - "Director of Communicati on" → "Director of Communication"
    - "communicati ons lead" → "communications lead"
    - "communic a tions" → "communications"
    """
    if not text or not text.strip():
        return text

    tokens = text.split()
    merged = []
    i = 0
    while i < len(tokens):
        pair = _rejoin(tokens[i:i + 2]) if i + 1 < len(tokens) else None
        if pair:
            merged.append(pair)
            i += 2
            continue
        # a single stray letter between two fragments
        if i + 2 < len(tokens) and len(tokens[i + 1]) == 1:
            triple = _rejoin(tokens[i:i + 3])
            if triple:
                merged.append(triple)
                i += 3
                continue
        merged.append(tokens[i])
        i += 1

    return " ".join(merged)
