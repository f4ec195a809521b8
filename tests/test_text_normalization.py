"""
Unit tests for text_normalization module.

Document-level canonicalization plus the field-level repairs applied after extraction.
"""

import pytest
from resume_parser.core.text_normalization import (
    collapse_whitespace,
    fix_extraction_artifacts,
    is_bullet_line,
    normalize_field_text,
    normalize_text,
    strip_bullet,
)


SAMPLES = [
    "",
    "Jane   Doe\t\tEngineer",
    "EXPERIENCE\n\n\n\n\nAcme Corp",
    "Jan 2020 – Present\r\nLead — Platform",
    "“Quoted” and ‘single’",
    "Acme\u200bCorp\ufeff",
    "  \n  leading and trailing  \n\n",
    "line one \n\n \n \nline two",
]


class TestNormalizeText:
    """Test whole-document canonicalization."""

    def test_collapses_spaces_and_tabs(self):
        assert normalize_text("Jane   Doe\t\tEngineer") == "Jane Doe Engineer"

    def test_unifies_dashes(self):
        assert normalize_text("Jan 2020 – Present") == "Jan 2020 - Present"
        assert normalize_text("2012 — 2016") == "2012 - 2016"

    def test_unifies_quotes(self):
        assert normalize_text("“Lead” ‘dev’") == "\"Lead\" 'dev'"

    def test_collapses_blank_runs_to_one_blank_line(self):
        assert normalize_text("EXPERIENCE\n\n\n\nAcme") == "EXPERIENCE\n\nAcme"

    def test_keeps_single_paragraph_break(self):
        assert normalize_text("A\n\nB") == "A\n\nB"

    def test_strips_zero_width_characters(self):
        assert normalize_text("Ac\u200bme") == "Acme"

    def test_line_endings(self):
        assert normalize_text("A\r\nB\rC") == "A\nB\nC"

    def test_trims(self):
        assert normalize_text("\n\n  Jane Doe  \n\n") == "Jane Doe"

    def test_none_and_empty(self):
        assert normalize_text(None) == ""
        assert normalize_text("") == ""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once


class TestBullets:
    """Test bullet detection and stripping."""

    def test_symbol_bullets(self):
        assert is_bullet_line("• Built APIs")
        assert is_bullet_line("● Led team")
        assert strip_bullet("•Built APIs") == "Built APIs"

    def test_dash_bullet_needs_space(self):
        assert is_bullet_line("- Built APIs")
        assert not is_bullet_line("-5% churn")

    def test_phone_is_not_a_bullet(self):
        assert not is_bullet_line("+1 555-123-4567")

    def test_plain_line(self):
        assert not is_bullet_line("Senior Developer, Acme Corp")
        assert strip_bullet("Senior Developer") == "Senior Developer"


class TestFieldRepairs:
    """Test company/position repairs."""

    def test_servicenow_merge(self):
        assert fix_extraction_artifacts("Service - now") == "ServiceNow"
        assert fix_extraction_artifacts("SERVICE-NOW Inc") == "ServiceNow Inc"

    def test_dangling_service(self):
        assert fix_extraction_artifacts("Customer Service -") == "Customer Service"

    def test_untouched(self):
        assert fix_extraction_artifacts("Acme Corp") == "Acme Corp"

    def test_artifact_fix_idempotent(self):
        once = fix_extraction_artifacts("Service - now")
        assert fix_extraction_artifacts(once) == once

    def test_communication_split(self):
        assert normalize_field_text("Director of Communicati on") == "Director of Communication"
        assert normalize_field_text("communicati ons lead") == "communications lead"
        assert normalize_field_text("communic a tions") == "communications"

    def test_collapse_whitespace(self):
        assert collapse_whitespace("  Acme \n  Corp ") == "Acme Corp"
        assert collapse_whitespace(None) == ""
