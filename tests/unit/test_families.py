from __future__ import annotations

import pytest

from ssr_import.parser.families import (
    FAMILIES,
    LABOUR_RATES,
    PIPE_RATES,
    PUBLIC_HEALTH,
    SECTION_HEADER_RE,
    UnknownFamilyError,
    get_family,
)


def test_registry():
    assert set(FAMILIES) == {"public_health", "pipe_rates", "labour_rates"}
    assert get_family("labour_rates") is LABOUR_RATES
    assert get_family("public_health") is PUBLIC_HEALTH
    assert get_family("pipe_rates") is PIPE_RATES


def test_unknown_family():
    with pytest.raises(UnknownFamilyError) as ei:
        get_family("phuse")
    assert "phuse" in str(ei.value)


@pytest.mark.parametrize("text", ["1", "12", "8a", "8. a.", "11.a.", "3 b", "41B."])
def test_section_header_pattern_accepts(text):
    assert SECTION_HEADER_RE.match(text)


@pytest.mark.parametrize("text", ["a", "8ab", "Sl.No", "1.2", ""])
def test_section_header_pattern_rejects(text):
    assert SECTION_HEADER_RE.match(text) is None


def test_pipe_rates_layout():
    assert PIPE_RATES.columns.item_no == 0
    assert PIPE_RATES.columns.rate == 3
    assert PIPE_RATES.header_rows == 0
    assert PIPE_RATES.inherit_section_unit
    assert PIPE_RATES.rate_decimals == 2
    assert PIPE_RATES.section_requires_title
    assert not PUBLIC_HEALTH.section_requires_title
    assert PIPE_RATES.resolver().resolve("1", 1) == "General"


def test_public_health_resolver_uses_table():
    assert PUBLIC_HEALTH.resolver().resolve("1", 1) == "Labour Rates"


def test_labour_keyword_labels():
    assert LABOUR_RATES.keyword_headers
    assert not PUBLIC_HEALTH.keyword_headers
    assert LABOUR_RATES.section_label("SKILLED WORKMEN") == "Skilled"
    assert LABOUR_RATES.section_label("SEMI-SKILLED WORKMEN") == "Semi-Skilled"
    assert LABOUR_RATES.section_label("Unskilled Workmen") == "Unskilled"
    assert LABOUR_RATES.section_label("Other Conveyance Items") == "Conveyance"
    assert LABOUR_RATES.section_label("Mason") is None
    assert LABOUR_RATES.section_label(None) is None
    assert LABOUR_RATES.sub_section_label("Skilled - First Class") == "First Class"
    assert PUBLIC_HEALTH.sub_section_label("First class") is None
