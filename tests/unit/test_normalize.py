from __future__ import annotations

import math

import pytest

from ssr_import.parser.normalize import (
    ColumnLayout,
    canonical_key,
    clean_item_no,
    clean_text,
    is_blank,
    normalize_row,
    parse_rate,
)


def test_is_blank_none_and_nan():
    assert is_blank(None)
    assert is_blank(float("nan"))
    assert not is_blank("")  # empty text is handled by clean_text
    assert not is_blank(0)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("  RATES   OF\tLABOUR ", "RATES OF LABOUR"),
        ("   ", None),
        (None, None),
        (80.0, "80"),
        (12.5, "12.5"),
        (7, "7"),
    ],
)
def test_clean_text(raw, expected):
    assert clean_text(raw) == expected


def test_clean_item_no_keeps_numbers_numeric():
    assert clean_item_no(1) == 1
    assert clean_item_no(12.0) == 12
    assert clean_item_no(" 8. a. ") == "8. a."
    assert clean_item_no(math.nan) is None
    assert clean_item_no("  ") is None


@pytest.mark.parametrize(
    "raw,expected",
    [
        (120, 120),
        (45.5, 45.5),
        ("245.50", 245.5),
        ("100 approx", 100.0),
        ("-3", -3.0),
        (".5", 0.5),
        ("As per Common SSR", "As per Common SSR"),
        ("  N.A.  ", "N.A."),
        ("", None),
        (None, None),
    ],
)
def test_parse_rate(raw, expected):
    assert parse_rate(raw) == expected


def test_parse_rate_rounds_when_asked():
    assert parse_rate(12.3456, decimals=2) == 12.35
    assert parse_rate("7.006", decimals=2) == 7.01
    assert parse_rate("Lump sum", decimals=2) == "Lump sum"


@pytest.mark.parametrize(
    "item_no,key",
    [
        ("8. a.", "8a"),
        ("11.a.", "11a"),
        ("18 B", "18b"),
        (1, "1"),
        (12.0, "12"),
        (None, None),
    ],
)
def test_canonical_key(item_no, key):
    assert canonical_key(item_no) == key


def test_normalize_row_default_layout():
    row = normalize_row(5, [None, "8. a.", "  LAYING  CI PIPES ", "rm", "45.50"])
    assert row.row_number == 5
    assert row.item_no == "8. a."
    assert row.item_key == "8a"
    assert row.description == "LAYING CI PIPES"
    assert row.raw_description == "  LAYING  CI PIPES "
    assert row.unit == "rm"
    assert row.rate == 45.5
    assert not row.is_blank


def test_normalize_row_pads_short_rows():
    row = normalize_row(3, [None, 4])
    assert row.item_no == 4
    assert row.description is None
    assert row.unit is None
    assert row.rate is None


def test_normalize_row_blank():
    row = normalize_row(9, [None, None, "   ", None, None])
    assert row.is_blank


def test_normalize_row_custom_layout():
    layout = ColumnLayout(item_no=0, description=1, unit=2, rate=3)
    row = normalize_row(1, ["3", "100mm", "Rs/m", 12.346], layout, rate_decimals=2)
    assert row.item_no == "3"
    assert row.description == "100mm"
    assert row.unit == "Rs/m"
    assert row.rate == 12.35
    assert layout.width == 4
