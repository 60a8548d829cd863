from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime

import pytest

from ssr_import.models.import_run import ImportRun
from ssr_import.models.processing_result import ProcessingResult
from ssr_import.services.summary import _format_seconds, render_summary_line

T = datetime(2024, 1, 1, tzinfo=UTC)


def _result(**kw) -> ProcessingResult:
    base = dict(
        run=ImportRun("T", "2005-06", "publichealth.xlsx", T, "public_health", 53, 412),
        mode="json",
        rows_read=980,
        role_counts=Counter(note=30, ignored=12, rate_item=400),
        start_time=T,
        end_time=T,
        elapsed_seconds=1.25,
    )
    base.update(kw)
    return ProcessingResult(**base)


def test_render_summary_line():
    assert render_summary_line(_result()) == (
        "SUMMARY file=publichealth.xlsx sections=53 items=412 rows=980 "
        "ignored=42 warnings=0 elapsed_sec=1.25 mode=json"
    )


def test_render_summary_line_db_mode_with_warnings():
    line = render_summary_line(_result(mode="db", warnings=["a", "b"]))
    assert "warnings=2" in line
    assert line.endswith("mode=db")


@pytest.mark.parametrize(
    "value,expected",
    [(0, "0"), (3.0, "3"), (0.5, "0.5"), (1.23456, "1.235"), (0.000123, "0.000123")],
)
def test_format_seconds(value, expected):
    assert _format_seconds(value) == expected
