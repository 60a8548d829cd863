from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from ssr_import.models.import_run import ImportRun
from ssr_import.models.schedule import RateItem, Section
from ssr_import.services.document import (
    DocumentWriteError,
    to_document,
    validate_sections,
    write_document,
)


def _section(**kw) -> Section:
    base = dict(id=1, item_no=1, item_key="1", category="Labour Rates", title="RATES OF LABOUR")
    base.update(kw)
    return Section(**base)


def test_to_document_top_level_keys():
    run = ImportRun("Public Health", "2005-06", "ph.xlsx", datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC), "public_health")
    doc = to_document(run, [_section()])
    assert list(doc) == ["title", "year", "source_file", "parsed_at", "sections"]
    assert doc["parsed_at"] == "2024-01-02T03:04:05Z"
    assert doc["sections"][0]["category"] == "Labour Rates"


def test_write_document_utf8_and_creates_dirs(tmp_path: Path):
    target = tmp_path / "out" / "nested" / "doc.json"
    write_document(target, {"title": "ரூ rate", "sections": []})
    text = target.read_text(encoding="utf-8")
    assert "ரூ rate" in text
    assert json.loads(text)["sections"] == []


def test_write_document_failure(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(DocumentWriteError):
        write_document(blocker / "doc.json", {})


def test_validate_clean_tree():
    sec = _section()
    sec.items.append(RateItem(1, 1, "80", "rm", 120))
    assert validate_sections([sec]) == []


def test_validate_section_with_own_rate_is_clean():
    assert validate_sections([_section(unit="rm", rate="As per Common SSR")]) == []


def test_validate_warnings():
    empty = _section(id=1, item_no=2, title=None)
    priced = _section(id=2, item_no=33)
    priced.items.append(RateItem(1, 33, "Upto 3m height", "sqm"))
    priced.items.append(RateItem(2, 33, "refund", "each", -5))
    warnings = validate_sections([empty, priced])
    assert warnings == [
        "[2] missing title",
        "[2] no rate entries found",
        "[33] item 1 (Upto 3m height) has no rate",
        "[33] item 2 has negative rate -5",
    ]
