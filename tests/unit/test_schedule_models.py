from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from ssr_import.models.import_run import ImportRun
from ssr_import.models.schedule import RateItem, Section, SubSection, rate_type_of


def test_rate_type_of():
    assert rate_type_of(None) is None
    assert rate_type_of(12) == "numeric"
    assert rate_type_of(1.5) == "numeric"
    assert rate_type_of("As per Common SSR") == "formula"


def test_rate_item_assign_rate_updates_type():
    item = RateItem(id=1, section_item_no=33, dimension="Upto 3m height", unit="sqm")
    assert not item.has_rate
    assert item.rate_type is None
    item.assign_rate(245.5)
    assert item.has_rate
    assert item.rate_type == "numeric"


def test_section_to_dict_shape():
    sec = Section(id=1, item_no=12, item_key="12", category="GI/PVC/HDPE Pipe Laying", title="GI")
    sec.items.append(RateItem(1, 12, "50", "rm", 8.25))
    sub = SubSection("auto_1", "G.I. PIPES:")
    sub.items.append(RateItem(2, 12, "63", "rm", 6))
    sec.sub_sections.append(sub)

    d = sec.to_dict()
    assert list(d) == [
        "id",
        "item_no",
        "item_key",
        "category",
        "title",
        "unit",
        "rate",
        "rate_type",
        "sub_sections",
        "items",
    ]
    assert d["unit"] is None and d["rate"] is None and d["rate_type"] is None
    assert d["sub_sections"][0]["items"][0]["id"] == 2
    assert d["items"][0] == {
        "id": 1,
        "section_item_no": 12,
        "dimension": "50",
        "unit": "rm",
        "rate": 8.25,
        "rate_type": "numeric",
    }
    assert sec.item_count == 2
    assert [i.id for i in sec.iter_items()] == [1, 2]


def test_import_run_for_sections_and_key():
    sec = Section(id=1, item_no=1, item_key="1", category="Labour Rates", title="LABOUR")
    sec.items.append(RateItem(1, 1, "80", "rm", 120))
    t = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    run = ImportRun.for_sections(
        [sec], title="T", year="2005-06", source_file="ph.xlsx", parsed_at=t, family="public_health"
    )
    assert run.total_sections == 1
    assert run.total_items == 1
    assert run.import_key == "public_health:2005-06:ph.xlsx"
    assert run.parsed_at_iso == "2024-05-01T12:00:00Z"
    assert run.metadata() == {
        "title": "T",
        "year": "2005-06",
        "source_file": "ph.xlsx",
        "imported_at": "2024-05-01T12:00:00Z",
    }


def test_import_run_keeps_non_utc_offset():
    ist = timezone(timedelta(hours=5, minutes=30))
    run = ImportRun("T", "2005-06", "ph.xlsx", datetime(2024, 5, 1, 12, 0, tzinfo=ist), "public_health")
    assert run.parsed_at_iso == "2024-05-01T12:00:00+05:30"
