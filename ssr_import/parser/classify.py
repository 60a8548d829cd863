from __future__ import annotations

from enum import Enum

from ..models.schedule import RATE_TYPE_NUMERIC, rate_type_of
from .families import INDENTED_RE, PUBLIC_HEALTH, SUB_SECTION_RE, DocumentFamily
from .normalize import NormalizedRow

"""Row classifier.

A pure function from a normalized row (plus whether a section is open) to
exactly one structural role. Rules are evaluated in a fixed order and the
first match wins; several predicates overlap on real sheets, so the order is
part of the contract. Families that mark their headers with description
keywords instead of item numbers go through a shorter rule list.
"""

__all__ = [
    "RowRole",
    "classify_row",
    "is_note",
]


class RowRole(Enum):
    BLANK = "blank"
    COMPOUND_ITEM = "compound_item"
    SECTION_HEADER = "section_header"
    SUB_SECTION_HEADER = "sub_section_header"
    AUTO_SUB_SECTION = "auto_sub_section"
    RATE_ITEM = "rate_item"
    RATE_ONLY = "rate_only"
    NOTE = "note"
    IGNORED = "ignored"


def is_note(row: NormalizedRow, family: DocumentFamily = PUBLIC_HEALTH) -> bool:
    """Column-header, NOTE and indented continuation text."""
    if row.description is None:
        return False
    if any(p.search(row.description) for p in family.skip_patterns):
        return True
    return row.raw_description is not None and INDENTED_RE.match(row.raw_description) is not None


def _has_rate(row: NormalizedRow, family: DocumentFamily) -> bool:
    if row.rate is None:
        return False
    return not family.numeric_rates_only or rate_type_of(row.rate) == RATE_TYPE_NUMERIC


def _is_section_header(row: NormalizedRow, family: DocumentFamily) -> bool:
    if row.item_no is None or row.unit is not None or row.rate is not None:
        return False
    if family.section_requires_title and row.description is None:
        return False
    if isinstance(row.item_no, int):
        return True
    return isinstance(row.item_no, str) and family.section_pattern.match(row.item_no) is not None


def _classify_by_keyword(row: NormalizedRow, family: DocumentFamily, in_section: bool) -> RowRole:
    # priced rows are never headers, whatever their wording
    priced = _has_rate(row, family)
    if not priced and family.section_label(row.description) is not None:
        return RowRole.SECTION_HEADER
    if not priced and family.sub_section_label(row.description) is not None:
        return RowRole.SUB_SECTION_HEADER if in_section else RowRole.IGNORED
    if in_section and priced:
        return RowRole.RATE_ITEM
    if is_note(row, family):
        return RowRole.NOTE
    return RowRole.IGNORED


def classify_row(
    row: NormalizedRow,
    family: DocumentFamily = PUBLIC_HEALTH,
    *,
    in_section: bool,
) -> RowRole:
    if row.is_blank:
        return RowRole.BLANK

    if family.keyword_headers:
        if row.description is None:
            return RowRole.IGNORED
        return _classify_by_keyword(row, family, in_section)

    if row.item_key is not None and row.item_key in family.compound_keys:
        return RowRole.COMPOUND_ITEM

    if _is_section_header(row, family):
        return RowRole.SECTION_HEADER

    no_unit_or_rate = row.unit is None and row.rate is None

    if (
        in_section
        and isinstance(row.item_no, str)
        and SUB_SECTION_RE.match(row.item_no)
        and no_unit_or_rate
    ):
        return RowRole.SUB_SECTION_HEADER

    if (
        in_section
        and row.item_no is None
        and row.description is not None
        and not is_note(row, family)
        and any(p.search(row.description) for p in family.auto_sub_section_patterns)
    ):
        return RowRole.AUTO_SUB_SECTION

    if in_section and row.unit is not None and _has_rate(row, family):
        return RowRole.RATE_ITEM

    if in_section and row.unit is None and row.item_no is None and _has_rate(row, family):
        return RowRole.RATE_ONLY

    if is_note(row, family):
        return RowRole.NOTE

    # unit without rate falls through here too: no state change
    return RowRole.IGNORED
