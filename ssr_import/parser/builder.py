from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.schedule import RateItem, Section, SubSection
from .classify import RowRole, classify_row
from .families import PUBLIC_HEALTH, DocumentFamily
from .normalize import NormalizedRow, canonical_key, normalize_row

"""Section builder: the state machine that turns classified rows into a tree.

States: no section -> in section -> in sub-section. Every section is appended
to the output the moment its header row is seen, so the last section needs
no flush at end of input. Malformed rows never raise; they are counted and
dropped.
"""

__all__ = [
    "ParseOutcome",
    "SectionBuilder",
    "build_schedule",
    "strip_dimension",
]

logger = logging.getLogger(__name__)

_MM_SUFFIX_RE = re.compile(r"\s*mm$", re.IGNORECASE)


def strip_dimension(desc: str | None) -> str | None:
    """'80mm' -> '80'; the unit suffix is implied by the table heading."""
    if desc is None:
        return None
    return _MM_SUFFIX_RE.sub("", desc).strip()


def _label_key(label: str) -> str:
    # "First Class" -> "first_class"
    return label.lower().replace(" ", "_")


@dataclass
class ParseOutcome:
    sections: list[Section]
    role_counts: Counter[str] = field(default_factory=Counter)
    rows_read: int = 0

    @property
    def total_items(self) -> int:
        return sum(s.item_count for s in self.sections)


class SectionBuilder:
    """Accumulator owning the section / sub-section cursors for one run."""

    def __init__(self, family: DocumentFamily = PUBLIC_HEALTH) -> None:
        self.family = family
        self.resolver = family.resolver()
        self.sections: list[Section] = []
        self.current_section: Section | None = None
        self.current_sub_section: SubSection | None = None
        self.role_counts: Counter[str] = Counter()
        self.rows_read = 0
        self._next_item_id = 1

    @property
    def in_section(self) -> bool:
        return self.current_section is not None

    def feed(self, row: NormalizedRow) -> RowRole:
        """Classify one row and apply it; returns the role it was given."""
        role = classify_row(row, self.family, in_section=self.in_section)
        self.rows_read += 1
        self.role_counts[role.value] += 1

        if role in (RowRole.SECTION_HEADER, RowRole.COMPOUND_ITEM):
            self._open_section(row)
        elif role is RowRole.SUB_SECTION_HEADER:
            label = self.family.sub_section_label(row.description)
            sub_id = _label_key(label) if label is not None else str(row.item_no)
            self._open_sub_section(sub_id, row.description)
        elif role is RowRole.AUTO_SUB_SECTION:
            assert self.current_section is not None
            n = len(self.current_section.sub_sections) + 1
            self._open_sub_section(f"auto_{n}", row.description)
        elif role is RowRole.RATE_ITEM:
            self._add_rate_item(row)
        elif role is RowRole.RATE_ONLY:
            self._apply_rate_only(row)
        else:
            logger.debug("row=%d role=%s dropped", row.row_number, role.value)
        return role

    def feed_all(self, rows: Iterable[NormalizedRow]) -> ParseOutcome:
        for row in rows:
            self.feed(row)
        return self.outcome()

    def outcome(self) -> ParseOutcome:
        return ParseOutcome(
            sections=self.sections,
            role_counts=self.role_counts,
            rows_read=self.rows_read,
        )

    # -- transitions -----------------------------------------------------

    def _open_section(self, row: NormalizedRow) -> None:
        label = self.family.section_label(row.description) if self.family.keyword_headers else None
        if label is not None:
            # serial cells on heading rows are dropped; the label is the item number
            item_no, item_key, category = label, canonical_key(label) or "", label
            unit, rate = None, None  # heading text only
        else:
            item_no = row.item_no
            item_key = row.item_key or ""
            category = self.resolver.resolve(row.item_key, row.item_no)
            unit, rate = row.unit, row.rate
        section = Section(
            id=len(self.sections) + 1,
            item_no=item_no,
            item_key=item_key,
            category=category,
            title=row.description,
            unit=unit,
            rate=rate,
        )
        self.sections.append(section)
        self.current_section = section
        self.current_sub_section = None
        logger.debug(
            "row=%d section item_no=%s category=%s", row.row_number, row.item_no, section.category
        )

    def _open_sub_section(self, sub_id: str, description: str | None) -> None:
        assert self.current_section is not None
        sub = SubSection(sub_id=sub_id, description=description)
        self.current_section.sub_sections.append(sub)
        self.current_sub_section = sub

    def _target(self) -> list[RateItem]:
        if self.current_sub_section is not None:
            return self.current_sub_section.items
        assert self.current_section is not None
        return self.current_section.items

    def _new_item(self, desc: str | None, unit: str | None, rate: Any) -> RateItem:
        assert self.current_section is not None
        item = RateItem(
            id=self._next_item_id,
            section_item_no=self.current_section.item_no,
            dimension=strip_dimension(desc),
            unit=unit,
            rate=rate,
        )
        self._next_item_id += 1
        return item

    def _add_rate_item(self, row: NormalizedRow) -> None:
        section = self.current_section
        assert section is not None
        if self.family.inherit_section_unit and section.unit is None:
            section.unit = row.unit
        self._target().append(self._new_item(row.description, row.unit, row.rate))

    def _apply_rate_only(self, row: NormalizedRow) -> None:
        target = self._target()
        if not target and row.description is not None:
            target.append(self._new_item(row.description, None, row.rate))
        elif target and not target[-1].has_rate:
            target[-1].assign_rate(row.rate)
            logger.debug("row=%d back-filled rate on item id=%d", row.row_number, target[-1].id)
        else:
            target.append(self._new_item(row.description, None, row.rate))


def build_schedule(
    rows: Iterable[Sequence[Any]],
    family: DocumentFamily = PUBLIC_HEALTH,
    on_row: Callable[[NormalizedRow, RowRole, SectionBuilder], None] | None = None,
) -> ParseOutcome:
    """Parse raw spreadsheet rows (header rows included) into sections.

    The first ``family.header_rows`` rows are the title / column header and are
    skipped unconditionally. ``on_row`` is called after each data row is
    applied (progress display, inspection).
    """
    builder = SectionBuilder(family)
    for idx, cells in enumerate(rows):
        if idx < family.header_rows:
            continue
        row = normalize_row(idx + 1, cells, family.columns, family.rate_decimals)
        role = builder.feed(row)
        if on_row is not None:
            on_row(row, role, builder)
    outcome = builder.outcome()
    logger.debug(
        "parsed family=%s rows=%d sections=%d items=%d roles=%s",
        family.name,
        outcome.rows_read,
        len(outcome.sections),
        outcome.total_items,
        dict(outcome.role_counts),
    )
    return outcome
