from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Any

"""Schedule tree models: Section -> SubSection -> RateItem.

Sections own their sub-sections and direct rate items; a sub-section owns its
rate items. Nothing is shared between parents. The tree is assembled entirely
in memory by the section builder before anything is emitted, so the single
permitted mutation (rate back-fill on the last item) is never observable by a
downstream consumer.
"""

__all__ = [
    "RATE_TYPE_NUMERIC",
    "RATE_TYPE_FORMULA",
    "rate_type_of",
    "RateItem",
    "SubSection",
    "Section",
]

RATE_TYPE_NUMERIC = "numeric"
RATE_TYPE_FORMULA = "formula"

Rate = float | int | str | None


def rate_type_of(rate: Rate) -> str | None:
    """Classify a parsed rate: numbers are numeric, leftover text is a formula."""
    if rate is None:
        return None
    if isinstance(rate, Real) and not isinstance(rate, bool):
        return RATE_TYPE_NUMERIC
    return RATE_TYPE_FORMULA


@dataclass
class RateItem:
    """A single priced line (dimension / unit / rate)."""
    id: int
    section_item_no: Any  # owning Section.item_no, verbatim
    dimension: str | None
    unit: str | None
    rate: Rate = None
    rate_type: str | None = None

    def __post_init__(self) -> None:
        self.rate_type = rate_type_of(self.rate)

    @property
    def has_rate(self) -> bool:
        return self.rate is not None

    def assign_rate(self, rate: Rate) -> None:
        # back-fill for rows where unit and rate were split over two lines
        self.rate = rate
        self.rate_type = rate_type_of(rate)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "section_item_no": self.section_item_no,
            "dimension": self.dimension,
            "unit": self.unit,
            "rate": self.rate,
            "rate_type": self.rate_type,
        }


@dataclass
class SubSection:
    sub_id: str  # letter from the item-no column, or auto_<n>
    description: str | None
    items: list[RateItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sub_id": self.sub_id,
            "description": self.description,
            "items": [i.to_dict() for i in self.items],
        }


@dataclass
class Section:
    """Top-level schedule entry (an "item" of the printed schedule).

    ``unit``/``rate`` are only set when the entry itself carries a single rate
    instead of a table of rate items. ``category`` is always populated; the
    resolver falls back to ``"General"``.
    """
    id: int
    item_no: Any  # verbatim identifier for display (int or str)
    item_key: str
    category: str
    title: str | None
    unit: str | None = None
    rate: Rate = None
    rate_type: str | None = None
    sub_sections: list[SubSection] = field(default_factory=list)
    items: list[RateItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.rate_type = rate_type_of(self.rate)

    @property
    def item_count(self) -> int:
        """Direct items plus items of every sub-section."""
        return len(self.items) + sum(len(s.items) for s in self.sub_sections)

    def iter_items(self):
        yield from self.items
        for sub in self.sub_sections:
            yield from sub.items

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "item_no": self.item_no,
            "item_key": self.item_key,
            "category": self.category,
            "title": self.title,
            "unit": self.unit,
            "rate": self.rate,
            "rate_type": self.rate_type,
            "sub_sections": [s.to_dict() for s in self.sub_sections],
            "items": [i.to_dict() for i in self.items],
        }
