from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Integral, Real
from typing import Any

"""Cell normalization.

Turns raw spreadsheet cells (strings, numbers, NaN/None for blanks) into the
fields the classifier works on. Nothing here raises on odd input: unparseable
values are either kept as text or treated as absent.
"""

__all__ = [
    "ColumnLayout",
    "NormalizedRow",
    "is_blank",
    "clean_text",
    "clean_item_no",
    "parse_rate",
    "canonical_key",
    "normalize_row",
]

_WS_RE = re.compile(r"\s+")
# leading numeric prefix, same acceptance as JavaScript parseFloat
_LEADING_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_KEY_STRIP_RE = re.compile(r"[\s.]+")


@dataclass(frozen=True)
class ColumnLayout:
    """Zero-based positions of the meaningful columns in a raw row."""
    item_no: int = 1
    description: int = 2
    unit: int = 3
    rate: int = 4

    @property
    def width(self) -> int:
        return max(self.item_no, self.description, self.unit, self.rate) + 1


@dataclass(frozen=True)
class NormalizedRow:
    row_number: int  # 1-based spreadsheet row
    item_no: int | str | None
    item_key: str | None
    description: str | None
    raw_description: str | None  # untrimmed, for the indentation rule
    unit: str | None
    rate: float | int | str | None

    @property
    def is_blank(self) -> bool:
        return (
            self.item_no is None
            and self.description is None
            and self.unit is None
            and self.rate is None
        )


def is_blank(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, float) and math.isnan(v):
        return True
    return False


def _to_str(v: Any) -> str:
    # 80.0 -> "80" so numeric description cells read like the sheet shows them
    if isinstance(v, Real) and not isinstance(v, (bool, Integral)) and float(v).is_integer():
        return str(int(v))
    return str(v)


def clean_text(v: Any) -> str | None:
    """Trim and collapse internal whitespace; blanks become None."""
    if is_blank(v):
        return None
    text = _WS_RE.sub(" ", _to_str(v)).strip()
    return text or None


def clean_item_no(v: Any) -> int | str | None:
    if is_blank(v):
        return None
    if isinstance(v, bool):
        return str(v)
    if isinstance(v, Integral):
        return int(v)
    if isinstance(v, Real):
        f = float(v)
        return int(f) if f.is_integer() else f  # type: ignore[return-value]
    text = str(v).strip()
    return text or None


def parse_rate(v: Any, decimals: int | None = None) -> float | int | str | None:
    """Parse a rate cell.

    Numbers pass through unchanged. Strings are read through their leading
    numeric prefix ("100 approx" -> 100.0); strings with no numeric prefix
    are kept verbatim, which is how formula rates such as
    "As per Common SSR" survive. Blank input yields None.
    """
    if is_blank(v):
        return None
    if isinstance(v, Real) and not isinstance(v, bool):
        if decimals is not None:
            return round(float(v), decimals)
        return v  # type: ignore[return-value]
    text = str(v).strip()
    if not text:
        return None
    m = _LEADING_FLOAT_RE.match(text)
    if m is None:
        return text
    num = float(m.group(0))
    if decimals is not None:
        num = round(num, decimals)
    return num


def canonical_key(item_no: Any) -> str | None:
    """'8. a.' -> '8a', 11 -> '11'."""
    if is_blank(item_no):
        return None
    return _KEY_STRIP_RE.sub("", _to_str(item_no)).lower()


def normalize_row(
    row_number: int,
    cells: Sequence[Any],
    layout: ColumnLayout | None = None,
    rate_decimals: int | None = None,
) -> NormalizedRow:
    layout = layout or ColumnLayout()
    padded = list(cells) + [None] * max(0, layout.width - len(cells))

    item_no = clean_item_no(padded[layout.item_no])
    raw_desc = padded[layout.description]
    return NormalizedRow(
        row_number=row_number,
        item_no=item_no,
        item_key=canonical_key(item_no),
        description=clean_text(raw_desc),
        raw_description=None if is_blank(raw_desc) else _to_str(raw_desc),
        unit=clean_text(padded[layout.unit]),
        rate=parse_rate(padded[layout.rate], rate_decimals),
    )
