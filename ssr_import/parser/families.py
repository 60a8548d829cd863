from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from .categories import PUBLIC_HEALTH_CATEGORIES, CategoryResolver
from .normalize import ColumnLayout

"""Document families.

Each SSR spreadsheet family differs only in where its columns sit, which
regexes (or, for labour sheets, which description keywords) mark headers
and notes, and which category table applies. A family
bundles those so one section builder serves all of them.
"""

__all__ = [
    "DocumentFamily",
    "UnknownFamilyError",
    "FAMILIES",
    "PUBLIC_HEALTH",
    "PIPE_RATES",
    "LABOUR_RATES",
    "get_family",
]

SECTION_HEADER_RE = re.compile(r"^\d+\s*\.?\s*[a-z]?\.?$", re.IGNORECASE)
SUB_SECTION_RE = re.compile(r"^[a-zA-Z]$")

DEFAULT_SKIP_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^DIAMETER OF PIPE", re.IGNORECASE),
    re.compile(r"^DIA (in|of)", re.IGNORECASE),
    re.compile(r"^NOTE\b", re.IGNORECASE),
)
INDENTED_RE = re.compile(r"^\s{4,}")


class UnknownFamilyError(KeyError):
    pass


@dataclass(frozen=True)
class DocumentFamily:
    name: str
    title: str
    year: str
    columns: ColumnLayout = field(default_factory=ColumnLayout)
    header_rows: int = 2  # title + column header, always skipped
    categories: Mapping[str, str] = field(default_factory=dict)
    # two-part codes that are top-level entries even though they look like sub-items
    compound_keys: frozenset[str] = frozenset()
    section_pattern: re.Pattern[str] = SECTION_HEADER_RE
    auto_sub_section_patterns: tuple[re.Pattern[str], ...] = ()
    skip_patterns: tuple[re.Pattern[str], ...] = DEFAULT_SKIP_PATTERNS
    inherit_section_unit: bool = False
    rate_decimals: int | None = None
    # a numbered row with an empty description is not a header
    section_requires_title: bool = False
    # (lower-case substring, label); non-empty switches to keyword headers
    section_keywords: tuple[tuple[str, str], ...] = ()
    sub_section_keywords: tuple[tuple[str, str], ...] = ()
    numeric_rates_only: bool = False

    def resolver(self) -> CategoryResolver:
        return CategoryResolver(self.categories)

    @property
    def keyword_headers(self) -> bool:
        return bool(self.section_keywords)

    def section_label(self, description: str | None) -> str | None:
        return _match_keyword(description, self.section_keywords)

    def sub_section_label(self, description: str | None) -> str | None:
        return _match_keyword(description, self.sub_section_keywords)


def _match_keyword(description: str | None, keywords: tuple[tuple[str, str], ...]) -> str | None:
    if description is None:
        return None
    lowered = description.lower()
    for needle, label in keywords:
        if needle in lowered:
            return label
    return None


PUBLIC_HEALTH = DocumentFamily(
    name="public_health",
    title="Public Health Items - Schedule of Standard Rates",
    year="2005-06",
    categories=PUBLIC_HEALTH_CATEGORIES,
    compound_keys=frozenset(
        {"8a", "8b", "9a", "9b", "11a", "11b", "18a", "18b", "41a", "41b"}
    ),
    auto_sub_section_patterns=(
        re.compile(r"G\.I\. PIPES", re.IGNORECASE),
        re.compile(r"PVC.HDPE pipes", re.IGNORECASE),
    ),
)

# BIS No.3114/85 pipe-rate schedules: no serial column, no title rows,
# unit given once per table on the first data row.
PIPE_RATES = DocumentFamily(
    name="pipe_rates",
    title="Public Health - Pipe Rates (BIS No.3114/85)",
    year="2005-06",
    columns=ColumnLayout(item_no=0, description=1, unit=2, rate=3),
    header_rows=0,
    section_pattern=re.compile(r"^\d+$|^\d+\.\s*[a-z]\.$", re.IGNORECASE),
    skip_patterns=(re.compile(r"^DIAMETER OF PIPE", re.IGNORECASE),),
    inherit_section_unit=True,
    rate_decimals=2,
    section_requires_title=True,
)

# Labour rate sheets: no item numbers, categories named in the description
# ("SKILLED WORKMEN", "First class", ...). Only numeric rates are kept.
LABOUR_RATES = DocumentFamily(
    name="labour_rates",
    title="Labour Rates - Schedule of Standard Rates",
    year="2005-06",
    header_rows=0,
    skip_patterns=(re.compile(r"^NOTE\b", re.IGNORECASE),),
    # "semi-skilled workmen" and "unskilled workmen" both contain "skilled workmen"
    section_keywords=(
        ("semi-skilled", "Semi-Skilled"),
        ("unskilled", "Unskilled"),
        ("skilled workmen", "Skilled"),
        ("other conveyance", "Conveyance"),
    ),
    sub_section_keywords=(
        ("first class", "First Class"),
        ("second class", "Second Class"),
        ("operator", "Operator"),
    ),
    numeric_rates_only=True,
)

FAMILIES: Mapping[str, DocumentFamily] = {
    PUBLIC_HEALTH.name: PUBLIC_HEALTH,
    PIPE_RATES.name: PIPE_RATES,
    LABOUR_RATES.name: LABOUR_RATES,
}


def get_family(name: str) -> DocumentFamily:
    try:
        return FAMILIES[name]
    except KeyError:
        raise UnknownFamilyError(
            f"unknown document family: {name!r} (known: {', '.join(sorted(FAMILIES))})"
        ) from None
