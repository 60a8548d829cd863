"""Row classification and section reconstruction for SSR spreadsheets."""

from .builder import ParseOutcome, SectionBuilder, build_schedule
from .categories import CategoryResolver
from .classify import RowRole, classify_row
from .families import DocumentFamily, UnknownFamilyError, get_family
from .normalize import NormalizedRow, canonical_key, clean_text, normalize_row, parse_rate

__all__ = [
    "ParseOutcome",
    "SectionBuilder",
    "build_schedule",
    "CategoryResolver",
    "RowRole",
    "classify_row",
    "DocumentFamily",
    "UnknownFamilyError",
    "get_family",
    "NormalizedRow",
    "canonical_key",
    "clean_text",
    "normalize_row",
    "parse_rate",
]
