from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .import_run import ImportRun

"""Processing result model for one SSR import run.

Aggregates what the SUMMARY line and the CLI need to report: where the output
went, how many rows were read and how they were classified, and the
validation warnings raised over the finished tree.
"""

__all__ = [
    "ProcessingResult",
]


@dataclass(frozen=True)
class ProcessingResult:
    run: ImportRun
    mode: str  # "json" | "db"
    rows_read: int  # data rows after the header offset
    role_counts: Counter[str]  # RowRole.value -> count
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    output_path: Path | None = None  # json mode only
    import_id: int | None = None  # db mode only
    warnings: list[str] = field(default_factory=list)

    @property
    def total_sections(self) -> int:
        return self.run.total_sections

    @property
    def total_items(self) -> int:
        return self.run.total_items

    @property
    def ignored_rows(self) -> int:
        """Rows that produced no structure (notes, free text, orphans)."""
        return sum(self.role_counts.get(k, 0) for k in ("note", "ignored"))
