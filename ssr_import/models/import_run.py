from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .schedule import Section

"""ImportRun model: metadata attached to one parse/import run.

The same metadata is written at the top of the JSON document (file mode) and
as the ``ssr_imports`` row plus a denormalised ``metadata`` copy on every
section record (database mode).
"""

__all__ = [
    "ImportRun",
]


@dataclass(frozen=True)
class ImportRun:
    title: str
    year: str
    source_file: str  # file name only, never the full path
    parsed_at: datetime  # UTC
    family: str
    total_sections: int = 0
    total_items: int = 0

    @property
    def import_key(self) -> str:
        """Run key scoping delete-then-insert replacement in the database."""
        return f"{self.family}:{self.year}:{self.source_file}"

    @property
    def parsed_at_iso(self) -> str:
        return self.parsed_at.isoformat().replace("+00:00", "Z")

    @staticmethod
    def for_sections(
        sections: list[Section],
        *,
        title: str,
        year: str,
        source_file: str,
        parsed_at: datetime,
        family: str,
    ) -> ImportRun:
        return ImportRun(
            title=title,
            year=year,
            source_file=source_file,
            parsed_at=parsed_at,
            family=family,
            total_sections=len(sections),
            total_items=sum(s.item_count for s in sections),
        )

    def metadata(self) -> dict[str, str]:
        """Denormalised copy stored alongside each persisted section."""
        return {
            "title": self.title,
            "year": self.year,
            "source_file": self.source_file,
            "imported_at": self.parsed_at_iso,
        }
