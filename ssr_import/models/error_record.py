from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""One line of the JSON-lines error log.

Key set is fixed: timestamp, file, sheet, row, error_type, message. ``row``
is -1 when the problem belongs to the whole workbook (unreadable file,
database failure, tree-level validation warning).
"""

__all__ = [
    "FILE_ROW",
    "ErrorRecord",
]

FILE_ROW = -1


def _utc_now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ErrorRecord:
    """A read failure, write failure, database failure or validation warning.

    Attributes:
        timestamp: UTC, ISO 8601 with a ``Z`` suffix
        file: workbook file name (no directory)
        sheet: sheet name or index as text
        row: 1-based spreadsheet row, or ``FILE_ROW``
        error_type: READ_ERROR, WRITE_ERROR, DATABASE_ERROR, VALIDATION_WARNING
        message: human readable detail
    """
    timestamp: str
    file: str
    sheet: str
    row: int
    error_type: str
    message: str

    @classmethod
    def create(cls, file: str, sheet: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Stamp a new record with the current UTC time."""
        return cls(_utc_now(), file, sheet, row, error_type, message)

    def to_json_line(self) -> str:
        # ensure_ascii off: schedule text is often not plain ASCII
        return json.dumps(asdict(self), ensure_ascii=False)
