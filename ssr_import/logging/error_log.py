from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ssr_import.models.error_record import ErrorRecord

"""Buffered JSON-lines error log.

Records collected during a run are written in one go by ``flush()`` to
``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC stamp taken when the file is first
needed). A run that records nothing leaves no file behind.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

DEFAULT_LOGS_DIR = Path("logs")
_STAMP = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Collects ErrorRecords for one process. Not thread safe."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self.logs_dir = logs_dir or DEFAULT_LOGS_DIR
        self._pending: list[ErrorRecord] = []
        self._path: Path | None = None

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def file_path(self) -> Path:
        """Log file for this buffer; the directory is created on first use."""
        if self._path is None:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            name = f"errors-{datetime.now(UTC).strftime(_STAMP)}.log"
            self._path = self.logs_dir / name
        return self._path

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def flush(self) -> Path | None:
        """Append pending records to the log file and return its path.

        Returns None (and touches nothing) when no record is pending.
        """
        if not self._pending:
            return None
        path = self.file_path
        lines = "".join(f"{rec.to_json_line()}\n" for rec in self._pending)
        with path.open("a", encoding="utf-8") as out:
            out.write(lines)
        self._pending = []
        return path
