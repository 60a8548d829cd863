from __future__ import annotations

import json
import re
from pathlib import Path

from ssr_import.logging.error_log import ErrorLogBuffer
from ssr_import.models.error_record import ErrorRecord


def test_flush_empty_writes_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_flush_writes_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    buf.append(ErrorRecord.create("ph.xlsx", "0", -1, "VALIDATION_WARNING", "[2] no rate entries found"))
    buf.append(ErrorRecord.create("ph.xlsx", "0", -1, "WRITE_ERROR", "cannot write"))
    path = buf.flush()
    assert path is not None
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["error_type"] == "VALIDATION_WARNING"
    assert first["row"] == -1
    assert first["timestamp"].endswith("Z")
    # buffer is cleared after flush
    assert buf.flush() is None


def test_second_flush_appends_to_same_file(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.append(ErrorRecord.create("a", "0", 1, "READ_ERROR", "x"))
    p1 = buf.flush()
    buf.append(ErrorRecord.create("a", "0", 2, "READ_ERROR", "y"))
    p2 = buf.flush()
    assert p1 == p2
    assert len(p1.read_text(encoding="utf-8").splitlines()) == 2


def test_error_record_non_ascii_kept():
    line = ErrorRecord.create("ph.xlsx", "Sheet1", 5, "VALIDATION_WARNING", "விலை missing").to_json_line()
    assert "விலை" in line
