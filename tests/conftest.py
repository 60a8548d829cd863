# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from ssr_import.logging.init import reset_logging

# Title + header, then one example of every row shape the builder handles.
PUBLIC_HEALTH_ROWS: list[list[Any]] = [
    ["PUBLIC HEALTH ITEMS - SCHEDULE OF STANDARD RATES 2005-06", None, None, None, None],
    ["Sl.No", "Item No", "Description", "Unit", "Rate"],
    [None, 1, "RATES OF LABOUR", None, None],
    [None, None, "80", "rm", 120],
    [None, "8. a.", "LAYING CI PIPES WITH S/S ENDS", None, None],
    [None, None, "DIAMETER OF PIPE in mm", None, None],
    [None, None, "300mm", "rm", 45.5],
    [None, "a", "CI pipes", None, None],
    [None, None, "100", "joint", 12],
    [None, 12, "LAYING GI / PVC / HDPE PIPES", None, None],
    [None, None, "G.I. PIPES:", None, None],
    [None, None, "50 mm", "rm", 8.25],
    [None, None, "PVC/HDPE pipes", None, None],
    [None, None, "63", "rm", 6],
    [None, 33, "CENTERING AND SCAFFOLDING", None, None],
    [None, None, "Upto 3m height", "sqm", 245.5],
    [None, None, "Lead charges extra", "sqm", None],
    [None, None, "Above 3m height", None, 310],
    [None, None, "NOTE: rates include hire charges", None, None],
    [None, "11.a.", "LAYING RCC PIPES", "rm", "As per Common SSR"],
    [None, None, "free text without rate", None, None],
    [None, None, None, None, None],
]


def make_workbook(path: Path, rows: list[list[Any]], sheet: str = "SSR") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _no_db_env(monkeypatch):
    for var in ("DATABASE_URL", "PGDSN", "PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def make_xlsx():
    return make_workbook


@pytest.fixture()
def public_health_rows() -> list[list[Any]]:
    return [list(r) for r in PUBLIC_HEALTH_ROWS]


@pytest.fixture()
def sample_workbook(temp_workdir: Path, public_health_rows) -> Path:
    return make_workbook(temp_workdir / "data" / "publichealth.xlsx", public_health_rows)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """family: public_health
sheet: 0
year: "2005-06"
output_directory: ./output
timezone: UTC
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: ssr
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


class DummyCursor:
    """Records SQL; answers RETURNING with sequential ids."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.executed: list[tuple[str, Any]] = []
        self.rowcount = 0
        self.fail_on = fail_on
        self.closed = False

    def execute(self, sql: str, params: Any = None) -> None:
        if self.fail_on and self.fail_on in sql:
            raise RuntimeError(f"boom: {self.fail_on}")
        self.executed.append((sql, params))

    def statements(self) -> list[str]:
        return [" ".join(sql.split()) for sql, _ in self.executed]

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def dummy_cursor() -> DummyCursor:
    return DummyCursor()
