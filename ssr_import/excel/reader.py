from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

"""Spreadsheet row source.

Reads one sheet of a workbook with no header interpretation and hands the
section builder plain rows of cell values. Blank cells become ``None``.
Header / title rows are *not* dropped here; the document family decides how
many leading rows to skip.
"""


class SheetReadError(Exception):
    """Raised when the workbook or requested sheet cannot be read."""


def read_sheet(
    path: Path,
    sheet: str | int = 0,
    keep_na_strings: bool = True,
) -> pd.DataFrame:
    """Read a single sheet as a raw DataFrame (no header row).

    Parameters
    ----------
    path: Excel ファイルパス
    sheet: シート名 or 0 始まりのインデックス
    keep_na_strings: True なら "NA" / "N.A." 等の文字列を NaN 変換せずそのまま保持
        (料率セルの "N.A." は式扱いで残す必要がある)
    """
    if not path.exists():
        raise SheetReadError(f"input file not found: {path}")
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:
        raise SheetReadError(f"cannot open workbook {path.name}: {e}") from e

    names = [str(n) for n in xls.sheet_names]
    if isinstance(sheet, int):
        if sheet < 0 or sheet >= len(names):
            raise SheetReadError(f"sheet index {sheet} does not exist in {path.name} (sheets={names})")
        name = xls.sheet_names[sheet]
    else:
        if sheet not in names:
            raise SheetReadError(f"sheet '{sheet}' not found in {path.name} (sheets={names})")
        name = sheet

    try:
        # dtype=object: 整数セルを float 化させない (項目番号 1 -> 1.0 を防ぐ)
        return xls.parse(name, header=None, dtype=object, keep_default_na=not keep_na_strings)
    except Exception as e:
        raise SheetReadError(f"cannot read sheet '{name}' of {path.name}: {e}") from e


def iter_rows(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a raw DataFrame into rows of cell values (NaN -> None)."""
    rows: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        rows.append([None if _isna(v) or v == "" else v for v in raw])
    return rows


def _isna(v: Any) -> bool:
    try:
        return bool(pd.isna(v))
    except (TypeError, ValueError):  # list-like cell values
        return False


def read_rows(path: Path, sheet: str | int = 0, keep_na_strings: bool = True) -> list[list[Any]]:
    return iter_rows(read_sheet(path, sheet, keep_na_strings=keep_na_strings))
