#!/usr/bin/env python3
"""Generate a synthetic Public Health SSR workbook.

The layout matches what the importer expects for the ``public_health``
family:

- Row 1: title row
- Row 2: column header row (Sl.No / Item No / Description / Unit / Rate)
- Row 3+: section headers, lettered sub-sections, diameter rows with unit and
  rate, notes, rate-only continuation rows and formula rates

Useful for demos and for timing larger sheets.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

DIAMETERS = [80, 100, 150, 200, 250, 300, 350, 400, 450, 500, 600, 700]


def generate_rows(sections: int, seed: int = 42) -> list[list[Any]]:
    """Build raw rows (5 columns) for ``sections`` schedule entries."""
    rng = np.random.default_rng(seed)
    rows: list[list[Any]] = [
        ["PUBLIC HEALTH ITEMS - SCHEDULE OF STANDARD RATES 2005-06", None, None, None, None],
        ["Sl.No", "Item No", "Description", "Unit", "Rate"],
    ]
    for n in range(1, sections + 1):
        kind = n % 4
        if kind == 1:
            rows.append([None, n, f"LABOUR FOR LAYING PIPES (ITEM {n})", None, None])
            rows.append([None, None, "DIAMETER OF PIPE in mm", None, None])
            for d in DIAMETERS:
                rows.append([None, None, f"{d}mm", "rm", float(np.round(rng.uniform(5, 500), 2))])
        elif kind == 2:
            rows.append([None, f"{n}. a.", f"JOINTING OF PIPES (ITEM {n}a)", None, None])
            rows.append([None, "a", "CI pipes", None, None])
            for d in DIAMETERS[:6]:
                rows.append([None, None, str(d), "joint", float(np.round(rng.uniform(10, 200), 2))])
            rows.append([None, "b", "DI pipes", None, None])
            for d in DIAMETERS[:6]:
                rows.append([None, None, str(d), "joint", float(np.round(rng.uniform(10, 200), 2))])
        elif kind == 3:
            rows.append([None, n, f"CENTERING AND SCAFFOLDING (ITEM {n})", None, None])
            rows.append([None, None, "Upto 3m height", "sqm", float(np.round(rng.uniform(20, 90), 2))])
            rows.append([None, None, "Above 3m height", None, float(np.round(rng.uniform(90, 160), 2))])
            rows.append([None, None, "NOTE: rates include hire charges", None, None])
        else:
            rows.append([None, n, f"CONVEYANCE OF PIPES (ITEM {n})", None, None])
            rows.append([None, None, "per km", "km", "As per Common SSR"])
    return rows


def create_excel_file(output_path: Path, sections: int, seed: int = 42) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(generate_rows(sections, seed))
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="SSR", header=False, index=False)
    print(f"Created Excel file: {output_path}")
    print(f"  Sections: {sections}")
    print(f"  Rows: {len(df)} (incl. 2 header rows)")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a synthetic Public Health SSR workbook")
    parser.add_argument("output", type=Path, help="Output Excel file path")
    parser.add_argument("--sections", type=int, default=53, help="Number of schedule entries (default: 53)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.sections <= 0:
        print("Error: --sections must be positive", file=sys.stderr)
        return 1
    try:
        create_excel_file(args.output, args.sections, args.seed)
    except OSError as e:
        print(f"Error generating workbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
