from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm

"""Per-row progress bar for the parse step.

Only drawn when stdout is a terminal; under CI or when piped, the SUMMARY
line is the only progress report.
"""

__all__ = [
    "RowProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class RowProgress:
    """One bar over the data rows of a sheet, postfixed with the section count."""

    def __init__(self, total_rows: int, *, description: str = "Parsing rows") -> None:
        self.total_rows = total_rows
        self.description = description
        self.current_row = 0
        self.enabled = is_tty_enabled()
        self.pbar: Any = self._open_bar() if self.enabled else None

    def _open_bar(self) -> Any:
        # leave=False: the bar disappears so the SUMMARY line follows the log
        return tqdm(
            total=self.total_rows,
            desc=self.description,
            unit="row",
            disable=False,
            leave=False,
            position=0,
            ncols=80,
            ascii=True,
        )

    def advance(self, sections: int | None = None) -> None:
        self.current_row += 1
        if self.pbar is None:
            return
        self.pbar.update(1)
        if sections is not None:
            self.pbar.set_postfix(sections=sections, refresh=False)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
        self.pbar = None

    def __enter__(self) -> RowProgress:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
