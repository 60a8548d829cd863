from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from psycopg2.extras import execute_values

"""Multi-row INSERT helper on top of psycopg2.extras.execute_values.

Values must already be adapted by the caller (``psycopg2.extras.Json`` for
jsonb columns). With ``returning`` the generated values of every page are
collected, which is how the store gets the ``ssr_imports`` id.
"""

__all__ = [
    "BatchInsertError",
    "BatchMetrics",
    "InsertResult",
    "batch_insert",
]


class BatchInsertError(Exception):
    """execute_values failed; the message is prefixed with the table name."""


@dataclass(frozen=True)
class BatchMetrics:
    """Timing of one batch_insert call (wall clock, ``time.time()``)."""
    batch_size: int
    elapsed_seconds: float
    start_time: float
    end_time: float


@dataclass(frozen=True)
class InsertResult:
    inserted_rows: int
    returned_values: list[tuple[Any, ...]] | None = None  # only with RETURNING


def _insert_sql(table: str, columns: Sequence[str], returning: str | None) -> str:
    quoted = ",".join(f'"{name}"' for name in columns)
    sql = f"INSERT INTO {table} ({quoted}) VALUES %s"
    return f"{sql} RETURNING {returning}" if returning else sql


def batch_insert(
    cursor: Any,
    table: str,
    columns: Sequence[str],
    rows: Iterable[Sequence[Any]],
    returning: str | None = None,
    page_size: int = 1000,
    metrics_callback: Callable[[BatchMetrics], None] | None = None,
) -> InsertResult:
    """Insert ``rows`` into ``table`` in pages of ``page_size``.

    Parameters
    ----------
    cursor: psycopg2 cursor (transaction handled by the caller)
    table: テーブル名 (固定値のみ。ユーザー入力は渡さない)
    columns: 列名。rows の各タプルと同じ順序
    returning: RETURNING 句の列 (例: "id")
    metrics_callback: 1 回の呼び出しにつき BatchMetrics を 1 件渡す。
        rows が空なら呼ばれない
    """
    if execute_values is None:
        raise BatchInsertError(f"{table}: psycopg2 is not available")

    batch = list(rows)
    if not batch:
        return InsertResult(0, [] if returning else None)

    sql = _insert_sql(table, columns, returning)
    started = time.time()
    try:
        fetched = execute_values(cursor, sql, batch, page_size=page_size, fetch=bool(returning))
    except Exception as e:
        raise BatchInsertError(f"{table}: {e}") from e
    finally:
        if metrics_callback is not None:
            ended = time.time()
            metrics_callback(BatchMetrics(len(batch), ended - started, started, ended))

    if not returning:
        return InsertResult(len(batch))
    return InsertResult(len(batch), list(fetched or []))
