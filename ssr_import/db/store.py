from __future__ import annotations

import logging
from typing import Any

from psycopg2.extras import Json

from ssr_import.models.import_run import ImportRun
from ssr_import.models.schedule import Section

from .batch_insert import BatchInsertError, batch_insert

"""PostgreSQL sink for parsed schedules.

Two record sets:

* ``ssr_imports``  one row per run (title, year, source file, totals)
* ``ssr_sections`` one row per Section; sub-sections and items embedded as
  jsonb, plus a denormalised ``metadata`` copy of the run

A rerun of the same run key (family, year, source file) replaces the earlier
rows: delete then insert inside one transaction.
"""

__all__ = [
    "StoreError",
    "SCHEMA_SQL",
    "INDEX_SQL",
    "ensure_schema",
    "create_indexes",
    "section_record",
    "store_import",
]

logger = logging.getLogger(__name__)

IMPORTS_TABLE = "ssr_imports"
SECTIONS_TABLE = "ssr_sections"

SCHEMA_SQL = (
    f"""
    CREATE TABLE IF NOT EXISTS {IMPORTS_TABLE} (
        id             SERIAL PRIMARY KEY,
        import_key     TEXT NOT NULL,
        title          TEXT NOT NULL,
        year           TEXT NOT NULL,
        source_file    TEXT NOT NULL,
        family         TEXT NOT NULL,
        imported_at    TIMESTAMPTZ NOT NULL,
        total_sections INTEGER NOT NULL,
        total_items    INTEGER NOT NULL
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {SECTIONS_TABLE} (
        id           SERIAL PRIMARY KEY,
        import_id    INTEGER NOT NULL REFERENCES {IMPORTS_TABLE}(id) ON DELETE CASCADE,
        import_key   TEXT NOT NULL,
        position     INTEGER NOT NULL,
        item_no      TEXT,
        item_key     TEXT NOT NULL,
        category     TEXT NOT NULL,
        title        TEXT,
        unit         TEXT,
        rate         JSONB,
        rate_type    TEXT,
        metadata     JSONB NOT NULL,
        sub_sections JSONB NOT NULL,
        items        JSONB NOT NULL,
        search_text  TEXT NOT NULL DEFAULT ''
    )
    """,
)

INDEX_SQL = (
    f"CREATE INDEX IF NOT EXISTS ssr_imports_key_idx ON {IMPORTS_TABLE} (import_key)",
    f"CREATE INDEX IF NOT EXISTS ssr_sections_item_key_idx ON {SECTIONS_TABLE} (item_key)",
    f"CREATE INDEX IF NOT EXISTS ssr_sections_category_idx ON {SECTIONS_TABLE} (category)",
    f"CREATE INDEX IF NOT EXISTS ssr_sections_year_idx ON {SECTIONS_TABLE} ((metadata->>'year'))",
    f"CREATE INDEX IF NOT EXISTS ssr_sections_items_idx ON {SECTIONS_TABLE} USING GIN (items jsonb_path_ops)",
    f"CREATE INDEX IF NOT EXISTS ssr_sections_sub_items_idx ON {SECTIONS_TABLE} USING GIN (sub_sections jsonb_path_ops)",
    f"CREATE INDEX IF NOT EXISTS text_search_idx ON {SECTIONS_TABLE} USING GIN (to_tsvector('simple', search_text))",
)

SECTION_COLUMNS = (
    "import_id",
    "import_key",
    "position",
    "item_no",
    "item_key",
    "category",
    "title",
    "unit",
    "rate",
    "rate_type",
    "metadata",
    "sub_sections",
    "items",
    "search_text",
)


class StoreError(Exception):
    pass


def ensure_schema(cursor: Any) -> None:
    for stmt in SCHEMA_SQL:
        cursor.execute(stmt)


def create_indexes(cursor: Any) -> None:
    for stmt in INDEX_SQL:
        cursor.execute(stmt)


def _search_text(section: Section) -> str:
    parts = [section.title or ""]
    parts.extend(s.description or "" for s in section.sub_sections)
    return " ".join(p for p in parts if p)


def section_record(import_id: int, run: ImportRun, section: Section) -> tuple[Any, ...]:
    doc = section.to_dict()
    return (
        import_id,
        run.import_key,
        section.id,
        None if section.item_no is None else str(section.item_no),
        section.item_key,
        section.category,
        section.title,
        section.unit,
        None if section.rate is None else Json(section.rate),
        section.rate_type,
        Json(run.metadata()),
        Json(doc["sub_sections"]),
        Json(doc["items"]),
        _search_text(section),
    )


def store_import(cursor: Any, run: ImportRun, sections: list[Section], page_size: int = 500) -> int:
    """Replace the rows of ``run.import_key`` and return the new import id.

    The whole replacement runs in one transaction; on any failure it is
    rolled back so earlier rows for the same run key survive.
    """
    try:
        cursor.execute("BEGIN")
        ensure_schema(cursor)
        cursor.execute(f"DELETE FROM {IMPORTS_TABLE} WHERE import_key = %s", (run.import_key,))
        replaced = getattr(cursor, "rowcount", 0) or 0
        if replaced > 0:
            logger.info("replacing %d earlier import(s) for %s", replaced, run.import_key)

        res = batch_insert(
            cursor,
            IMPORTS_TABLE,
            (
                "import_key",
                "title",
                "year",
                "source_file",
                "family",
                "imported_at",
                "total_sections",
                "total_items",
            ),
            [
                (
                    run.import_key,
                    run.title,
                    run.year,
                    run.source_file,
                    run.family,
                    run.parsed_at,
                    run.total_sections,
                    run.total_items,
                )
            ],
            returning="id",
        )
        if not res.returned_values:
            raise StoreError(f"no id returned for {IMPORTS_TABLE} row")
        import_id = int(res.returned_values[0][0])

        batch_insert(
            cursor,
            SECTIONS_TABLE,
            SECTION_COLUMNS,
            [section_record(import_id, run, s) for s in sections],
            page_size=page_size,
        )
        create_indexes(cursor)
        cursor.execute("COMMIT")
    except BatchInsertError as e:
        _rollback(cursor)
        raise StoreError(f"insert failed: {e}") from e
    except Exception as e:
        _rollback(cursor)
        raise StoreError(f"store failed: {e}") from e

    logger.info("stored import_id=%d sections=%d", import_id, len(sections))
    return import_id


def _rollback(cursor: Any) -> None:
    try:
        cursor.execute("ROLLBACK")
    except Exception:
        logger.warning("rollback failed", exc_info=True)
