from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg2

from ssr_import.models.config_models import DatabaseConfig

"""PostgreSQL connection handling.

接続情報の解決優先順位:
    1. DATABASE_URL / PGDSN (DSN 全体)
    2. 個別 PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE
    3. 設定ファイルの database セクション (不足分のフォールバック)

.env は CLI 起動時に python-dotenv で読み込み済み (上書きモード)。
"""

logger = logging.getLogger(__name__)

_KV_PASSWORD_RE = re.compile(r"(password=)\S+")
_URL_PASSWORD_RE = re.compile(r"(//[^:/@]+:)[^@]*@")


class DatabaseConnectionError(Exception):
    """Raised when no connection can be established."""


def resolve_dsn(db_cfg: DatabaseConfig) -> str:
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


def redact_dsn(dsn: str) -> str:
    return _URL_PASSWORD_RE.sub(r"\1***@", _KV_PASSWORD_RE.sub(r"\1***", dsn))


@contextmanager
def db_cursor(db_cfg: DatabaseConfig) -> Iterator[Any]:
    """Yield a cursor; the store issues BEGIN/COMMIT/ROLLBACK itself."""
    dsn = resolve_dsn(db_cfg)
    try:
        conn = psycopg2.connect(dsn)
    except psycopg2.Error as e:
        raise DatabaseConnectionError(f"cannot connect to PostgreSQL ({redact_dsn(dsn)}): {e}") from e
    logger.debug("connected to %s", redact_dsn(dsn))
    conn.autocommit = True  # explicit transaction statements only
    cur = conn.cursor()
    try:
        yield cur
    finally:
        cur.close()
        conn.close()
