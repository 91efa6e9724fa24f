from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema file on ``;`` (the schema has no string literals containing one)."""
    for chunk in sql.split(";"):
        stmt = chunk.strip()
        if stmt:
            yield stmt


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}`"
            " CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Optional[Path] = None) -> int:
    """Create the database and its tables if missing; returns the number of statements run."""
    ensure_database_exists(conn_factory)
    sql = Path(schema_path or SCHEMA_PATH).read_text(encoding="utf-8")

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        count = 0
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()

    logger.info("Schema ready on %s (%d statements)", conn_factory.config.database, count)
    return count
