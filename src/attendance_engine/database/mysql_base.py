from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: committed if the block succeeds, rolled back otherwise."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def load_json_column(value: Any, default: Any = None) -> Any:
    """Decode a MySQL JSON column; mysql-connector hands it back as str or bytes depending on version."""
    if value is None:
        return default
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        return json.loads(value) if value.strip() else default
    return value


def dump_json_column(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def normalize_mysql_date(value: Any) -> str:
    """ISO text for a DATE column (``date`` from the C extension, ``str`` from some pure-Python paths)."""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
