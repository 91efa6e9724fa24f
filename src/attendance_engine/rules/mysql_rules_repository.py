from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, load_json_column
from .model import AttendanceRules


class MySQLRulesRepository:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_attendance_rules(self, branch_id: str) -> AttendanceRules:
        """Branch rules; a branch with no row gets the defaults (deductions disabled)."""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT rules FROM attendance_rules WHERE branch_id=%s", (branch_id,))
            r = fetchone(cur)
        return AttendanceRules.from_dict(load_json_column(r["rules"]) if r else None)
