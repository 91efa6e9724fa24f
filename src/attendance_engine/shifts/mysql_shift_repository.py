from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, load_json_column
from .model import ShiftSchedule


class MySQLShiftRepository:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_shift_schedules(self) -> Sequence[ShiftSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, name, definition
                FROM shift_schedules
                ORDER BY shift_id
                """
            )
            rows = fetchall(cur)

        schedules = []
        for r in rows:
            data = dict(load_json_column(r["definition"], {}))
            data["id"] = r["shift_id"]
            data["name"] = r.get("name") or data.get("name")
            schedules.append(ShiftSchedule.from_dict(data))
        return schedules
