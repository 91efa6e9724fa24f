from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import Holiday


class MySQLHolidayRepository:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_year(self, year: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_date, name, holiday_type
                FROM holidays
                WHERE holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date
                """,
                (date(int(year), 1, 1), date(int(year), 12, 31)),
            )
            rows = fetchall(cur)
        return [
            Holiday.from_dict({"date": normalize_mysql_date(r["holiday_date"]), "name": r["name"], "type": r.get("holiday_type")})
            for r in rows
        ]
