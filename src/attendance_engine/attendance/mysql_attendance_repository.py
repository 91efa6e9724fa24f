from __future__ import annotations

import logging
from typing import Mapping

from ..common.serialization import sanitize
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_column, fetchall
from .model import DayAttendanceRecord

logger = logging.getLogger(__name__)


class MySQLAttendanceRepository:
    """Stores one row per employee-date.

    Saving a month bucket upserts only the dates it carries, so other dates of
    the month stay as they are and concurrent saves for different employees
    or dates never overwrite each other.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save_processed(
        self,
        branch_id: str,
        month_year: str,
        data: Mapping[str, Mapping[str, DayAttendanceRecord]],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id FROM employees WHERE branch_id=%s", (branch_id,))
            known = {str(r["employee_id"]) for r in fetchall(cur)}

            rows = []
            for employee_id, records in data.items():
                if str(employee_id) not in known:
                    logger.warning("Not saving attendance for unknown employee %s in branch %s", employee_id, branch_id)
                    continue
                for iso_date, record in records.items():
                    payload = sanitize(record)
                    rows.append(
                        (branch_id, str(employee_id), iso_date, month_year, dump_json_column(payload), payload.get("updatedAt"))
                    )

            if rows:
                cur.executemany(
                    """
                    INSERT INTO attendance_days(branch_id, employee_id, work_date, month_year, record, updated_at)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        month_year=VALUES(month_year),
                        record=VALUES(record),
                        updated_at=VALUES(updated_at)
                    """,
                    rows,
                )
        logger.info("Saved %d attendance rows for branch %s, %s", len(rows), branch_id, month_year)
