from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, load_json_column, normalize_mysql_date
from .model import Employee, Employment


def _attendance_by_month(rows: Sequence[Mapping[str, Any]]) -> Dict[str, Dict[str, Dict[str, Dict[str, Any]]]]:
    """``employee_id -> MM-YYYY -> YYYY-MM-DD -> stored record``."""
    out: Dict[str, Dict[str, Dict[str, Dict[str, Any]]]] = {}
    for r in rows:
        record = load_json_column(r["record"], {})
        month = out.setdefault(str(r["employee_id"]), {}).setdefault(str(r["month_year"]), {})
        month[normalize_mysql_date(r["work_date"])] = record
    return out


def _employee(row: Mapping[str, Any], attendance: Mapping[str, Any]) -> Employee:
    shift_id = row.get("shift_id")
    return Employee(
        employee_id=str(row["employee_id"]),
        employment=Employment(
            shift_id=str(shift_id) if shift_id not in (None, "") else None,
            salary_amount=float(row.get("salary_amount") or 0),
        ),
        attendance=attendance,
    )


class MySQLEmployeeRepository:
    """Branch roster with each employee's stored attendance history attached."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_branch(self, branch_id: str) -> Mapping[str, Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, shift_id, salary_amount
                FROM employees
                WHERE branch_id=%s
                ORDER BY employee_id
                """,
                (branch_id,),
            )
            rows = fetchall(cur)
            cur.execute(
                """
                SELECT employee_id, month_year, work_date, record
                FROM attendance_days
                WHERE branch_id=%s
                """,
                (branch_id,),
            )
            history = _attendance_by_month(fetchall(cur))

        return {str(r["employee_id"]): _employee(r, history.get(str(r["employee_id"]), {})) for r in rows}

    def get(self, branch_id: str, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, shift_id, salary_amount
                FROM employees
                WHERE branch_id=%s AND employee_id=%s
                """,
                (branch_id, employee_id),
            )
            rows = fetchall(cur)
            if not rows:
                return None
            cur.execute(
                """
                SELECT employee_id, month_year, work_date, record
                FROM attendance_days
                WHERE branch_id=%s AND employee_id=%s
                """,
                (branch_id, employee_id),
            )
            history = _attendance_by_month(fetchall(cur))

        return _employee(rows[0], history.get(str(employee_id), {}))
