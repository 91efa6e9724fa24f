import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

import pytest

from attendance_engine.attendance.model import DayAttendanceRecord
from attendance_engine.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from attendance_engine.attendance.status import ON_TIME
from attendance_engine.core.enums import DeductionType, HolidayType
from attendance_engine.database.bootstrap import SCHEMA_PATH, apply_schema, iter_sql_statements
from attendance_engine.database.connection import DBConfig
from attendance_engine.database.mysql_base import db_cursor
from attendance_engine.employees.mysql_employee_repository import MySQLEmployeeRepository
from attendance_engine.holidays.mysql_holiday_repository import MySQLHolidayRepository
from attendance_engine.rules.mysql_rules_repository import MySQLRulesRepository
from attendance_engine.shifts.mysql_shift_repository import MySQLShiftRepository


def _norm(sql):
    return " ".join(sql.split())


@dataclass
class FakeDatabase:
    """Just enough of MySQL for the repository queries; writes land on commit."""

    employees: list = field(default_factory=list)
    shift_schedules: list = field(default_factory=list)
    attendance_rules: dict = field(default_factory=dict)
    holidays: list = field(default_factory=list)
    attendance_days: dict = field(default_factory=dict)
    statements: list = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def select(self, sql, params):
        if sql == "SELECT employee_id, shift_id, salary_amount FROM employees WHERE branch_id=%s ORDER BY employee_id":
            rows = [e for e in self.employees if e["branch_id"] == params[0]]
            return sorted(rows, key=lambda e: e["employee_id"])
        if sql == "SELECT employee_id, shift_id, salary_amount FROM employees WHERE branch_id=%s AND employee_id=%s":
            return [e for e in self.employees if (e["branch_id"], e["employee_id"]) == tuple(params)]
        if sql == "SELECT employee_id FROM employees WHERE branch_id=%s":
            return [{"employee_id": e["employee_id"]} for e in self.employees if e["branch_id"] == params[0]]
        if sql == "SELECT employee_id, month_year, work_date, record FROM attendance_days WHERE branch_id=%s":
            return [r for (branch, _, _), r in self.attendance_days.items() if branch == params[0]]
        if sql == "SELECT employee_id, month_year, work_date, record FROM attendance_days WHERE branch_id=%s AND employee_id=%s":
            return [r for (branch, eid, _), r in self.attendance_days.items() if (branch, eid) == tuple(params)]
        if sql == "SELECT shift_id, name, definition FROM shift_schedules ORDER BY shift_id":
            return sorted(self.shift_schedules, key=lambda r: r["shift_id"])
        if sql == "SELECT rules FROM attendance_rules WHERE branch_id=%s":
            return [{"rules": self.attendance_rules[params[0]]}] if params[0] in self.attendance_rules else []
        if sql.startswith("SELECT holiday_date, name, holiday_type FROM holidays WHERE holiday_date BETWEEN"):
            low, high = params
            return sorted((h for h in self.holidays if low <= h["holiday_date"] <= high), key=lambda h: h["holiday_date"])
        raise AssertionError(f"unexpected SQL: {sql}")

    def apply(self, writes):
        with self.lock:
            for branch, eid, iso, month_year, record, updated_at in writes:
                self.attendance_days[(branch, eid, iso)] = {
                    "employee_id": eid,
                    "month_year": month_year,
                    "work_date": date.fromisoformat(iso),
                    "record": record,
                    "updated_at": updated_at,
                }


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self._rows = []
        self.closed = False

    def execute(self, sql, params=()):
        sql = _norm(sql)
        self._conn.db.statements.append(sql)
        if sql.startswith("CREATE"):
            self._rows = []
            return
        self._rows = [dict(r) for r in self._conn.db.select(sql, params)]

    def executemany(self, sql, seq):
        sql = _norm(sql)
        self._conn.db.statements.append(sql)
        assert sql.startswith("INSERT INTO attendance_days") and "ON DUPLICATE KEY UPDATE" in sql
        self._conn.pending.extend(seq)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, db):
        self.db = db
        self.pending = []
        self.cursors = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur

    def commit(self):
        self.db.apply(self.pending)
        self.pending = []
        self.committed = True

    def rollback(self):
        self.pending = []
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self, db):
        self.db = db
        self.config = DBConfig.from_mapping({"database": "attendance_engine_test"})
        self.opened = []

    def connect(self, *, with_database=True):
        conn = FakeConnection(self.db)
        self.opened.append(conn)
        return conn


def _record(iso, day_of_week="Monday", notes=None):
    return DayAttendanceRecord(
        date=iso,
        day_of_week=day_of_week,
        is_work_day=True,
        status=ON_TIME,
        first_in="8:00:00 am",
        last_out="4:00:00 pm",
        working_hours="8h 0m",
        notes=notes,
        updated_at="2025-02-01T09:00:00",
    )


@pytest.fixture
def db():
    return FakeDatabase(
        employees=[
            {"branch_id": "b1", "employee_id": "e2", "shift_id": "", "salary_amount": Decimal("0.00")},
            {"branch_id": "b1", "employee_id": "e1", "shift_id": "day", "salary_amount": Decimal("31000.00")},
            {"branch_id": "b2", "employee_id": "x9", "shift_id": "day", "salary_amount": Decimal("1.00")},
        ],
        attendance_days={
            ("b1", "e1", "2025-01-06"): {
                "employee_id": "e1",
                "month_year": "01-2025",
                "work_date": date(2025, 1, 6),
                "record": json.dumps({"logs": [{"inOut": "DutyOn", "time": "8:00:00 am"}], "sanctioned": True}),
                "updated_at": None,
            },
            ("b1", "e1", "2025-02-03"): {
                "employee_id": "e1",
                "month_year": "02-2025",
                "work_date": date(2025, 2, 3),
                "record": b'{"notes": "badge lost"}',
                "updated_at": None,
            },
        },
    )


@pytest.fixture
def factory(db):
    return FakeConnectionFactory(db)


def test_employee_roster_carries_history_by_month(factory):
    roster = MySQLEmployeeRepository(factory).list_for_branch("b1")

    assert list(roster) == ["e1", "e2"]
    e1 = roster["e1"]
    assert e1.employment.shift_id == "day"
    assert e1.employment.salary_amount == 31000.0
    assert e1.prior_record("01-2025", "2025-01-06")["sanctioned"] is True
    assert e1.prior_record("02-2025", "2025-02-03") == {"notes": "badge lost"}
    assert roster["e2"].employment.shift_id is None
    assert roster["e2"].attendance == {}


def test_employee_get_single_and_missing(factory):
    repo = MySQLEmployeeRepository(factory)

    assert repo.get("b1", "e1").prior_record("01-2025", "2025-01-06")["logs"][0]["inOut"] == "DutyOn"
    assert repo.get("b1", "x9") is None
    assert all(conn.closed for conn in factory.opened)


def test_shift_rows_build_schedules_with_lowercase_days(db, factory):
    db.shift_schedules = [
        {
            "shift_id": "night",
            "name": "Night",
            "definition": json.dumps(
                {"defaultTimes": {"start": "22:00", "end": "06:00"}, "days": ["monday", "friday"], "dayOverrides": {"friday": {"start": "21:00", "end": "05:00"}}}
            ),
        },
        {"shift_id": "day", "name": "", "definition": '{"name": "Day", "startTime": "08:00", "endTime": "16:00"}'},
    ]

    schedules = MySQLShiftRepository(factory).get_shift_schedules()

    assert [s.shift_id for s in schedules] == ["day", "night"]
    assert schedules[0].name == "Day"
    night = schedules[1]
    assert night.works_on("Monday") and night.works_on("friday") and not night.works_on("Tuesday")
    assert night.day_overrides["Friday"].start == "21:00"


def test_rules_default_when_branch_has_no_row(db, factory):
    db.attendance_rules["b1"] = json.dumps({"lateDeductions": {"enabled": True, "deductionType": "fixed", "fixedAmountPerMinute": 5}})
    repo = MySQLRulesRepository(factory)

    configured = repo.get_attendance_rules("b1")
    missing = repo.get_attendance_rules("b2")

    assert configured.late_deductions.enabled is True
    assert configured.late_deductions.deduction_type == DeductionType.FIXED
    assert configured.late_deductions.fixed_amount_per_minute == 5
    assert missing.late_deductions.enabled is False


def test_holidays_filtered_to_year(db, factory):
    db.holidays = [
        {"holiday_date": date(2024, 12, 25), "name": "Christmas", "holiday_type": "full"},
        {"holiday_date": date(2025, 8, 15), "name": "Independence Day", "holiday_type": "half"},
        {"holiday_date": date(2025, 1, 26), "name": "Republic Day", "holiday_type": None},
    ]

    holidays = MySQLHolidayRepository(factory).list_for_year(2025)

    assert [(h.date, h.name, h.type) for h in holidays] == [
        ("2025-01-26", "Republic Day", HolidayType.FULL),
        ("2025-08-15", "Independence Day", HolidayType.HALF),
    ]


def test_save_upserts_days_and_skips_unknown_employees(db, factory, caplog):
    repo = MySQLAttendanceRepository(factory)

    with caplog.at_level(logging.WARNING):
        repo.save_processed(
            "b1",
            "01-2025",
            {
                "e1": {"2025-01-06": _record("2025-01-06", notes="recomputed"), "2025-01-07": _record("2025-01-07", "Tuesday")},
                "ghost": {"2025-01-06": _record("2025-01-06")},
            },
        )

    assert ("b1", "ghost", "2025-01-06") not in db.attendance_days
    assert "unknown employee ghost" in caplog.text
    replaced = json.loads(db.attendance_days[("b1", "e1", "2025-01-06")]["record"])
    assert replaced["notes"] == "recomputed"
    assert replaced["status"] == "On Time"
    assert db.attendance_days[("b1", "e1", "2025-01-07")]["updated_at"] == "2025-02-01T09:00:00"
    # dates outside the saved bucket are untouched
    assert db.attendance_days[("b1", "e1", "2025-02-03")]["record"] == b'{"notes": "badge lost"}'
    assert not any("FROM attendance_days" in s for s in db.statements)


def test_concurrent_saves_for_one_month_all_persist(db, factory):
    repo = MySQLAttendanceRepository(factory)
    days = [date(2025, 3, d) for d in range(1, 21)]
    barrier = threading.Barrier(len(days))
    errors = []

    def save(day):
        try:
            barrier.wait()
            repo.save_processed("b1", "03-2025", {"e1" if day.day % 2 else "e2": {day.isoformat(): _record(day.isoformat())}})
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=save, args=(d,)) for d in days]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    saved = {(eid, iso) for (branch, eid, iso) in db.attendance_days if branch == "b1" and iso.startswith("2025-03")}
    assert len(saved) == 20
    assert ("e1", "2025-03-01") in saved and ("e2", "2025-03-20") in saved


def test_db_cursor_rolls_back_and_closes_on_error(factory):
    with pytest.raises(RuntimeError):
        with db_cursor(factory) as (conn, cur):
            cur.executemany("INSERT INTO attendance_days(x) VALUES(%s) ON DUPLICATE KEY UPDATE x=VALUES(x)", [("b1", "e1", "2025-01-09", "01-2025", "{}", None)])
            raise RuntimeError("boom")

    conn = factory.opened[-1]
    assert conn.rolled_back and not conn.committed
    assert conn.closed and conn.cursors[0].closed
    assert ("b1", "e1", "2025-01-09") not in factory.db.attendance_days


def test_schema_file_and_apply_schema(factory):
    statements = list(iter_sql_statements(SCHEMA_PATH.read_text(encoding="utf-8")))

    assert len(statements) == 5
    assert all(s.startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert apply_schema(factory) == 5
    assert factory.db.statements[0].startswith("CREATE DATABASE IF NOT EXISTS `attendance_engine_test`")
