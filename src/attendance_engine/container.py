from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.processor import DayAttendanceProcessor
from .attendance.service import AttendanceProcessingService
from .core.constants import DEFAULT_CURRENCY_SYMBOL
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .rules.engine import DeductionRuleEngine
from .rules.mysql_rules_repository import MySQLRulesRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    shifts_repo: MySQLShiftRepository
    rules_repo: MySQLRulesRepository
    holidays_repo: MySQLHolidayRepository
    attendance_repo: MySQLAttendanceRepository

    processor: DayAttendanceProcessor
    attendance_service: AttendanceProcessingService


def build_processor(config: Mapping[str, Any]) -> DayAttendanceProcessor:
    return DayAttendanceProcessor(
        engine=DeductionRuleEngine(currency=str(config.get("CURRENCY_SYMBOL") or DEFAULT_CURRENCY_SYMBOL)),
        punch_timezone=str(config.get("PUNCH_TIMEZONE") or "UTC"),
    )


def build_container(*, config: Mapping[str, Any]) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(config["DB_CONFIG"]))

    employees_repo = MySQLEmployeeRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    rules_repo = MySQLRulesRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    processor = build_processor(config)
    attendance_service = AttendanceProcessingService(
        employees_repo,
        shifts_repo,
        rules_repo,
        holidays_repo,
        attendance_repo,
        processor=processor,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        rules_repo=rules_repo,
        holidays_repo=holidays_repo,
        attendance_repo=attendance_repo,
        processor=processor,
        attendance_service=attendance_service,
    )
