from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import month_year_key
from ..core.enums import StatusKind
from ..employees.model import Employee
from ..holidays.model import Holiday
from ..rules.model import AttendanceRules
from ..shifts.model import ShiftSchedule, index_schedules
from .model import DayAttendanceRecord
from .processor import DayAttendanceProcessor

logger = logging.getLogger(__name__)

# monthYear -> employeeId -> YYYY-MM-DD -> record
ProcessedAttendance = dict[str, dict[str, dict[str, DayAttendanceRecord]]]


@dataclass(frozen=True)
class ProcessingSummary:
    date_range: str
    dates_processed: int
    months_processed: int
    total_employees: int
    processed_employees: int
    error_dates: int = 0

    def to_dict(self) -> dict:
        return {
            "dateRange": self.date_range,
            "datesProcessed": self.dates_processed,
            "monthsProcessed": self.months_processed,
            "totalEmployees": self.total_employees,
            "processedEmployees": self.processed_employees,
            "errorDates": self.error_dates,
        }


def bucket_records(cells: Iterable[tuple[str, str, str, DayAttendanceRecord]]) -> ProcessedAttendance:
    """Group ``(monthYear, employeeId, date, record)`` cells into the nested output map."""
    out: ProcessedAttendance = {}
    for month_year, employee_id, iso_date, record in cells:
        out.setdefault(month_year, {}).setdefault(employee_id, {})[iso_date] = record
    return out


def process_range(
    employees: Mapping[str, Employee],
    shift_schedules: Iterable[ShiftSchedule],
    rules: AttendanceRules,
    holiday_map: Mapping[str, Holiday],
    dates: Iterable[date],
    *,
    processor: Optional[DayAttendanceProcessor] = None,
    now: Optional[datetime] = None,
) -> ProcessedAttendance:
    """Run the day processor over every employee x date cell.

    Each date lands in its own ``MM-YYYY`` bucket, so a range crossing a
    month boundary yields several buckets. Employees whose shift cannot be
    resolved are skipped.
    """

    processor = processor or DayAttendanceProcessor()
    schedules = index_schedules(list(shift_schedules))
    dates = list(dates)
    now = now or processor.clock()

    def cells():
        for employee_id, employee in employees.items():
            schedule = schedules.get(employee.employment.shift_id)
            if schedule is None:
                logger.warning("Skipping employee %s - shift %r not found", employee_id, employee.employment.shift_id)
                continue
            for day in dates:
                record = processor.process(employee, schedule, rules, holiday_map, day, now=now)
                yield month_year_key(day), employee_id, record.date, record

    return bucket_records(cells())


def summarize(
    processed: Mapping[str, Mapping[str, Mapping[str, DayAttendanceRecord]]],
    *,
    date_range: str,
    dates: Iterable[date],
    total_employees: int,
) -> ProcessingSummary:
    dates = list(dates)
    processed_ids = {eid for month in processed.values() for eid in month}
    error_dates = sum(
        1
        for month in processed.values()
        for days in month.values()
        for record in days.values()
        if record.status.kind == StatusKind.ERROR
    )
    return ProcessingSummary(
        date_range=date_range,
        dates_processed=len(dates),
        months_processed=len({month_year_key(d) for d in dates}),
        total_employees=total_employees,
        processed_employees=len(processed_ids),
        error_dates=error_dates,
    )
