from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import month_year_key, now_local, parse_iso_date
from ..common.validators import require_non_empty
from ..core.exceptions import TimeParseError, ValidationError
from ..holidays.model import build_holiday_map
from ..shifts.model import index_schedules
from .model import DayAttendanceRecord
from .processor import DayAttendanceProcessor, process_one_date
from .punches import attach_raw_punches
from .range_processor import ProcessingSummary, process_range, summarize
from .repository import (
    AttendanceRepository,
    EmployeeRepository,
    HolidayRepository,
    RulesRepository,
    SettingsRepository,
)
from .request import ProcessRequest

logger = logging.getLogger(__name__)


class AttendanceProcessingService:
    """Load inputs from the collaborators, run the engine, hand results back for storage."""

    def __init__(
        self,
        employees: EmployeeRepository,
        settings: SettingsRepository,
        rules: RulesRepository,
        holidays: HolidayRepository,
        attendance: AttendanceRepository,
        *,
        processor: Optional[DayAttendanceProcessor] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._employees = employees
        self._settings = settings
        self._rules = rules
        self._holidays = holidays
        self._attendance = attendance
        self._processor = processor or DayAttendanceProcessor()
        self._clock = clock

    def _holiday_map(self, years):
        holidays = []
        for year in years:
            holidays.extend(self._holidays.list_for_year(year))
        return build_holiday_map(holidays)

    def process(self, request: ProcessRequest, *, raw_punches: Optional[Mapping[str, Mapping[str, Any]]] = None) -> ProcessingSummary:
        """Process a month or a date range; ``raw_punches`` are device logs not yet filed by date."""
        logger.info("Processing attendance for branch %s, %s", request.branch_id, request.display_range)

        employees = dict(self._employees.list_for_branch(request.branch_id))
        if request.employee_ids:
            employees = {eid: e for eid, e in employees.items() if eid in request.employee_ids}
        if not employees:
            raise ValidationError("No employees found matching criteria")
        schedules = list(self._settings.get_shift_schedules())
        if raw_punches:
            employees = attach_raw_punches(
                employees,
                raw_punches,
                schedules=index_schedules(schedules),
                tz_name=self._processor.punch_timezone,
            )

        dates = request.dates()
        years = request.years()
        holiday_map = self._holiday_map(years)
        logger.info("Found %d holidays for %s", len(holiday_map), ", ".join(str(y) for y in years))

        processed = process_range(
            employees,
            schedules,
            self._rules.get_attendance_rules(request.branch_id),
            holiday_map,
            dates,
            processor=self._processor,
            now=self._clock(),
        )

        for month_year, data in processed.items():
            logger.info("Saving attendance data for %s with %d employees", month_year, len(data))
            self._attendance.save_processed(request.branch_id, month_year, data)

        summary = summarize(processed, date_range=request.display_range, dates=dates, total_employees=len(employees))
        logger.info("Attendance processed: %s", summary.to_dict())
        return summary

    def process_date(self, *, branch_id: str, employee_id: str, date_str: str) -> DayAttendanceRecord:
        branch_id = require_non_empty(branch_id, "branchId")
        employee_id = require_non_empty(employee_id, "employeeId")
        try:
            day = parse_iso_date(require_non_empty(date_str, "date"))
        except TimeParseError:
            raise ValidationError("date must be a YYYY-MM-DD date")

        employee = self._employees.get(branch_id, employee_id)
        if not employee:
            raise ValidationError(f"Employee {employee_id} not found")

        record = process_one_date(
            employee,
            self._settings.get_shift_schedules(),
            self._rules.get_attendance_rules(branch_id),
            self._holiday_map([day.year]),
            day,
            processor=self._processor,
            now=self._clock(),
        )
        self._attendance.save_processed(branch_id, month_year_key(day), {employee_id: {record.date: record}})
        return record
