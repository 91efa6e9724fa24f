from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from ..common.datetime_utils import (
    days_in_month,
    month_year_key,
    now_local,
    parse_clock,
    parse_iso_date,
    weekday_name,
)
from ..core.constants import ZERO_WORKING_HOURS
from ..core.exceptions import ConfigurationError
from ..employees.model import Employee
from ..holidays.model import Holiday
from ..rules.engine import DeductionRuleEngine
from ..rules.model import AttendanceRules
from ..shifts.model import ShiftSchedule, index_schedules
from ..shifts.resolver import resolve_shift_times
from .factory import DayStateFactory
from .model import DayAttendanceRecord, DayContext, PunchLog, PunchSummary
from .punches import first_in_last_out
from .states.base import DayOutcome
from .status import ERROR

logger = logging.getLogger(__name__)


def daily_salary_for(monthly_salary: float, day: date) -> float:
    """Daily rate uses the day count of the date's own calendar month."""
    return monthly_salary / days_in_month(day.year, day.month)


def _coerce_logs(raw: Iterable[Any]) -> tuple[PunchLog, ...]:
    return tuple(log if isinstance(log, PunchLog) else PunchLog.from_dict(log) for log in raw or [])


@dataclass
class DayAttendanceProcessor:
    """Computes one DayAttendanceRecord from one employee-date snapshot.

    Pure apart from the ``updated_at`` stamp; prior ``sanctioned`` and
    ``notes`` are carried over, everything else is recomputed.
    """

    engine: DeductionRuleEngine = field(default_factory=DeductionRuleEngine)
    state_factory: DayStateFactory = field(default_factory=DayStateFactory)
    punch_timezone: str = "UTC"
    clock: Callable[[], datetime] = now_local

    def process(
        self,
        employee: Employee,
        schedule: ShiftSchedule,
        rules: AttendanceRules,
        holiday_map: Mapping[str, Holiday],
        day: date,
        *,
        now: Optional[datetime] = None,
    ) -> DayAttendanceRecord:
        iso_date = day.isoformat()
        weekday = weekday_name(day)
        prior = employee.prior_record(month_year_key(day), iso_date)
        logs = _coerce_logs(prior.get("logs"))
        sanctioned = bool(prior.get("sanctioned", False))
        notes = prior.get("notes") or None
        holiday = holiday_map.get(iso_date)
        is_work_day = schedule.works_on(weekday)
        updated_at = (now or self.clock()).isoformat()

        shift_start = shift_end = None
        punches = PunchSummary()
        try:
            if is_work_day:
                times = resolve_shift_times(schedule, iso_date, weekday)
                shift_start, shift_end = times.start, times.end

            rollover_before = in_rollover_before = None
            if shift_start and shift_end:
                start_clock, end_clock = parse_clock(shift_start), parse_clock(shift_end)
                if end_clock < start_clock:
                    rollover_before, in_rollover_before = start_clock, end_clock

            punches = first_in_last_out(
                logs,
                day,
                rollover_before=rollover_before,
                in_rollover_before=in_rollover_before,
                tz_name=self.punch_timezone,
            )

            grace = 0
            if schedule.flexible_time.enabled:
                grace = schedule.flexible_time.grace_minutes

            ctx = DayContext(
                date=iso_date,
                day_of_week=weekday,
                is_work_day=is_work_day,
                logs=logs,
                sanctioned=sanctioned,
                notes=notes,
                daily_salary=daily_salary_for(employee.employment.salary_amount, day),
                holiday=holiday,
                shift_start=shift_start,
                shift_end=shift_end,
                grace_minutes=grace,
            )
            state = self.state_factory.for_day(ctx=ctx, punches=punches)
            outcome = state.resolve(ctx=ctx, punches=punches, rules=rules, engine=self.engine)
        except Exception as exc:
            logger.exception("Error processing attendance for employee %s on %s", employee.employee_id, iso_date)
            outcome = DayOutcome(status=ERROR, deduction_remarks=f"Error calculating deductions: {exc}")

        return DayAttendanceRecord(
            date=iso_date,
            day_of_week=weekday,
            is_work_day=is_work_day,
            status=outcome.status,
            logs=logs,
            sanctioned=sanctioned,
            notes=notes,
            first_in=punches.first_in_label,
            last_out=punches.last_out_label,
            working_hours=punches.working_hours or ZERO_WORKING_HOURS,
            attendance_deduction=outcome.attendance_deduction,
            deduction_amount=outcome.deduction_amount,
            deduction_remarks=outcome.deduction_remarks,
            shift_start=shift_start,
            shift_end=shift_end,
            holiday=holiday,
            updated_at=updated_at,
        )


def process_one_date(
    employee: Employee,
    shift_schedules: Iterable[ShiftSchedule],
    rules: AttendanceRules,
    holiday_map: Mapping[str, Holiday],
    day: Union[date, str],
    *,
    processor: Optional[DayAttendanceProcessor] = None,
    now: Optional[datetime] = None,
) -> DayAttendanceRecord:
    """Reprocess exactly one day, e.g. after a manual punch edit."""
    if isinstance(day, str):
        day = parse_iso_date(day)

    schedule = index_schedules(list(shift_schedules)).get(employee.employment.shift_id)
    if schedule is None:
        raise ConfigurationError(f"Shift not found for employee {employee.employee_id}")

    processor = processor or DayAttendanceProcessor()
    return processor.process(employee, schedule, rules, holiday_map, day, now=now)
