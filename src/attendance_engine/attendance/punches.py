from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import (
    clock_on,
    format_clock_12h,
    format_working_hours,
    month_year_key,
    parse_instant,
    round_minutes,
)
from ..core.enums import PunchDirection
from ..core.exceptions import TimeParseError
from ..employees.model import Employee
from ..shifts.model import ShiftSchedule
from ..shifts.resolver import overnight_bounds
from .model import PunchLog, PunchSummary

logger = logging.getLogger(__name__)


def punch_instant(log: PunchLog, day: date, *, tz_name: str = "UTC") -> datetime:
    """Absolute instant of a punch, anchored on ``day`` when only clock text is known."""
    if log.time:
        return clock_on(day, log.time)
    if log.date_time is not None:
        return parse_instant(log.date_time, tz_name=tz_name)
    raise TimeParseError("Punch has neither time nor dateTime")


def first_in_last_out(
    punches: Iterable[PunchLog],
    day: date,
    *,
    rollover_before: Optional[time] = None,
    in_rollover_before: Optional[time] = None,
    tz_name: str = "UTC",
) -> PunchSummary:
    """Earliest DutyOn and latest DutyOff over the complete log set of one day.

    Extremes are taken by instant, not by log order, so duplicated or
    out-of-order device punches do not matter. Overnight shifts set the two
    rollover clocks: DutyOff clock times before ``rollover_before`` (the shift
    start) and DutyOn clock times before ``in_rollover_before`` (the shift
    end) belong to the next morning.
    """

    first_in: Optional[datetime] = None
    last_out: Optional[datetime] = None
    first_in_log: Optional[PunchLog] = None
    last_out_log: Optional[PunchLog] = None

    for log in punches:
        if log.in_out not in (PunchDirection.DUTY_ON.value, PunchDirection.DUTY_OFF.value):
            continue
        try:
            instant = punch_instant(log, day, tz_name=tz_name)
        except TimeParseError as exc:
            logger.warning("Skipping punch on %s: %s", day.isoformat(), exc)
            continue

        if log.in_out == PunchDirection.DUTY_ON.value:
            if _rolls_over(log, instant, day, in_rollover_before):
                instant += timedelta(days=1)
            if first_in is None or instant < first_in:
                first_in, first_in_log = instant, log
        else:
            if _rolls_over(log, instant, day, rollover_before):
                instant += timedelta(days=1)
            if last_out is None or instant > last_out:
                last_out, last_out_log = instant, log

    total_minutes = 0
    if first_in is not None and last_out is not None:
        total_minutes = max(0, round_minutes(last_out - first_in))

    return PunchSummary(
        first_in=first_in,
        last_out=last_out,
        first_in_label=_label(first_in_log, first_in),
        last_out_label=_label(last_out_log, last_out),
        working_hours=format_working_hours(total_minutes),
        total_minutes=total_minutes,
    )


def _label(log: Optional[PunchLog], instant: Optional[datetime]) -> Optional[str]:
    if log is None or instant is None:
        return None
    return log.time or format_clock_12h(instant)


def _rolls_over(log: PunchLog, instant: datetime, day: date, before: Optional[time]) -> bool:
    # only clock text is anchored on ``day``; timestamps already carry their own date
    return before is not None and bool(log.time) and instant.date() == day and instant.time() < before


def _shift_day(instant: datetime, in_out: str, schedule: Optional[ShiftSchedule]) -> date:
    """Calendar date of the shift a raw punch belongs to.

    After midnight on an overnight shift, a DutyOff before the shift start and
    a DutyOn before the shift end still belong to the previous day's shift.
    """

    day = instant.date()
    if schedule is None:
        return day
    previous = day - timedelta(days=1)
    try:
        bounds = overnight_bounds(schedule, previous)
    except TimeParseError as exc:
        logger.warning("Cannot resolve shift %s on %s: %s", schedule.shift_id, previous.isoformat(), exc)
        return day
    if bounds is None:
        return day
    start, end = bounds
    cutoff = start if in_out == PunchDirection.DUTY_OFF.value else end
    return previous if instant.time() < cutoff else day


def group_punches_by_date(
    raw_logs: Iterable[Mapping[str, Any]],
    *,
    tz_name: str = "UTC",
    schedule: Optional[ShiftSchedule] = None,
) -> dict[str, list[PunchLog]]:
    """Bucket raw device punches (``dateTime`` + ``inOut`` + ``mode``) by shift date.

    Without a schedule every punch lands on its own calendar date.
    """

    grouped: dict[str, list[tuple[datetime, PunchLog]]] = defaultdict(list)
    for raw in raw_logs:
        try:
            instant = parse_instant(raw.get("dateTime"), tz_name=tz_name)
        except TimeParseError as exc:
            logger.warning("Skipping raw punch %r: %s", raw, exc)
            continue
        in_out = str(raw.get("inOut") or "")
        grouped[_shift_day(instant, in_out, schedule).isoformat()].append(
            (
                instant,
                PunchLog(
                    in_out=in_out,
                    time=format_clock_12h(instant),
                    mode=raw.get("mode"),
                    notes=raw.get("notes"),
                    date_time=raw.get("dateTime"),
                ),
            )
        )
    return {iso: [log for _, log in sorted(items, key=lambda item: item[0])] for iso, items in grouped.items()}


def attach_raw_punches(
    employees: Mapping[str, Employee],
    raw_punches: Mapping[str, Mapping[str, Any]],
    *,
    schedules: Optional[Mapping[str, ShiftSchedule]] = None,
    tz_name: str = "UTC",
) -> dict[str, Employee]:
    """Return a roster whose attendance history also carries the given raw punches.

    Existing logs for a date are kept; identical punches (same direction and
    clock text) are not duplicated. ``schedules`` (by shift id) lets overnight
    punches be filed under the day their shift started.
    """

    schedules = schedules or {}
    out: dict[str, Employee] = {}
    for employee_id, employee in employees.items():
        entry = raw_punches.get(employee_id)
        if not entry:
            out[employee_id] = employee
            continue

        schedule = schedules.get(employee.employment.shift_id)
        attendance = {my: dict(days) for my, days in employee.attendance.items()}
        for iso_date, logs in group_punches_by_date(entry.get("logs") or [], tz_name=tz_name, schedule=schedule).items():
            month_year = month_year_key(date.fromisoformat(iso_date))
            prior = dict(attendance.setdefault(month_year, {}).get(iso_date) or {})
            existing = list(prior.get("logs") or [])
            seen = {(p.get("inOut"), p.get("time")) for p in existing}
            for log in logs:
                if (log.in_out, log.time) not in seen:
                    existing.append(log.to_dict())
                    seen.add((log.in_out, log.time))
            prior["logs"] = existing
            attendance[month_year][iso_date] = prior

        out[employee_id] = Employee(employee_id=employee.employee_id, employment=employee.employment, attendance=attendance)
    return out
