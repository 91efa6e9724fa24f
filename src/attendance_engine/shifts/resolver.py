from __future__ import annotations

from datetime import date, time
from typing import Optional, Union

from ..common.datetime_utils import parse_clock, weekday_name
from ..core.constants import DEFAULT_SHIFT_END, DEFAULT_SHIFT_START
from .model import ShiftSchedule, ShiftTimes, normalize_weekday


def resolve_shift_times(schedule: ShiftSchedule, day: Union[date, str], weekday: str) -> ShiftTimes:
    """Effective start/end for one calendar day.

    Precedence: date override, then weekday override, then the default times.
    The first level that matches supplies both ends; levels are never mixed.
    """

    iso_date = day.isoformat() if isinstance(day, date) else str(day)

    override = schedule.date_overrides.get(iso_date)
    if override:
        return override

    override = schedule.day_overrides.get(normalize_weekday(weekday))
    if override:
        return override

    defaults = schedule.default_times
    if defaults and defaults.start and defaults.end:
        return defaults
    return ShiftTimes(start=DEFAULT_SHIFT_START, end=DEFAULT_SHIFT_END)


def overnight_bounds(schedule: ShiftSchedule, day: date) -> Optional[tuple[time, time]]:
    """Start/end clocks of ``day``'s shift when it runs past midnight, else ``None``.

    Off days have no shift and so never run overnight.
    """

    weekday = weekday_name(day)
    if not schedule.works_on(weekday):
        return None
    times = resolve_shift_times(schedule, day, weekday)
    start, end = parse_clock(times.start), parse_clock(times.end)
    if end < start:
        return start, end
    return None
