from __future__ import annotations

import calendar
import math
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any
from zoneinfo import ZoneInfo

from ..core.enums import Weekday
from ..core.exceptions import TimeParseError

_CLOCK_12H = re.compile(r"^\s*(\d{1,2})(?::(\d{1,2}))?(?::(\d{1,2}))?\s*([ap])\.?m\.?\s*$", re.IGNORECASE)
_CLOCK_24H = re.compile(r"^\s*(\d{1,2}):(\d{1,2})(?::(\d{1,2}))?\s*$")
_WEEKDAYS = list(Weekday)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise TimeParseError(f"Invalid date: {value!r}") from exc


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_year_key(d: date) -> str:
    return f"{d.month:02d}-{d.year}"


def parse_month_year(value: str) -> tuple[int, int]:
    """Split an ``MM-YYYY`` bucket key into ``(month, year)``."""
    try:
        month_s, year_s = str(value).strip().split("-")
        month, year = int(month_s), int(year_s)
    except ValueError as exc:
        raise TimeParseError(f"Invalid month-year: {value!r}") from exc
    if not 1 <= month <= 12 or year < 1:
        raise TimeParseError(f"Invalid month-year: {value!r}")
    return month, year


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def weekday_name(d: date) -> str:
    return _WEEKDAYS[d.weekday()].value


def dates_in_month(month_year: str) -> list[date]:
    month, year = parse_month_year(month_year)
    return [date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]


def date_range(start: date, end: date) -> list[date]:
    """Every calendar day from start to end, both inclusive."""
    if end < start:
        return []
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def parse_clock(value: str) -> time:
    """Parse a wall-clock string.

    Accepts 12-hour text such as ``"3:46:09 pm"`` / ``"7 AM"`` and 24-hour
    ``"HH:MM"`` / ``"HH:MM:SS"``.
    """

    if not isinstance(value, str) or not value.strip():
        raise TimeParseError(f"Invalid time: {value!r}")

    m = _CLOCK_12H.match(value)
    if m:
        hours = int(m.group(1))
        minutes = int(m.group(2) or 0)
        seconds = int(m.group(3) or 0)
        if not 1 <= hours <= 12:
            raise TimeParseError(f"Invalid time: {value!r}")
        is_pm = m.group(4).lower() == "p"
        if is_pm and hours < 12:
            hours += 12
        elif not is_pm and hours == 12:
            hours = 0
    else:
        m = _CLOCK_24H.match(value)
        if not m:
            raise TimeParseError(f"Invalid time: {value!r}")
        hours = int(m.group(1))
        minutes = int(m.group(2))
        seconds = int(m.group(3) or 0)

    try:
        return time(hour=hours, minute=minutes, second=seconds)
    except ValueError as exc:
        raise TimeParseError(f"Invalid time: {value!r}") from exc


def clock_on(day: date, value: Any) -> datetime:
    """Anchor a clock value (string, time or datetime) on the given day."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, time):
        return datetime.combine(day, value)
    return datetime.combine(day, parse_clock(value))


def parse_instant(value: Any, *, tz_name: str = "UTC") -> datetime:
    """Turn a stored punch timestamp into a naive wall-clock datetime.

    Supports Firestore-style ``{"seconds": ...}`` objects (converted to
    ``tz_name``), ISO 8601 strings and datetimes.
    """

    if isinstance(value, datetime):
        return value.replace(tzinfo=None) if value.tzinfo is None else value.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)

    if isinstance(value, dict) and "seconds" in value:
        try:
            seconds = float(value["seconds"]) + float(value.get("nanoseconds") or 0) / 1e9
            instant = datetime.fromtimestamp(seconds, tz=timezone.utc)
            return instant.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)
        except (TypeError, ValueError, OverflowError, OSError) as exc:
            raise TimeParseError(f"Invalid timestamp: {value!r}") from exc

    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)
        except (ValueError, OverflowError) as exc:
            raise TimeParseError(f"Invalid timestamp: {value!r}") from exc
        return parsed

    raise TimeParseError(f"Invalid timestamp: {value!r}")


def round_minutes(delta: timedelta) -> int:
    """Whole minutes in a time span, rounding half up."""
    return int(math.floor(delta.total_seconds() / 60 + 0.5))


def format_working_hours(total_minutes: int) -> str:
    hours, minutes = divmod(max(int(total_minutes), 0), 60)
    return f"{hours}h {minutes}m"


def format_clock_12h(value: datetime) -> str:
    """Render a datetime like the biometric exports do: ``"3:46:09 pm"``."""
    hour = value.hour % 12 or 12
    suffix = "pm" if value.hour >= 12 else "am"
    return f"{hour}:{value.minute:02d}:{value.second:02d} {suffix}"
