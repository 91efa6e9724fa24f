from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.constants import DEFAULT_SHIFT_END, DEFAULT_SHIFT_START


def normalize_weekday(value: Any) -> str:
    """``"monday"`` / ``"MONDAY "`` -> ``"Monday"``; shift forms store weekdays lowercase."""
    return str(value).strip().capitalize()


@dataclass(frozen=True)
class ShiftTimes:
    """Start/end pair in 24h ``HH:MM`` text, as configured by the office."""

    start: str
    end: str

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["ShiftTimes"]:
        if not isinstance(data, Mapping):
            return None
        start = data.get("start")
        end = data.get("end")
        if not start or not end:
            return None
        return cls(start=str(start), end=str(end))


@dataclass(frozen=True)
class FlexibleTime:
    enabled: bool = False
    grace_minutes: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "FlexibleTime":
        if not isinstance(data, Mapping):
            return cls()
        return cls(enabled=bool(data.get("enabled", False)), grace_minutes=int(data.get("graceMinutes") or 0))


@dataclass(frozen=True)
class ShiftSchedule:
    """Domain entity: a named shift with weekday/date level overrides."""

    shift_id: str
    name: str
    default_times: ShiftTimes = ShiftTimes(DEFAULT_SHIFT_START, DEFAULT_SHIFT_END)
    flexible_time: FlexibleTime = FlexibleTime()
    days: frozenset[str] = frozenset()
    day_overrides: Mapping[str, ShiftTimes] = field(default_factory=dict)
    date_overrides: Mapping[str, ShiftTimes] = field(default_factory=dict)

    def works_on(self, weekday: str) -> bool:
        return normalize_weekday(weekday) in self.days

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShiftSchedule":
        """Build from the organization-settings document shape.

        Legacy schedules carry flat ``startTime``/``endTime``; newer ones a
        ``defaultTimes`` object which wins when present.
        """

        start = data.get("startTime") or DEFAULT_SHIFT_START
        end = data.get("endTime") or DEFAULT_SHIFT_END
        default_times = data.get("defaultTimes")
        if isinstance(default_times, Mapping):
            start = default_times.get("start") or start
            end = default_times.get("end") or end

        day_overrides = {}
        for weekday, times in (data.get("dayOverrides") or {}).items():
            parsed = ShiftTimes.from_dict(times)
            if parsed:
                day_overrides[normalize_weekday(weekday)] = parsed

        date_overrides = {}
        for iso_date, times in (data.get("dateOverrides") or {}).items():
            parsed = ShiftTimes.from_dict(times)
            if parsed:
                date_overrides[str(iso_date)] = parsed

        return cls(
            shift_id=str(data.get("id")),
            name=str(data.get("name") or ""),
            default_times=ShiftTimes(start=str(start), end=str(end)),
            flexible_time=FlexibleTime.from_dict(data.get("flexibleTime")),
            days=frozenset(normalize_weekday(d) for d in (data.get("days") or [])),
            day_overrides=day_overrides,
            date_overrides=date_overrides,
        )


def index_schedules(schedules: list[ShiftSchedule]) -> dict[str, ShiftSchedule]:
    return {s.shift_id: s for s in schedules}
