from __future__ import annotations

from enum import Enum


class Weekday(str, Enum):
    """Full English weekday names, as stored in shift schedules."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class PunchDirection(str, Enum):
    """Direction of a biometric punch event."""

    DUTY_ON = "DutyOn"
    DUTY_OFF = "DutyOff"


class DeductionType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class HolidayType(str, Enum):
    FULL = "full"
    HALF = "half"


class DeviationKind(str, Enum):
    """Which side of the shift a deviation was measured on."""

    LATE = "late"
    EARLY = "early"


class StatusKind(str, Enum):
    """Internal tag of a day verdict; rendered to display text by attendance.status."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    EARLY = "EARLY"
    HALF_DAY = "HALF_DAY"
    ABSENT_THRESHOLD = "ABSENT_THRESHOLD"
    ABSENT_LEAVE = "ABSENT_LEAVE"
    MISSING_PUNCH = "MISSING_PUNCH"
    OFF_DAY = "OFF_DAY"
    HOLIDAY = "HOLIDAY"
    ERROR = "ERROR"
