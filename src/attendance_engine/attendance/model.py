from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.constants import ZERO_WORKING_HOURS
from ..holidays.model import Holiday
from .status import AttendanceStatus


@dataclass(frozen=True)
class PunchLog:
    """One biometric punch as stored under an attendance date.

    ``time`` is wall-clock text (12h or 24h); ``date_time`` keeps the raw
    device timestamp (Firestore ``{seconds}`` or ISO text) when known.
    """

    in_out: str
    time: Optional[str] = None
    mode: Optional[str] = None
    notes: Optional[str] = None
    date_time: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PunchLog":
        return cls(
            in_out=str(data.get("inOut") or ""),
            time=data.get("time"),
            mode=data.get("mode"),
            notes=data.get("notes"),
            date_time=data.get("dateTime"),
        )

    def to_dict(self) -> dict:
        out = {"time": self.time, "inOut": self.in_out, "mode": self.mode, "notes": self.notes}
        if self.date_time is not None:
            out["dateTime"] = self.date_time
        return out


@dataclass(frozen=True)
class PunchSummary:
    first_in: Optional[datetime] = None
    last_out: Optional[datetime] = None
    first_in_label: Optional[str] = None
    last_out_label: Optional[str] = None
    working_hours: str = ZERO_WORKING_HOURS
    total_minutes: int = 0


@dataclass(frozen=True)
class DayAttendanceRecord:
    """Output entity: one verdict per employee per calendar day."""

    date: str
    day_of_week: str
    is_work_day: bool
    status: AttendanceStatus
    logs: tuple[PunchLog, ...] = ()
    sanctioned: bool = False
    notes: Optional[str] = None
    first_in: Optional[str] = None
    last_out: Optional[str] = None
    working_hours: str = ZERO_WORKING_HOURS
    attendance_deduction: float = 0
    deduction_amount: float = 0
    deduction_remarks: str = ""
    shift_start: Optional[str] = None
    shift_end: Optional[str] = None
    holiday: Optional[Holiday] = None
    updated_at: Optional[str] = None

    @property
    def status_text(self) -> str:
        return self.status.render()

    def to_dict(self) -> dict:
        return {
            "logs": [log.to_dict() for log in self.logs],
            "dayOfWeek": self.day_of_week,
            "isWorkDay": self.is_work_day,
            "sanctioned": self.sanctioned,
            "notes": self.notes,
            "firstIn": self.first_in,
            "lastOut": self.last_out,
            "workingHours": self.working_hours,
            "status": self.status.render(),
            "statusCode": self.status.kind.value,
            "attendanceDeduction": self.attendance_deduction,
            "deductionAmount": self.deduction_amount,
            "deductionRemarks": self.deduction_remarks,
            "shiftStart": self.shift_start,
            "shiftEnd": self.shift_end,
            "holiday": self.holiday.to_dict() if self.holiday else None,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class DayContext:
    """Everything the day states need, resolved once per employee-date cell."""

    date: str
    day_of_week: str
    is_work_day: bool
    logs: tuple[PunchLog, ...]
    sanctioned: bool
    notes: Optional[str]
    daily_salary: float
    holiday: Optional[Holiday] = None
    shift_start: Optional[str] = None
    shift_end: Optional[str] = None
    grace_minutes: int = 0
