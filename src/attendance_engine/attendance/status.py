from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..core.enums import DeviationKind, StatusKind


@dataclass(frozen=True)
class AttendanceStatus:
    """Tagged day verdict.

    ``render()`` produces the display strings the payroll office and stored
    records depend on; keep them byte-for-byte stable.
    """

    kind: StatusKind
    minutes: Optional[int] = None
    deviation: Optional[DeviationKind] = None
    sanctioned: Optional[bool] = None
    label: Optional[str] = None
    also_early: Optional[int] = None

    def with_early_out(self, minutes: int) -> "AttendanceStatus":
        return replace(self, also_early=minutes)

    def render(self) -> str:
        text = _render_base(self)
        if self.also_early:
            text += f" + Early Out ({self.also_early} min)"
        return text

    def __str__(self) -> str:
        return self.render()


def _sanction_word(sanctioned: Optional[bool]) -> str:
    return "Sanctioned" if sanctioned else "Unsanctioned"


def _side_word(deviation: Optional[DeviationKind]) -> str:
    return "Early" if deviation == DeviationKind.EARLY else "Late"


def _render_base(status: AttendanceStatus) -> str:
    kind = status.kind
    if kind == StatusKind.ON_TIME:
        return "On Time"
    if kind == StatusKind.LATE:
        return f"Late In ({status.minutes} min)"
    if kind == StatusKind.EARLY:
        return f"Early Out ({status.minutes} min)"
    if kind == StatusKind.HALF_DAY:
        return f"Half Day ({_side_word(status.deviation)} {status.minutes} min)"
    if kind == StatusKind.ABSENT_THRESHOLD:
        return f"Absent: {_side_word(status.deviation)} {status.minutes} min ({_sanction_word(status.sanctioned)})"
    if kind == StatusKind.ABSENT_LEAVE:
        return f"Absent: {_sanction_word(status.sanctioned)} Leave"
    if kind == StatusKind.MISSING_PUNCH:
        return f"Absent: Missing Punch ({_sanction_word(status.sanctioned)})"
    if kind == StatusKind.OFF_DAY:
        return "Off Day"
    if kind == StatusKind.HOLIDAY:
        return f"Holiday: {status.label}"
    return "Error Processing"


ON_TIME = AttendanceStatus(StatusKind.ON_TIME)
OFF_DAY = AttendanceStatus(StatusKind.OFF_DAY)
ERROR = AttendanceStatus(StatusKind.ERROR)
