from __future__ import annotations

from ...core.enums import StatusKind
from ..status import AttendanceStatus
from .base import DayOutcome, DayState


class HolidayState(DayState):
    """Holiday calendar wins over everything; nothing is ever charged."""

    def resolve(self, *, ctx, punches, rules, engine) -> DayOutcome:
        holiday = ctx.holiday
        return DayOutcome(
            status=AttendanceStatus(StatusKind.HOLIDAY, label=holiday.name),
            deduction_remarks=f"No deduction - {holiday.type.value} holiday: {holiday.name}",
        )
