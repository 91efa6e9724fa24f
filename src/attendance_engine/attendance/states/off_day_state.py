from __future__ import annotations

from ..status import OFF_DAY
from .base import DayOutcome, DayState


class OffDayState(DayState):
    """Weekday outside the shift's working days."""

    def resolve(self, *, ctx, punches, rules, engine) -> DayOutcome:
        return DayOutcome(status=OFF_DAY, deduction_remarks="No deduction - Not scheduled to work")
