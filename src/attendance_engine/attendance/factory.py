from __future__ import annotations

from dataclasses import dataclass

from .model import DayContext, PunchSummary
from .states.absent_state import AbsentState
from .states.base import DayState
from .states.evaluated_state import EvaluatedState
from .states.holiday_state import HolidayState
from .states.missing_punch_state import MissingPunchState
from .states.off_day_state import OffDayState


@dataclass
class DayStateFactory:
    """Factory Pattern: pick the initial (and only) state for a day.

    Order: Holiday, OffDay, then AbsentNoPunch / MissingPunch / Evaluated.
    """

    def for_day(self, *, ctx: DayContext, punches: PunchSummary) -> DayState:
        if ctx.holiday is not None:
            return HolidayState()
        if not ctx.is_work_day:
            return OffDayState()
        if punches.first_in is None and punches.last_out is None:
            return AbsentState()
        if punches.first_in is None or punches.last_out is None:
            return MissingPunchState()
        return EvaluatedState()
