from __future__ import annotations

from ...core.enums import StatusKind
from ..status import AttendanceStatus
from .absent_state import leave_remark
from .base import DayOutcome, DayState


class MissingPunchState(DayState):
    """Only one side punched; charged exactly like a day with no punches."""

    def resolve(self, *, ctx, punches, rules, engine) -> DayOutcome:
        multiplier = rules.multiplier_for(ctx.sanctioned)
        amount = ctx.daily_salary * multiplier
        missing = "entry" if punches.first_in is None else "exit"
        remark = leave_remark(currency=engine.currency, amount=amount, multiplier=multiplier, sanctioned=ctx.sanctioned)
        return DayOutcome(
            status=AttendanceStatus(StatusKind.MISSING_PUNCH, sanctioned=ctx.sanctioned),
            attendance_deduction=1,
            deduction_amount=amount,
            deduction_remarks=f"{remark} due to missing {missing} record",
        )
