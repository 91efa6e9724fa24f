from __future__ import annotations

from ...common.formatting import format_money, format_number
from ...core.enums import StatusKind
from ..status import AttendanceStatus
from .base import DayOutcome, DayState


def leave_remark(*, currency: str, amount: float, multiplier: float, sanctioned: bool) -> str:
    word = "Sanctioned" if sanctioned else "Unsanctioned"
    return f"{currency}{format_money(amount)} deduction ({format_number(multiplier)}x daily salary) - {word} leave"


class AbsentState(DayState):
    """Scheduled work day without a single usable punch."""

    def resolve(self, *, ctx, punches, rules, engine) -> DayOutcome:
        multiplier = rules.multiplier_for(ctx.sanctioned)
        amount = ctx.daily_salary * multiplier
        return DayOutcome(
            status=AttendanceStatus(StatusKind.ABSENT_LEAVE, sanctioned=ctx.sanctioned),
            attendance_deduction=1,
            deduction_amount=amount,
            deduction_remarks=leave_remark(
                currency=engine.currency, amount=amount, multiplier=multiplier, sanctioned=ctx.sanctioned
            ),
        )
