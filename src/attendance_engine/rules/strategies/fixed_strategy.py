from __future__ import annotations

from ...common.formatting import format_money, format_number
from ...core.enums import DeviationKind
from ..model import LateDeductionRules
from .base import DeductionStrategy, MinuteCharge, deviation_phrase


class FixedDeductionStrategy(DeductionStrategy):
    """Flat amount per chargeable minute; never touches the attendance fraction."""

    def charge(self, *, chargeable_minutes: int, rules: LateDeductionRules, daily_salary: float) -> MinuteCharge:
        return MinuteCharge(
            attendance_deduction=0,
            deduction_amount=chargeable_minutes * rules.fixed_amount_per_minute,
        )

    def remark(self, *, charge, minutes, chargeable_minutes, kind: DeviationKind, rules, currency) -> str:
        return (
            f"{currency}{format_money(charge.deduction_amount)} fixed deduction"
            f" - {deviation_phrase(kind)} {minutes} minutes"
            f" ({chargeable_minutes} chargeable minutes at {currency}{format_number(rules.fixed_amount_per_minute)} per minute)"
        )

    def additional_early_remark(self, *, charge, minutes, chargeable_minutes, rules, currency) -> str:
        return (
            f" + {currency}{format_money(charge.deduction_amount)} additional fixed deduction"
            f" for early departure by {minutes} minutes"
            f" ({chargeable_minutes} chargeable minutes at {currency}{format_number(rules.fixed_amount_per_minute)} per minute)"
        )
