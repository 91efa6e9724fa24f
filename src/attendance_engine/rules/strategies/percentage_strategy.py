from __future__ import annotations

from ...common.formatting import format_money, format_number
from ...core.enums import DeviationKind
from ..model import LateDeductionRules
from .base import DeductionStrategy, MinuteCharge, deviation_phrase


class PercentageDeductionStrategy(DeductionStrategy):
    """Each chargeable minute costs ``deductPerMinute`` percent of the daily salary."""

    def charge(self, *, chargeable_minutes: int, rules: LateDeductionRules, daily_salary: float) -> MinuteCharge:
        percentage = chargeable_minutes * rules.deduct_per_minute
        return MinuteCharge(
            attendance_deduction=percentage / 100,
            deduction_amount=daily_salary * percentage / 100,
            percentage=percentage,
        )

    def remark(self, *, charge, minutes, chargeable_minutes, kind: DeviationKind, rules, currency) -> str:
        return (
            f"{currency}{format_money(charge.deduction_amount)} deduction ({charge.percentage:.1f}% of daily salary)"
            f" - {deviation_phrase(kind)} {minutes} minutes"
            f" ({chargeable_minutes} chargeable minutes at {format_number(rules.deduct_per_minute)}% per minute)"
        )

    def additional_early_remark(self, *, charge, minutes, chargeable_minutes, rules, currency) -> str:
        return (
            f" + {currency}{format_money(charge.deduction_amount)} additional deduction"
            f" ({charge.percentage:.1f}% of daily salary) for early departure by {minutes} minutes"
            f" ({chargeable_minutes} chargeable minutes)"
        )
