from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.status import ON_TIME, AttendanceStatus
from ..common.formatting import format_money, format_number
from ..core.constants import DEFAULT_CURRENCY_SYMBOL
from ..core.enums import DeviationKind, StatusKind
from .factory import DeductionStrategyFactory
from .model import AttendanceRules
from .strategies.base import deviation_phrase


@dataclass(frozen=True)
class DeviationResult:
    status: AttendanceStatus
    attendance_deduction: float = 0
    deduction_amount: float = 0
    remark: str = ""


ON_TIME_RESULT = DeviationResult(status=ON_TIME, remark="No deduction - On time attendance")


def _reason(kind: DeviationKind) -> str:
    return "leaving early" if kind == DeviationKind.EARLY else "excessive lateness"


def _half_day_reason(kind: DeviationKind) -> str:
    return "leaving early" if kind == DeviationKind.EARLY else "lateness"


@dataclass
class DeductionRuleEngine:
    """Turns a lateness/earliness magnitude into a status and a deduction.

    Decision order, first match wins:

    1. ``minutes <= 0`` - on time, nothing charged.
    2. ``minutes >= absentThreshold`` (threshold > 0) - full day; the sanction
       multiplier applies.
    3. ``minutes >= halfDayThreshold`` (threshold > 0) - half day, regardless
       of sanction.
    4. Otherwise the minute-charge strategy over
       ``min(minutes, maxDeductionTime)``.
    """

    currency: str = DEFAULT_CURRENCY_SYMBOL
    strategy_factory: DeductionStrategyFactory = field(default_factory=DeductionStrategyFactory)

    def evaluate(
        self,
        minutes: int,
        rules: AttendanceRules,
        daily_salary: float,
        sanctioned: bool,
        kind: DeviationKind,
    ) -> DeviationResult:
        if minutes <= 0:
            return ON_TIME_RESULT

        late = rules.late_deductions
        plain_kind = StatusKind.EARLY if kind == DeviationKind.EARLY else StatusKind.LATE

        if not late.enabled:
            return DeviationResult(
                status=AttendanceStatus(plain_kind, minutes=minutes, deviation=kind),
                remark=f"No deduction - {deviation_phrase(kind)} {minutes} minutes (deductions disabled)",
            )

        if late.absent_threshold > 0 and minutes >= late.absent_threshold:
            multiplier = rules.multiplier_for(sanctioned)
            amount = daily_salary * multiplier
            sanction_word = "Sanctioned" if sanctioned else "Unsanctioned"
            return DeviationResult(
                status=AttendanceStatus(StatusKind.ABSENT_THRESHOLD, minutes=minutes, deviation=kind, sanctioned=sanctioned),
                attendance_deduction=1,
                deduction_amount=amount,
                remark=(
                    f"{self.currency}{format_money(amount)} deduction ({format_number(multiplier)}x daily salary)"
                    f" - {sanction_word} leave due to {_reason(kind)}"
                    f" ({minutes} minutes exceeds threshold of {late.absent_threshold} minutes)"
                ),
            )

        if late.half_day_threshold > 0 and minutes >= late.half_day_threshold:
            amount = daily_salary * 0.5
            return DeviationResult(
                status=AttendanceStatus(StatusKind.HALF_DAY, minutes=minutes, deviation=kind),
                attendance_deduction=0.5,
                deduction_amount=amount,
                remark=(
                    f"{self.currency}{format_money(amount)} deduction (0.5x daily salary)"
                    f" - Half day due to {_half_day_reason(kind)}"
                    f" ({minutes} minutes exceeds threshold of {late.half_day_threshold} minutes)"
                ),
            )

        chargeable = min(minutes, late.max_deduction_time)
        strategy = self.strategy_factory.for_rules(late)
        charge = strategy.charge(chargeable_minutes=chargeable, rules=late, daily_salary=daily_salary)
        return DeviationResult(
            status=AttendanceStatus(plain_kind, minutes=minutes, deviation=kind),
            attendance_deduction=charge.attendance_deduction,
            deduction_amount=charge.deduction_amount,
            remark=strategy.remark(
                charge=charge,
                minutes=minutes,
                chargeable_minutes=chargeable,
                kind=kind,
                rules=late,
                currency=self.currency,
            ),
        )

    def _additional_early(self, minutes: int, rules: AttendanceRules, daily_salary: float) -> tuple[float, str]:
        late = rules.late_deductions
        if not late.enabled:
            return 0, ""
        chargeable = min(minutes, late.max_deduction_time)
        strategy = self.strategy_factory.for_rules(late)
        charge = strategy.charge(chargeable_minutes=chargeable, rules=late, daily_salary=daily_salary)
        remark = strategy.additional_early_remark(
            charge=charge,
            minutes=minutes,
            chargeable_minutes=chargeable,
            rules=late,
            currency=self.currency,
        )
        return charge.deduction_amount, remark

    def evaluate_day(
        self,
        *,
        minutes_late: int,
        minutes_early: int,
        rules: AttendanceRules,
        daily_salary: float,
        sanctioned: bool,
    ) -> DeviationResult:
        """Combine the late and early evaluations for one punched-in day.

        When lateness applies, early departure only adds its minute charge and
        remark; the record keeps the lateness fraction. Early departure alone
        goes through the full decision order.
        """

        if minutes_late > 0:
            result = self.evaluate(minutes_late, rules, daily_salary, sanctioned, DeviationKind.LATE)
            if minutes_early <= 0:
                return result
            extra_amount, extra_remark = self._additional_early(minutes_early, rules, daily_salary)
            return DeviationResult(
                status=result.status.with_early_out(minutes_early),
                attendance_deduction=result.attendance_deduction,
                deduction_amount=result.deduction_amount + extra_amount,
                remark=result.remark + extra_remark,
            )

        if minutes_early > 0:
            return self.evaluate(minutes_early, rules, daily_salary, sanctioned, DeviationKind.EARLY)

        return ON_TIME_RESULT


def evaluate_deviation(
    minutes: int,
    rules: AttendanceRules,
    daily_salary: float,
    sanctioned: bool,
    kind: DeviationKind,
    *,
    currency: Optional[str] = None,
) -> DeviationResult:
    engine = DeductionRuleEngine(currency=currency or DEFAULT_CURRENCY_SYMBOL)
    return engine.evaluate(minutes, rules, daily_salary, sanctioned, kind)
