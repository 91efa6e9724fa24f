from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import (
    DEFAULT_ABSENT_THRESHOLD,
    DEFAULT_DEDUCT_PER_MINUTE,
    DEFAULT_FIXED_AMOUNT_PER_MINUTE,
    DEFAULT_HALF_DAY_THRESHOLD,
    DEFAULT_MAX_DEDUCTION_TIME,
    DEFAULT_UNSANCTIONED_MULTIPLIER,
)
from ..core.enums import DeductionType
from ..core.exceptions import ValidationError


def _number(data: Mapping[str, Any], key: str, default: float) -> float:
    value = data.get(key)
    if value is None or value == "":
        return default
    return float(value)


@dataclass(frozen=True)
class LateDeductionRules:
    """Branch-wide rules for charging lateness and early departure.

    Thresholds are inclusive lower bounds in minutes; a threshold of 0
    switches that escalation off.
    """

    enabled: bool = False
    deduction_type: DeductionType = DeductionType.PERCENTAGE
    deduct_per_minute: float = DEFAULT_DEDUCT_PER_MINUTE
    fixed_amount_per_minute: float = DEFAULT_FIXED_AMOUNT_PER_MINUTE
    max_deduction_time: int = DEFAULT_MAX_DEDUCTION_TIME
    half_day_threshold: int = DEFAULT_HALF_DAY_THRESHOLD
    absent_threshold: int = DEFAULT_ABSENT_THRESHOLD

    def __post_init__(self):
        if self.half_day_threshold < 0 or self.absent_threshold < 0:
            raise ValidationError("Deduction thresholds cannot be negative")
        if self.absent_threshold and self.half_day_threshold and self.absent_threshold < self.half_day_threshold:
            raise ValidationError("absentThreshold must not be below halfDayThreshold")

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LateDeductionRules":
        if not isinstance(data, Mapping):
            return cls()
        try:
            deduction_type = DeductionType(str(data.get("deductionType") or DeductionType.PERCENTAGE.value).lower())
        except ValueError:
            raise ValidationError(f"Unknown deductionType: {data.get('deductionType')!r}")
        return cls(
            enabled=bool(data.get("enabled", False)),
            deduction_type=deduction_type,
            deduct_per_minute=_number(data, "deductPerMinute", DEFAULT_DEDUCT_PER_MINUTE),
            fixed_amount_per_minute=_number(data, "fixedAmountPerMinute", DEFAULT_FIXED_AMOUNT_PER_MINUTE),
            max_deduction_time=int(_number(data, "maxDeductionTime", DEFAULT_MAX_DEDUCTION_TIME)),
            half_day_threshold=int(_number(data, "halfDayThreshold", DEFAULT_HALF_DAY_THRESHOLD)),
            absent_threshold=int(_number(data, "absentThreshold", DEFAULT_ABSENT_THRESHOLD)),
        )


@dataclass(frozen=True)
class LeaveRules:
    unsanctioned_multiplier: float = DEFAULT_UNSANCTIONED_MULTIPLIER

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LeaveRules":
        if not isinstance(data, Mapping):
            return cls()
        # 0 is not a meaningful multiplier; treat it like "not configured".
        multiplier = _number(data, "unsanctionedMultiplier", DEFAULT_UNSANCTIONED_MULTIPLIER)
        return cls(unsanctioned_multiplier=multiplier or DEFAULT_UNSANCTIONED_MULTIPLIER)


@dataclass(frozen=True)
class AttendanceRules:
    late_deductions: LateDeductionRules = LateDeductionRules()
    leave_rules: LeaveRules = LeaveRules()

    def multiplier_for(self, sanctioned: bool) -> float:
        return 1 if sanctioned else self.leave_rules.unsanctioned_multiplier

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AttendanceRules":
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            late_deductions=LateDeductionRules.from_dict(data.get("lateDeductions")),
            leave_rules=LeaveRules.from_dict(data.get("leaveRules")),
        )
