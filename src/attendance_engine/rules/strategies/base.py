from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import DeviationKind
from ..model import LateDeductionRules


@dataclass(frozen=True)
class MinuteCharge:
    attendance_deduction: float
    deduction_amount: float
    percentage: Optional[float] = None


def deviation_phrase(kind: DeviationKind) -> str:
    return "Left early by" if kind == DeviationKind.EARLY else "Late by"


class DeductionStrategy(ABC):
    """Strategy Pattern: how chargeable minutes become a deduction."""

    @abstractmethod
    def charge(self, *, chargeable_minutes: int, rules: LateDeductionRules, daily_salary: float) -> MinuteCharge:
        raise NotImplementedError

    @abstractmethod
    def remark(
        self,
        *,
        charge: MinuteCharge,
        minutes: int,
        chargeable_minutes: int,
        kind: DeviationKind,
        rules: LateDeductionRules,
        currency: str,
    ) -> str:
        raise NotImplementedError

    @abstractmethod
    def additional_early_remark(
        self,
        *,
        charge: MinuteCharge,
        minutes: int,
        chargeable_minutes: int,
        rules: LateDeductionRules,
        currency: str,
    ) -> str:
        """Remark suffix when early departure is charged on top of lateness."""

        raise NotImplementedError
