from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...rules.engine import DeductionRuleEngine
from ...rules.model import AttendanceRules
from ..model import DayContext, PunchSummary
from ..status import AttendanceStatus


@dataclass(frozen=True)
class DayOutcome:
    status: AttendanceStatus
    attendance_deduction: float = 0
    deduction_amount: float = 0
    deduction_remarks: str = ""


class DayState(ABC):
    """State Pattern: one terminal verdict per calendar day."""

    @abstractmethod
    def resolve(
        self,
        *,
        ctx: DayContext,
        punches: PunchSummary,
        rules: AttendanceRules,
        engine: DeductionRuleEngine,
    ) -> DayOutcome:
        raise NotImplementedError
