from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import DeductionType
from .model import LateDeductionRules
from .strategies.base import DeductionStrategy
from .strategies.fixed_strategy import FixedDeductionStrategy
from .strategies.percentage_strategy import PercentageDeductionStrategy


@dataclass
class DeductionStrategyFactory:
    """Factory Pattern: choose the minute-charge strategy from the branch rules."""

    def for_rules(self, rules: LateDeductionRules) -> DeductionStrategy:
        if rules.deduction_type == DeductionType.PERCENTAGE:
            return PercentageDeductionStrategy()
        return FixedDeductionStrategy()
