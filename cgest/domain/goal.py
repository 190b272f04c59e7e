"""
Goal domain entity - financial target tracking
"""
from dataclasses import dataclass
from decimal import Decimal

from cgest.domain.period import OptionalDate


@dataclass
class Goal:
    id: str
    description: str
    target_value: Decimal
    current_value: Decimal = Decimal("0")
    deadline: OptionalDate = None

    def progress(self) -> Decimal:
        """Fraction achieved, capped at 1 (0 for a non-positive target)."""
        if self.target_value <= 0:
            return Decimal("0")
        return min(self.current_value / self.target_value, Decimal("1"))
