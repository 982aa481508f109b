"""Credit decision entity."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict

REPAYMENT_MONTHS = 4


@dataclass(frozen=True)
class CreditDecision:
    """
    Outcome of a microloan credit assessment.

    Every strategy repays over the same fixed term.
    """

    approved: bool
    max_amount: Decimal
    interest_rate: Decimal
    reason: str
    strategy: str
    analysis: Dict[str, Any] = field(default_factory=dict)
    repayment_months: int = REPAYMENT_MONTHS

    @property
    def installment(self) -> Decimal:
        return (self.max_amount / self.repayment_months).quantize(Decimal("0.01"))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "approved": self.approved,
            "max_amount": str(self.max_amount),
            "interest_rate": str(self.interest_rate),
            "reason": self.reason,
            "strategy": self.strategy,
            "analysis": self.analysis,
            "repayment_months": self.repayment_months,
        }
