"""Data transfer objects for remittance operations."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Optional

from zkredit.domain.entities import PaymentResult, RemittanceEvent
from zkredit.domain.exceptions import ValidationError
from zkredit.service.payment import to_decimal


@dataclass(frozen=True)
class RemittanceRequest:
    """Input data for sending a remittance."""

    amount: Any
    receiver_id: Optional[str] = None
    corridor: Optional[str] = None

    def validate(self, cap: Decimal) -> List[str]:
        errors = []

        try:
            amount = to_decimal(self.amount)
        except ValidationError as e:
            return [e.message]

        if amount <= 0:
            errors.append("amount must be positive")
        elif amount > cap:
            errors.append(f"amount must not exceed the remittance cap of {cap}")

        if self.receiver_id is not None and not self.receiver_id.strip():
            errors.append("receiver_id must not be blank")

        if self.corridor is not None and not self.corridor.strip():
            errors.append("corridor must not be blank")

        return errors


@dataclass(frozen=True)
class RemittanceResult:
    """Outcome of a settled and recorded remittance."""

    event: RemittanceEvent
    payment: PaymentResult

    @property
    def fee(self) -> Decimal:
        return self.event.fee

    @property
    def net_amount(self) -> Decimal:
        return self.event.net_amount

    def to_dict(self) -> dict:
        return {
            "event": self.event.to_dict(),
            "payment": self.payment.to_dict(),
        }
