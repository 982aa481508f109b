"""Data transfer objects for loan operations."""

from dataclasses import dataclass

from zkredit.domain.entities import LoanDisbursementEvent, PaymentResult


@dataclass(frozen=True)
class LoanDisbursement:
    """A paid-out loan and its ledger record."""

    event: LoanDisbursementEvent
    payment: PaymentResult

    def to_dict(self) -> dict:
        return {
            "event": self.event.to_dict(),
            "payment": self.payment.to_dict(),
        }
