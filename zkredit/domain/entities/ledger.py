"""Ledger events recorded for remittances and loan disbursements."""

import secrets
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from zkredit.domain.exceptions import ValidationError


def new_event_id(prefix: str) -> str:
    """Generate a ledger event id such as ``remit_1f2e3d4c5b6a7980``."""
    return f"{prefix}_{secrets.token_hex(8)}"


@dataclass(frozen=True)
class RemittanceEvent:
    """
    A settled remittance from a worker to a receiver.

    Attributes:
        worker_id: Identity of the sending worker
        receiver_id: Identity or address of the receiving family account
        corridor: Origin-to-destination route label
        amount: Gross amount sent, in settlement currency
        fee: Fee deducted from the gross amount
        net_amount: Amount delivered to the receiver
        currency: Settlement currency code
        transaction_hash: Settlement transaction reference
        timestamp: Caller-supplied event time, ms since epoch
        topic: Ledger topic the event is published on
    """

    worker_id: str
    receiver_id: str
    corridor: str
    amount: Decimal
    fee: Decimal
    net_amount: Decimal
    currency: str
    transaction_hash: str
    timestamp: int
    topic: str
    id: str = field(default_factory=lambda: new_event_id("remit"))

    def __post_init__(self):
        if self.amount <= 0:
            raise ValidationError("Remittance amount must be positive", code="NON_POSITIVE_AMOUNT")
        if self.net_amount <= 0:
            raise ValidationError("Remittance net amount must be positive", code="NON_POSITIVE_AMOUNT")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "event_id": self.id,
            "worker_id": self.worker_id,
            "receiver_id": self.receiver_id,
            "corridor": self.corridor,
            "amount": str(self.amount),
            "fee": str(self.fee),
            "net_amount": str(self.net_amount),
            "currency": self.currency,
            "transaction_hash": self.transaction_hash,
            "timestamp": self.timestamp,
            "topic": self.topic,
        }


@dataclass(frozen=True)
class LoanDisbursementEvent:
    """A loan paid out from the funding pool to a worker."""

    worker_id: str
    credit_agent_id: str
    amount: Decimal
    interest_rate: Decimal
    tenure_months: int
    funding_account: str
    transaction_hash: str
    timestamp: int
    corridor: str
    notes: Optional[str] = None
    id: str = field(default_factory=lambda: new_event_id("loan"))

    def __post_init__(self):
        if self.amount <= 0:
            raise ValidationError("Disbursed amount must be positive", code="NON_POSITIVE_AMOUNT")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "event_id": self.id,
            "worker_id": self.worker_id,
            "credit_agent_id": self.credit_agent_id,
            "amount": str(self.amount),
            "interest_rate": str(self.interest_rate),
            "tenure_months": self.tenure_months,
            "funding_account": self.funding_account,
            "transaction_hash": self.transaction_hash,
            "timestamp": self.timestamp,
            "corridor": self.corridor,
            "notes": self.notes,
        }
