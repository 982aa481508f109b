"""Payment routing entities."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class TransferMode(str, Enum):
    """How a payment settles on the ledger."""

    DIRECT_TRANSFER = "direct_transfer"  # account-to-account value transfer
    CONTRACT_CALL = "contract_call"  # payable call on the payment contract


SUCCESS_STATUS = "SUCCESS"


@dataclass(frozen=True)
class LedgerReceipt:
    """Receipt returned by the ledger client after submission."""

    status: str
    transaction_id: str
    transaction_hash: str

    @property
    def succeeded(self) -> bool:
        return self.status.upper() == SUCCESS_STATUS


@dataclass(frozen=True)
class PaymentResult:
    """A settled payment."""

    transaction_id: str
    transaction_hash: str
    status: str
    amount_smallest_unit: int
    receiver_address: str
    mode: TransferMode
    settled_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "transaction_id": self.transaction_id,
            "transaction_hash": self.transaction_hash,
            "status": self.status,
            "amount_smallest_unit": self.amount_smallest_unit,
            "receiver_address": self.receiver_address,
            "mode": self.mode.value,
            "settled_amount": str(self.settled_amount),
        }
