"""Worker profile holding the private inputs behind loan proofs."""

import hashlib
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ProfileTransaction:
    """A prior transaction kept in the worker's private history."""

    hash: str
    amount: Decimal
    timestamp: int
    corridor: Optional[str] = None


@dataclass
class WorkerProfile:
    """
    Private worker data used to generate zero-knowledge proofs.

    Never leaves the process; only commitments and threshold
    results derived from it are shared with the proof service.
    """

    worker_id: str
    monthly_income: Decimal = Decimal("800")
    collateral_value: Decimal = Decimal("15000")
    collateral_title_ref: str = "QmLandTitle"
    coordinates: Tuple[float, float] = (16.8661, 96.1951)
    employer_attestation: str = "0xemployer"
    default_corridor: Optional[str] = None
    transaction_history: List[ProfileTransaction] = field(default_factory=list)

    @property
    def transaction_count(self) -> int:
        return len(self.transaction_history)

    def add_transaction(self, transaction: ProfileTransaction) -> None:
        self.transaction_history.append(transaction)

    def history_commitment(self) -> str:
        """
        SHA-256 commitment over the transaction hashes, in history order.

        An empty history commits to the digest of ``b"empty"``.
        """
        if not self.transaction_history:
            return hashlib.sha256(b"empty").hexdigest()
        joined = "".join(tx.hash for tx in self.transaction_history)
        return hashlib.sha256(joined.encode()).hexdigest()
