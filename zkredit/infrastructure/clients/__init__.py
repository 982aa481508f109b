"""External API client implementations."""

from .ledger_client import HttpLedgerClient
from .proof_client import HttpProofClient

__all__ = [
    "HttpLedgerClient",
    "HttpProofClient",
]
