"""Domain Entities - Core business objects."""

from .decision import REPAYMENT_MONTHS, CreditDecision
from .ledger import LoanDisbursementEvent, RemittanceEvent, new_event_id
from .notification import Notification, NotificationType
from .payment import LedgerReceipt, PaymentResult, TransferMode
from .proof import LoanApplication, ProofArtifact, ProofRequest, ProofType
from .summary import AccountAgeBand, VolumeBand, WindowSummary, ZkAttributes
from .worker import ProfileTransaction, WorkerProfile

__all__ = [
    "REPAYMENT_MONTHS",
    "CreditDecision",
    "LoanDisbursementEvent",
    "RemittanceEvent",
    "new_event_id",
    "Notification",
    "NotificationType",
    "LedgerReceipt",
    "PaymentResult",
    "TransferMode",
    "LoanApplication",
    "ProofArtifact",
    "ProofRequest",
    "ProofType",
    "AccountAgeBand",
    "VolumeBand",
    "WindowSummary",
    "ZkAttributes",
    "ProfileTransaction",
    "WorkerProfile",
]
