"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .validation import ConfigurationError, ValidationError
from .payment import LedgerTimeoutError, PaymentExecutionError
from .proof import ProofInsufficientError, ProofProviderError, ProofTimeoutError
from .ledger import DuplicateEventError, WorkerNotFoundException

__all__ = [
    "DomainException",
    "ValidationError",
    "ConfigurationError",
    "PaymentExecutionError",
    "LedgerTimeoutError",
    "ProofInsufficientError",
    "ProofProviderError",
    "ProofTimeoutError",
    "DuplicateEventError",
    "WorkerNotFoundException",
]
