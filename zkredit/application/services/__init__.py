"""Application services (use cases)."""

from .loan_service import LoanService
from .worker_service import WorkerService

__all__ = [
    "LoanService",
    "WorkerService",
]
