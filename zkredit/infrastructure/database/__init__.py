"""Database infrastructure."""

from .connection import DatabaseSessionManager, db_manager
from .models import Base, LoanDisbursementEventModel, RemittanceEventModel

__all__ = [
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "LoanDisbursementEventModel",
    "RemittanceEventModel",
]
