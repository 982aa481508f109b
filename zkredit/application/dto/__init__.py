"""Data Transfer Objects for application layer."""

from .loan import LoanDisbursement
from .remittance import RemittanceRequest, RemittanceResult

__all__ = [
    "LoanDisbursement",
    "RemittanceRequest",
    "RemittanceResult",
]
