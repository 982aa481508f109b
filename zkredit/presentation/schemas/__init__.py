"""Pydantic schemas for API request/response validation."""

from .attributes import AttributesResponseSchema, WindowSummarySchema, ZkAttributesSchema
from .error import ErrorResponseSchema
from .loan import (
    CreditDecisionSchema,
    DisbursementSchema,
    LoanApplicationRequestSchema,
    LoanApplicationResponseSchema,
)
from .remittance import PaymentSchema, RemittanceRequestSchema, RemittanceResponseSchema
from .worker import WorkerCreateSchema, WorkerResponseSchema

__all__ = [
    "AttributesResponseSchema",
    "WindowSummarySchema",
    "ZkAttributesSchema",
    "ErrorResponseSchema",
    "CreditDecisionSchema",
    "DisbursementSchema",
    "LoanApplicationRequestSchema",
    "LoanApplicationResponseSchema",
    "PaymentSchema",
    "RemittanceRequestSchema",
    "RemittanceResponseSchema",
    "WorkerCreateSchema",
    "WorkerResponseSchema",
]
