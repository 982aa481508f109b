"""Loan application schemas."""

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .remittance import PaymentSchema


class LoanApplicationRequestSchema(BaseModel):
    """Schema for POST /v1/workers/{worker_id}/loan-applications request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "requested_amount": "400",
                    "receiver_address": "0.0.6006",
                }
            ]
        }
    )

    requested_amount: Decimal = Field(..., gt=0)
    receiver_address: Optional[str] = Field(
        default=None,
        description="Worker account to disburse an approved loan to; omit to decide only",
    )
    timestamp: Optional[int] = Field(default=None, ge=0)


class CreditDecisionSchema(BaseModel):
    approved: bool
    max_amount: Decimal
    interest_rate: Decimal
    installment: Decimal
    repayment_months: int
    reason: str
    strategy: str
    analysis: Dict[str, Any] = Field(default_factory=dict)


class DisbursementSchema(BaseModel):
    event_id: str
    amount: Decimal
    interest_rate: Decimal
    tenure_months: int
    funding_account: str
    transaction_hash: str
    timestamp: int
    payment: PaymentSchema


class LoanApplicationResponseSchema(BaseModel):
    worker_id: str
    decision: CreditDecisionSchema
    disbursement: Optional[DisbursementSchema] = None
