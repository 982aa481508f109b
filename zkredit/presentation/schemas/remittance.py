"""Remittance schemas."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RemittanceRequestSchema(BaseModel):
    """Schema for POST /v1/workers/{worker_id}/remittances request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "amount": "250.72",
                    "receiver_id": "0.0.5005",
                    "corridor": "middle-east-to-philippines",
                }
            ]
        }
    )

    amount: Decimal = Field(..., description="Gross amount in settlement currency")
    receiver_id: Optional[str] = Field(
        default=None,
        description="Receiver account, native id or hex; defaults to the configured receiver",
    )
    corridor: Optional[str] = Field(default=None, max_length=100)
    timestamp: Optional[int] = Field(
        default=None,
        ge=0,
        description="Event time in ms since epoch; defaults to now",
    )


class PaymentSchema(BaseModel):
    transaction_id: str
    transaction_hash: str
    status: str
    amount_smallest_unit: int
    receiver_address: str
    mode: str
    settled_amount: Decimal


class RemittanceResponseSchema(BaseModel):
    """Schema for a settled remittance."""

    event_id: str
    worker_id: str
    receiver_id: str
    corridor: str
    amount: Decimal
    fee: Decimal
    net_amount: Decimal
    currency: str
    timestamp: int
    topic: str
    payment: PaymentSchema
