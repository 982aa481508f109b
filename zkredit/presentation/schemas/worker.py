"""Worker registration schemas."""

from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WorkerCreateSchema(BaseModel):
    """Schema for POST /v1/workers request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "worker_id": "worker-maria",
                    "monthly_income": "800",
                    "collateral_value": "15000",
                    "default_corridor": "middle-east-to-philippines",
                }
            ]
        }
    )

    worker_id: str = Field(..., min_length=1, max_length=255)
    monthly_income: Decimal = Field(default=Decimal("800"), ge=0)
    collateral_value: Decimal = Field(default=Decimal("15000"), ge=0)
    collateral_title_ref: str = Field(default="QmLandTitle", max_length=255)
    coordinates: Tuple[float, float] = (16.8661, 96.1951)
    employer_attestation: str = Field(default="0xemployer", max_length=255)
    default_corridor: Optional[str] = Field(default=None, max_length=100)

    @field_validator("worker_id")
    @classmethod
    def validate_worker_id(cls, v: str) -> str:
        """Ensure worker_id is not just whitespace."""
        if not v.strip():
            raise ValueError("worker_id cannot be empty or whitespace")
        return v.strip()


class WorkerResponseSchema(BaseModel):
    """Public view of a registered worker; private inputs are not echoed."""

    worker_id: str
    default_corridor: Optional[str] = None
    transaction_count: int
