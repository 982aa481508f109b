"""Window summary and attribute schemas."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel


class WindowSummarySchema(BaseModel):
    months_with_activity: int
    total_volume: Decimal
    account_age_months: int
    total_transactions: int


class ZkAttributesSchema(BaseModel):
    stable_remitter: bool
    total_remitted_band: Literal["0-300", "300-600", "600-900", "900+"]
    account_age_band: Literal["0-3m", "3-6m", "6-12m", "12m+"]
    months_with_activity: int
    total_transactions: int


class AttributesResponseSchema(BaseModel):
    """Schema for GET /v1/workers/{worker_id}/attributes."""

    worker_id: str
    summary: WindowSummarySchema
    attributes: ZkAttributesSchema
