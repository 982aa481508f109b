"""Windowed remittance summary and the attributes derived from it."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

VolumeBand = Literal["0-300", "300-600", "600-900", "900+"]
AccountAgeBand = Literal["0-3m", "3-6m", "6-12m", "12m+"]


@dataclass(frozen=True)
class WindowSummary:
    """
    Trailing-window aggregates over a worker's remittances.

    Attributes:
        months_with_activity: Distinct calendar months with a remittance
        total_volume: Sum of gross amounts inside the window
        account_age_months: Age of the oldest remittance (whole history)
        total_transactions: Remittances inside the window
    """

    months_with_activity: int = 0
    total_volume: Decimal = Decimal("0")
    account_age_months: int = 0
    total_transactions: int = 0

    def to_dict(self) -> dict:
        return {
            "months_with_activity": self.months_with_activity,
            "total_volume": str(self.total_volume),
            "account_age_months": self.account_age_months,
            "total_transactions": self.total_transactions,
        }


class ZkAttributes(BaseModel):
    """
    Bucketed behavioral attributes shared with the credit engine.

    Exact volumes and ages are hidden behind bands. Unknown fields
    and out-of-domain values are rejected on construction.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    stable_remitter: bool
    total_remitted_band: VolumeBand
    account_age_band: AccountAgeBand
    months_with_activity: int = Field(ge=0)
    total_transactions: int = Field(ge=0)
