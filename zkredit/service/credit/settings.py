"""
Credit Settings for the microloan decision engine.

Environment variables use the CREDIT_ prefix:
    CREDIT_STRATEGY=attribute_aware
    CREDIT_LOAN_AMOUNT_CAP=500
    CREDIT_MIN_MONTHLY_INCOME=500

All monetary values are in the settlement currency.
All rates are annual percentages.
"""

from decimal import Decimal
from enum import Enum
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StrategyKind(str, Enum):
    """Closed set of decision strategies."""

    BASE = "base"
    ATTRIBUTE_AWARE = "attribute_aware"
    FALLBACK = "fallback"


class CreditSettings(BaseSettings):
    """Configurable parameters for strategies, scoring and proof thresholds."""

    model_config = SettingsConfigDict(
        env_prefix="CREDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    strategy: StrategyKind = Field(
        default=StrategyKind.ATTRIBUTE_AWARE,
        description="Decision strategy used for every loan assessment",
    )
    agent_id: str = Field(
        default="credit-agent-2",
        description="Identity recorded on loan disbursements",
    )
    corridor_label: str = Field(
        default="MENA->PHL",
        description="Corridor label echoed in decision analysis",
    )

    # === Base strategy ===
    base_amount: Decimal = Field(default=Decimal("150"), gt=0)
    base_rate: Decimal = Field(default=Decimal("10"), gt=0)

    # === Attribute-aware strategy ===
    standard_rate: Decimal = Field(default=Decimal("10"), gt=0)
    stable_remitter_rate: Decimal = Field(default=Decimal("9"), gt=0)
    loan_amount_cap: Decimal = Field(
        default=Decimal("500"),
        gt=0,
        description="Upper bound on any approved amount",
    )

    # === Fallback strategy ===
    fallback_amount: Decimal = Field(default=Decimal("150"), gt=0)
    fallback_rate: Decimal = Field(default=Decimal("10"), gt=0)

    # === Proof thresholds ===
    min_monthly_income: Decimal = Field(default=Decimal("500"), ge=0)
    min_transactions: int = Field(default=1, ge=0)
    min_collateral_value: Decimal = Field(default=Decimal("10000"), ge=0)
    proof_time_range_months: int = Field(default=6, ge=1)
    collateral_country_code: str = Field(default="MM")

    # === Credit score weights (sum to 100) ===
    weight_proofs: int = Field(default=60, ge=0, le=100)
    weight_stable_remitter: int = Field(default=15, ge=0, le=100)
    weight_volume: int = Field(default=15, ge=0, le=100)
    weight_account_age: int = Field(default=10, ge=0, le=100)

    @model_validator(mode="after")
    def validate_weights(self) -> "CreditSettings":
        total = (
            self.weight_proofs
            + self.weight_stable_remitter
            + self.weight_volume
            + self.weight_account_age
        )
        if total != 100:
            raise ValueError(f"Credit score weights must sum to 100, got {total}")
        return self


@lru_cache
def get_credit_settings() -> CreditSettings:
    """Get cached credit settings instance."""
    return CreditSettings()


credit_settings = get_credit_settings()
