"""
Attribute Settings for the remittance history summarizer.

Environment variables use the ATTRIBUTES_ prefix:
    ATTRIBUTES_WINDOW_MONTHS=6
    ATTRIBUTES_STABLE_REMITTER_MONTHS=3
"""

import json
from decimal import Decimal
from functools import lru_cache
from typing import List, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AttributeSettings(BaseSettings):
    """
    Configurable parameters for windowed summaries and banding.

    Band thresholds are lower-inclusive: a value equal to a threshold
    belongs to the higher band.
    """

    model_config = SettingsConfigDict(
        env_prefix="ATTRIBUTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    window_months: int = Field(
        default=6,
        ge=1,
        description="Trailing window, in 30-day months, used for activity aggregates",
    )
    month_days: int = Field(
        default=30,
        ge=1,
        description="Length of one summarization month in days",
    )
    stable_remitter_months: int = Field(
        default=3,
        ge=1,
        description="Active months required to be considered a stable remitter",
    )

    volume_bands_json: str = Field(
        default='[[0,"0-300"],[300,"300-600"],[600,"600-900"],[900,"900+"]]',
        description="Volume bands as JSON: [[lower_bound, label], ...] ascending",
    )
    age_bands_json: str = Field(
        default='[[0,"0-3m"],[3,"3-6m"],[6,"6-12m"],[12,"12m+"]]',
        description="Account age bands as JSON: [[lower_bound_months, label], ...] ascending",
    )

    @field_validator("volume_bands_json", "age_bands_json")
    @classmethod
    def validate_bands_json(cls, v: str) -> str:
        """Validate that band JSON is parseable and ascending."""
        try:
            bands = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(bands, list) or not bands:
            raise ValueError("Bands must be a non-empty list")
        previous = None
        for band in bands:
            if not isinstance(band, list) or len(band) != 2:
                raise ValueError("Each band must be [lower_bound, label]")
            lower, label = band
            if not isinstance(lower, (int, float)) or not isinstance(label, str):
                raise ValueError("Band bounds must be numbers and labels strings")
            if previous is not None and lower <= previous:
                raise ValueError("Band lower bounds must be strictly ascending")
            previous = lower
        return v

    @property
    def volume_bands(self) -> List[Tuple[Decimal, str]]:
        return [(Decimal(str(lower)), label) for lower, label in json.loads(self.volume_bands_json)]

    @property
    def age_bands(self) -> List[Tuple[int, str]]:
        return [(int(lower), label) for lower, label in json.loads(self.age_bands_json)]

    @property
    def month_ms(self) -> int:
        return self.month_days * 24 * 60 * 60 * 1000


@lru_cache
def get_attribute_settings() -> AttributeSettings:
    """Get cached attribute settings instance."""
    return AttributeSettings()


attribute_settings = get_attribute_settings()
