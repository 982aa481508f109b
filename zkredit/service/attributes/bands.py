"""
Attribute derivation: maps a window summary onto privacy-preserving bands.

Banding uses the gross remitted volume (the amount the worker sent,
before fees), which is what the summary aggregates.
"""

from decimal import Decimal
from typing import List, Tuple, TypeVar

from zkredit.domain.entities import WindowSummary, ZkAttributes

from .settings import AttributeSettings, attribute_settings

N = TypeVar("N", int, Decimal)


def _band_for(value: N, bands: List[Tuple[N, str]]) -> str:
    """Return the label of the highest band whose lower bound is <= value."""
    label = bands[0][1]
    for lower, band_label in bands:
        if value >= lower:
            label = band_label
        else:
            break
    return label


def volume_band(
    total_volume: Decimal,
    settings: AttributeSettings = attribute_settings,
) -> str:
    """
    Bucket a remitted volume.

    Default bands: <300 "0-300", [300,600) "300-600",
    [600,900) "600-900", >=900 "900+".
    """
    return _band_for(Decimal(total_volume), settings.volume_bands)


def account_age_band(
    account_age_months: int,
    settings: AttributeSettings = attribute_settings,
) -> str:
    """
    Bucket an account age in months.

    Default bands: <3 "0-3m", [3,6) "3-6m", [6,12) "6-12m", >=12 "12m+".
    """
    return _band_for(account_age_months, settings.age_bands)


def derive_attributes(
    summary: WindowSummary,
    settings: AttributeSettings = attribute_settings,
) -> ZkAttributes:
    """
    Derive bucketed attributes from a window summary.

    Pure and deterministic: the same summary always yields the same
    attributes. Raw counts are passed through for observability.
    """
    return ZkAttributes(
        stable_remitter=summary.months_with_activity >= settings.stable_remitter_months,
        total_remitted_band=volume_band(summary.total_volume, settings),
        account_age_band=account_age_band(summary.account_age_months, settings),
        months_with_activity=summary.months_with_activity,
        total_transactions=summary.total_transactions,
    )
