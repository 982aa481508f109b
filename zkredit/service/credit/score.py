"""
Credit score for microloan applications.

Combines the share of verified proofs with the remittance attribute
bands into a 0-100 score (higher = lower risk). The score is reported
in the decision analysis; strategies do not gate approval on it.
"""

from typing import Mapping

from zkredit.domain.entities import ZkAttributes
from zkredit.service.attributes import AttributeSettings, attribute_settings

from .settings import CreditSettings, credit_settings


def _band_rank(label: str, labels: list[str]) -> float:
    """Position of a band label scaled to 0.0-1.0."""
    if len(labels) < 2 or label not in labels:
        return 0.0
    return labels.index(label) / (len(labels) - 1)


def compute_credit_score(
    verification_results: Mapping[str, bool],
    attributes: ZkAttributes,
    settings: CreditSettings = credit_settings,
    bands: AttributeSettings = attribute_settings,
) -> int:
    """
    Calculate the composite credit score.

    Args:
        verification_results: Proof type -> verified flag
        attributes: Banded remittance attributes
        settings: Credit settings (uses defaults if not provided)
        bands: Attribute settings providing band order

    Returns:
        Score from 0 to 100
    """
    if verification_results:
        verified_share = sum(1 for ok in verification_results.values() if ok) / len(
            verification_results
        )
    else:
        verified_share = 0.0

    volume_rank = _band_rank(
        attributes.total_remitted_band,
        [label for _, label in bands.volume_bands],
    )
    age_rank = _band_rank(
        attributes.account_age_band,
        [label for _, label in bands.age_bands],
    )

    score = (
        settings.weight_proofs * verified_share
        + (settings.weight_stable_remitter if attributes.stable_remitter else 0)
        + settings.weight_volume * volume_rank
        + settings.weight_account_age * age_rank
    )

    return max(0, min(100, round(score)))
