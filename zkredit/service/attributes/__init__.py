"""
Remittance history summarization and attribute derivation.
"""

from .settings import AttributeSettings, attribute_settings
from .summary import WindowedSummarizer, now_ms, summarize_events
from .bands import account_age_band, derive_attributes, volume_band

__all__ = [
    "AttributeSettings",
    "attribute_settings",
    "WindowedSummarizer",
    "now_ms",
    "summarize_events",
    "account_age_band",
    "derive_attributes",
    "volume_band",
]
