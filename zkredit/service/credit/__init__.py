"""
Credit decision module for microloan applications.
"""

from .settings import CreditSettings, StrategyKind, credit_settings
from .score import compute_credit_score
from .strategies import (
    AttributeAwareStrategy,
    BaseStrategy,
    DecisionStrategy,
    FallbackStrategy,
    build_fallback,
    build_strategy,
)
from .engine import (
    CreditDecisionEngine,
    MalformedDecisionInput,
    parse_amount,
    parse_attributes,
    parse_verification_results,
)

__all__ = [
    # Settings
    "CreditSettings",
    "StrategyKind",
    "credit_settings",
    # Scoring
    "compute_credit_score",
    # Strategies
    "AttributeAwareStrategy",
    "BaseStrategy",
    "DecisionStrategy",
    "FallbackStrategy",
    "build_fallback",
    "build_strategy",
    # Engine
    "CreditDecisionEngine",
    "MalformedDecisionInput",
    "parse_amount",
    "parse_attributes",
    "parse_verification_results",
]
