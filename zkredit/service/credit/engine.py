"""
Credit Decision Engine for microloan applications.

This module is the single entry point for decisions:
1. Validate verification results and attributes at the boundary
2. Fall back when any proof failed verification
3. Delegate to the configured strategy
4. Replace any failure with the fallback decision

The engine never raises; callers always receive a decision.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from zkredit.domain.entities import CreditDecision, ZkAttributes

from .settings import CreditSettings, StrategyKind, credit_settings
from .strategies import DecisionStrategy, FallbackStrategy, build_fallback, build_strategy

logger = structlog.get_logger(__name__)


class MalformedDecisionInput(ValueError):
    """Raised internally when decision inputs fail boundary validation."""


def parse_verification_results(results: Any) -> Dict[str, bool]:
    """
    Normalize verification results to ``{proof_type: verified}``.

    Raises:
        MalformedDecisionInput: If results are not a non-empty mapping of bools
    """
    if not isinstance(results, Mapping) or not results:
        raise MalformedDecisionInput("verification results must be a non-empty mapping")

    parsed: Dict[str, bool] = {}
    for key, value in results.items():
        if not isinstance(value, bool):
            raise MalformedDecisionInput(f"verification result for {key!r} is not a bool")
        parsed[getattr(key, "value", str(key))] = value
    return parsed


def parse_attributes(attributes: Any) -> ZkAttributes:
    """
    Validate attributes into the explicit ZkAttributes structure.

    Raises:
        MalformedDecisionInput: If attributes are missing or malformed
    """
    if attributes is None:
        raise MalformedDecisionInput("zk attributes are missing")
    if isinstance(attributes, ZkAttributes):
        return attributes
    try:
        return ZkAttributes.model_validate(attributes)
    except PydanticValidationError as e:
        raise MalformedDecisionInput(f"zk attributes are malformed: {e.error_count()} errors")


def parse_amount(amount: Any) -> Decimal:
    """Coerce the requested amount to a positive Decimal."""
    if isinstance(amount, bool):
        raise MalformedDecisionInput("requested amount must be numeric")
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise MalformedDecisionInput(f"requested amount is not numeric: {amount!r}")
    if not value.is_finite() or value <= 0:
        raise MalformedDecisionInput("requested amount must be positive")
    return value


class CreditDecisionEngine:
    """Evaluates loan requests with one configured strategy and a fallback."""

    def __init__(
        self,
        strategy: Optional[DecisionStrategy] = None,
        fallback: Optional[FallbackStrategy] = None,
        settings: CreditSettings = credit_settings,
    ):
        self._strategy = strategy or build_strategy(settings=settings)
        self._fallback = fallback or build_fallback(settings)

    @property
    def strategy_kind(self) -> StrategyKind:
        return self._strategy.kind

    def evaluate(
        self,
        credit_score: int,
        requested_amount: Any,
        verification_results: Any,
        zk_attributes: Any,
    ) -> CreditDecision:
        """
        Produce a decision for a loan request.

        Args:
            credit_score: Composite score (0-100) reported in the analysis
            requested_amount: Amount requested by the worker
            verification_results: Proof type -> verified flag
            zk_attributes: ZkAttributes or an equivalent mapping

        Returns:
            The strategy's decision, or the fallback decision if inputs are
            malformed, a proof failed verification, or the strategy failed
        """
        try:
            verified = parse_verification_results(verification_results)
            attributes = parse_attributes(zk_attributes)
            amount = parse_amount(requested_amount)

            failed = sorted(name for name, ok in verified.items() if not ok)
            if failed:
                logger.warning("credit_decision_fallback", cause="verification_failed", failed=failed)
                return self._fallback.evaluate(cause="verification_failed")

            return self._strategy.evaluate(credit_score, amount, verified, attributes)

        except Exception as e:
            logger.warning(
                "credit_decision_fallback",
                cause="decision_error",
                error=str(e),
                error_type=type(e).__name__,
                strategy=self._strategy.kind.value,
            )
            return self._fallback.evaluate(cause="decision_error")
