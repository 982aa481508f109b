"""
Decision strategies.

A closed set of tagged variants sharing one ``evaluate`` signature.
Each variant is a frozen value holding its constant parameters; the
active one is picked from configuration by ``build_strategy``.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from zkredit.domain.entities import CreditDecision, REPAYMENT_MONTHS, ZkAttributes

from .settings import CreditSettings, StrategyKind, credit_settings


def _installment(amount: Decimal) -> str:
    return str((amount / REPAYMENT_MONTHS).quantize(Decimal("0.01")))


@dataclass(frozen=True)
class BaseStrategy:
    """Always approves a fixed amount at a fixed rate."""

    max_amount: Decimal
    interest_rate: Decimal
    corridor: str
    kind: StrategyKind = StrategyKind.BASE

    def evaluate(
        self,
        credit_score: int,
        requested_amount: Decimal,
        verification_results: Mapping[str, bool],
        zk_attributes: Optional[ZkAttributes],
    ) -> CreditDecision:
        return CreditDecision(
            approved=True,
            max_amount=self.max_amount,
            interest_rate=self.interest_rate,
            reason=(
                f"Standard offer: {self.max_amount} over {REPAYMENT_MONTHS} months "
                f"at {self.interest_rate}% APR for {self.corridor} borrowers."
            ),
            strategy=self.kind.value,
            analysis={
                "credit_score": credit_score,
                "requested_amount": str(requested_amount),
                "verification_results": dict(verification_results),
                "repayment_plan": {
                    "months": REPAYMENT_MONTHS,
                    "installment": _installment(self.max_amount),
                },
                "corridor": self.corridor,
            },
        )


@dataclass(frozen=True)
class AttributeAwareStrategy:
    """
    Approves the requested amount up to the cap.

    Stable remitters get the discounted rate.
    """

    amount_cap: Decimal
    standard_rate: Decimal
    stable_rate: Decimal
    corridor: str
    kind: StrategyKind = StrategyKind.ATTRIBUTE_AWARE

    def evaluate(
        self,
        credit_score: int,
        requested_amount: Decimal,
        verification_results: Mapping[str, bool],
        zk_attributes: Optional[ZkAttributes],
    ) -> CreditDecision:
        if zk_attributes is None:
            raise ValueError("zk attributes are required")

        stable = zk_attributes.stable_remitter
        amount = min(requested_amount, self.amount_cap)
        rate = self.stable_rate if stable else self.standard_rate

        if stable:
            reason = (
                f"Offer with stable remittance discount for {self.corridor} "
                "borrowers with verified histories."
            )
            notes = "Discounted rate for stable remitter behavior."
        else:
            reason = f"Standard offer for {self.corridor} borrowers with verified histories."
            notes = "Standard rate for corridor."

        return CreditDecision(
            approved=True,
            max_amount=amount,
            interest_rate=rate,
            reason=reason,
            strategy=self.kind.value,
            analysis={
                "credit_score": credit_score,
                "requested_amount": str(requested_amount),
                "capped": amount < requested_amount,
                "verification_results": dict(verification_results),
                "zk_attributes": zk_attributes.model_dump(),
                "repayment_plan": {
                    "months": REPAYMENT_MONTHS,
                    "installment": _installment(amount),
                },
                "corridor": self.corridor,
                "notes": notes,
            },
        )


@dataclass(frozen=True)
class FallbackStrategy:
    """
    Conservative decision used when verification or any upstream step fails.

    Reads none of its inputs, so it cannot fail on malformed ones.
    """

    amount: Decimal
    interest_rate: Decimal
    kind: StrategyKind = StrategyKind.FALLBACK

    def evaluate(
        self,
        credit_score: Any = None,
        requested_amount: Any = None,
        verification_results: Any = None,
        zk_attributes: Any = None,
        cause: str = "upstream_failure",
    ) -> CreditDecision:
        return CreditDecision(
            approved=True,
            max_amount=self.amount,
            interest_rate=self.interest_rate,
            reason=(
                f"Fallback decision: {self.amount} over {REPAYMENT_MONTHS} months "
                f"at {self.interest_rate}% APR."
            ),
            strategy=self.kind.value,
            analysis={"fallback": True, "cause": cause},
        )


DecisionStrategy = Union[BaseStrategy, AttributeAwareStrategy, FallbackStrategy]


def build_fallback(settings: CreditSettings = credit_settings) -> FallbackStrategy:
    return FallbackStrategy(
        amount=settings.fallback_amount,
        interest_rate=settings.fallback_rate,
    )


def build_strategy(
    kind: StrategyKind | str | None = None,
    settings: CreditSettings = credit_settings,
) -> DecisionStrategy:
    """
    Build the strategy variant for a configured kind.

    Args:
        kind: Strategy tag (defaults to ``settings.strategy``)
        settings: Credit settings holding each variant's parameters

    Raises:
        ValueError: If the tag is not a known strategy
    """
    selected = StrategyKind(kind) if kind is not None else settings.strategy

    if selected is StrategyKind.BASE:
        return BaseStrategy(
            max_amount=settings.base_amount,
            interest_rate=settings.base_rate,
            corridor=settings.corridor_label,
        )
    if selected is StrategyKind.ATTRIBUTE_AWARE:
        return AttributeAwareStrategy(
            amount_cap=settings.loan_amount_cap,
            standard_rate=settings.standard_rate,
            stable_rate=settings.stable_remitter_rate,
            corridor=settings.corridor_label,
        )
    return build_fallback(settings)
