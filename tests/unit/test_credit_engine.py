"""
Unit tests for the credit decision engine.

These tests verify:
1. Each strategy variant's offer
2. Fallback on failed verification, malformed input or strategy errors
3. Strategy selection from configuration
4. Credit score composition
"""

from decimal import Decimal

import pytest

from zkredit.domain.entities import ProofType, ZkAttributes
from zkredit.service.credit import (
    AttributeAwareStrategy,
    BaseStrategy,
    CreditDecisionEngine,
    CreditSettings,
    FallbackStrategy,
    MalformedDecisionInput,
    StrategyKind,
    build_strategy,
    compute_credit_score,
    parse_amount,
    parse_verification_results,
)


ALL_VERIFIED = {"income": True, "credit_history": True, "collateral": True}


def make_attributes(stable: bool = True, volume: str = "900+", age: str = "3-6m") -> ZkAttributes:
    return ZkAttributes(
        stable_remitter=stable,
        total_remitted_band=volume,
        account_age_band=age,
        months_with_activity=4 if stable else 1,
        total_transactions=4 if stable else 1,
    )


@pytest.fixture
def credit_settings() -> CreditSettings:
    return CreditSettings(_env_file=None)


@pytest.fixture
def engine(credit_settings) -> CreditDecisionEngine:
    return CreditDecisionEngine(settings=credit_settings)


# =============================================================================
# Strategies
# =============================================================================

class TestStrategies:

    def test_base_strategy_fixed_offer(self, credit_settings):
        strategy = build_strategy(StrategyKind.BASE, credit_settings)

        decision = strategy.evaluate(80, Decimal("400"), ALL_VERIFIED, None)

        assert isinstance(strategy, BaseStrategy)
        assert decision.approved is True
        assert decision.max_amount == Decimal("150")
        assert decision.interest_rate == Decimal("10")
        assert decision.repayment_months == 4
        assert decision.strategy == "base"

    def test_attribute_aware_caps_requested_amount(self, credit_settings):
        strategy = build_strategy(StrategyKind.ATTRIBUTE_AWARE, credit_settings)

        decision = strategy.evaluate(90, Decimal("800"), ALL_VERIFIED, make_attributes())

        assert isinstance(strategy, AttributeAwareStrategy)
        assert decision.max_amount == Decimal("500")
        assert decision.analysis["capped"] is True

    def test_attribute_aware_stable_remitter_discount(self, credit_settings):
        strategy = build_strategy(StrategyKind.ATTRIBUTE_AWARE, credit_settings)

        stable = strategy.evaluate(90, Decimal("400"), ALL_VERIFIED, make_attributes(stable=True))
        unstable = strategy.evaluate(60, Decimal("400"), ALL_VERIFIED, make_attributes(stable=False))

        assert stable.max_amount == Decimal("400")
        assert stable.interest_rate == Decimal("9")
        assert unstable.interest_rate == Decimal("10")
        assert stable.installment == Decimal("100.00")

    def test_attribute_aware_requires_attributes(self, credit_settings):
        strategy = build_strategy(StrategyKind.ATTRIBUTE_AWARE, credit_settings)

        with pytest.raises(ValueError):
            strategy.evaluate(90, Decimal("400"), ALL_VERIFIED, None)

    def test_fallback_ignores_inputs(self):
        strategy = FallbackStrategy(amount=Decimal("150"), interest_rate=Decimal("10"))

        decision = strategy.evaluate(object(), "garbage", 42, {"bad": True})

        assert decision.approved is True
        assert decision.max_amount > 0
        assert decision.interest_rate > 0
        assert decision.analysis["fallback"] is True

    def test_unknown_strategy_tag_rejected(self, credit_settings):
        with pytest.raises(ValueError):
            build_strategy("aggressive", credit_settings)

    def test_strategy_from_configuration(self):
        settings = CreditSettings(_env_file=None, strategy="base")

        assert CreditDecisionEngine(settings=settings).strategy_kind is StrategyKind.BASE

    def test_weights_must_sum_to_100(self):
        with pytest.raises(ValueError):
            CreditSettings(_env_file=None, weight_proofs=70)


# =============================================================================
# Engine
# =============================================================================

class TestCreditDecisionEngine:

    def test_delegates_to_configured_strategy(self, engine):
        decision = engine.evaluate(93, Decimal("400"), ALL_VERIFIED, make_attributes())

        assert decision.strategy == "attribute_aware"
        assert decision.max_amount == Decimal("400")
        assert decision.interest_rate == Decimal("9")

    def test_failed_verification_falls_back(self, engine):
        results = {**ALL_VERIFIED, "collateral": False}

        decision = engine.evaluate(70, Decimal("400"), results, make_attributes())

        assert decision.strategy == "fallback"
        assert decision.analysis["cause"] == "verification_failed"
        assert decision.max_amount == Decimal("150")

    def test_enum_keys_are_accepted(self, engine):
        results = {ProofType.INCOME: True, ProofType.COLLATERAL: True}

        decision = engine.evaluate(80, Decimal("200"), results, make_attributes())

        assert decision.strategy == "attribute_aware"

    def test_attributes_as_mapping_are_validated(self, engine):
        decision = engine.evaluate(80, "200", ALL_VERIFIED, make_attributes().model_dump())

        assert decision.strategy == "attribute_aware"
        assert decision.max_amount == Decimal("200")

    @pytest.mark.parametrize(
        "requested,results,attributes",
        [
            ("400", ALL_VERIFIED, None),
            ("400", ALL_VERIFIED, {"stable_remitter": "yes"}),
            ("400", ALL_VERIFIED, {**make_attributes().model_dump(), "raw_volume": 1002}),
            ("400", {}, make_attributes()),
            ("400", {"income": "true"}, make_attributes()),
            ("400", None, make_attributes()),
            ("-5", ALL_VERIFIED, make_attributes()),
            ("abc", ALL_VERIFIED, make_attributes()),
            (None, ALL_VERIFIED, make_attributes()),
        ],
    )
    def test_malformed_input_never_raises(self, engine, requested, results, attributes):
        decision = engine.evaluate(50, requested, results, attributes)

        assert decision.strategy == "fallback"
        assert decision.approved is True
        assert decision.max_amount > 0
        assert decision.interest_rate > 0
        assert decision.analysis["cause"] == "decision_error"

    def test_strategy_exception_falls_back(self):
        class BrokenStrategy:
            kind = StrategyKind.BASE

            def evaluate(self, *args, **kwargs):
                raise RuntimeError("model unavailable")

        engine = CreditDecisionEngine(strategy=BrokenStrategy(), settings=CreditSettings(_env_file=None))

        decision = engine.evaluate(80, Decimal("100"), ALL_VERIFIED, make_attributes())

        assert decision.strategy == "fallback"
        assert decision.analysis["cause"] == "decision_error"


class TestInputParsing:

    def test_parse_amount(self):
        assert parse_amount("250.72") == Decimal("250.72")
        with pytest.raises(MalformedDecisionInput):
            parse_amount(0)
        with pytest.raises(MalformedDecisionInput):
            parse_amount(True)
        with pytest.raises(MalformedDecisionInput):
            parse_amount("Infinity")

    def test_parse_verification_results(self):
        assert parse_verification_results({ProofType.INCOME: False}) == {"income": False}
        with pytest.raises(MalformedDecisionInput):
            parse_verification_results([("income", True)])


# =============================================================================
# Credit score
# =============================================================================

class TestCreditScore:

    def test_strong_profile(self):
        # 60 proofs + 15 stable + 15 top volume band + 10 * 1/3 age rank
        assert compute_credit_score(ALL_VERIFIED, make_attributes()) == 93

    def test_new_worker_with_verified_proofs(self):
        attributes = make_attributes(stable=False, volume="0-300", age="0-3m")

        assert compute_credit_score(ALL_VERIFIED, attributes) == 60

    def test_failed_proofs_lower_the_score(self):
        attributes = make_attributes(stable=False, volume="0-300", age="0-3m")
        results = {"income": True, "credit_history": False, "collateral": False}

        assert compute_credit_score(results, attributes) == 20

    def test_score_is_bounded(self):
        attributes = make_attributes(stable=True, volume="900+", age="12m+")

        assert compute_credit_score(ALL_VERIFIED, attributes) == 100
        assert compute_credit_score({}, make_attributes(False, "0-300", "0-3m")) == 0
