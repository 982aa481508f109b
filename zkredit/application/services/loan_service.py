"""Loan service - verifies applications, decides and disburses microloans."""

import asyncio
from typing import Dict, Optional

import structlog

from zkredit.core.config import Settings, settings as app_settings
from zkredit.core.metrics import record_loan_decision, record_proof_failure
from zkredit.domain.entities import (
    CreditDecision,
    LoanApplication,
    LoanDisbursementEvent,
    Notification,
    NotificationType,
    ProofArtifact,
    TransferMode,
)
from zkredit.domain.exceptions import ProofProviderError, ValidationError
from zkredit.domain.interfaces import EventPublisher, EventStore, ProofVerifier
from zkredit.application.dto import LoanDisbursement
from zkredit.service.attributes import AttributeSettings, attribute_settings as default_attribute_settings, now_ms
from zkredit.service.credit import (
    CreditDecisionEngine,
    CreditSettings,
    compute_credit_score,
    credit_settings as default_credit_settings,
)
from zkredit.service.payment import PaymentRouter

logger = structlog.get_logger(__name__)


class LoanService:
    """
    Application service for microloan use cases.

    A proof that cannot be verified, whether rejected, errored or timed
    out, counts as failed verification and routes the decision to the
    fallback strategy.
    """

    def __init__(
        self,
        event_store: EventStore,
        router: PaymentRouter,
        verifier: ProofVerifier,
        engine: Optional[CreditDecisionEngine] = None,
        publisher: Optional[EventPublisher] = None,
        settings: Settings = app_settings,
        credit_settings: CreditSettings = default_credit_settings,
        attribute_settings: AttributeSettings = default_attribute_settings,
    ):
        self._store = event_store
        self._router = router
        self._verifier = verifier
        self._credit = credit_settings
        self._engine = engine or CreditDecisionEngine(settings=credit_settings)
        self._publisher = publisher
        self._settings = settings
        self._attribute_settings = attribute_settings

    async def assess(self, application: LoanApplication) -> CreditDecision:
        """
        Verify the application's proofs and produce a credit decision.

        Never raises for verification or strategy failures; those yield
        the fallback decision.
        """
        log = logger.bind(
            worker_id=application.worker_id,
            requested_amount=str(application.requested_amount),
        )

        verification_results: Dict[str, bool] = {}
        for proof_type, artifact in application.proofs.items():
            verification_results[proof_type.value] = await self._verify(artifact, log)

        credit_score = compute_credit_score(
            verification_results,
            application.attributes,
            self._credit,
            self._attribute_settings,
        )

        decision = self._engine.evaluate(
            credit_score=credit_score,
            requested_amount=application.requested_amount,
            verification_results=verification_results,
            zk_attributes=application.attributes,
        )

        log.info(
            "loan_decided",
            approved=decision.approved,
            strategy=decision.strategy,
            max_amount=str(decision.max_amount),
            interest_rate=str(decision.interest_rate),
            credit_score=credit_score,
        )
        record_loan_decision(decision.strategy, decision.approved, decision.max_amount)

        if self._publisher is not None:
            await self._publisher.publish(
                Notification(
                    event_type=NotificationType.LOAN_DECIDED,
                    payload={
                        "worker_id": application.worker_id,
                        "credit_score": credit_score,
                        **decision.to_dict(),
                    },
                )
            )

        return decision

    async def disburse(
        self,
        worker_id: str,
        decision: CreditDecision,
        receiver_address: str,
        now: Optional[int] = None,
    ) -> LoanDisbursement:
        """
        Pay an approved loan out of the funding account.

        Args:
            worker_id: Borrowing worker
            decision: Approved credit decision
            receiver_address: Worker's ledger account
            now: Event time in ms since epoch (default: wall clock)

        Raises:
            ValidationError: If the decision was declined or the address is invalid
            ConfigurationError: If FUNDING_ACCOUNT is not configured
            PaymentExecutionError: If settlement fails
        """
        if not decision.approved:
            raise ValidationError("Cannot disburse a declined loan decision")

        funding_account = self._router.configured_funding_account()
        amount_units = self._router.to_smallest_unit(decision.max_amount)

        payment = await self._router.execute(
            mode=TransferMode.DIRECT_TRANSFER,
            sender=funding_account,
            receiver_address=receiver_address,
            amount_smallest_unit=amount_units,
        )

        event = LoanDisbursementEvent(
            worker_id=worker_id,
            credit_agent_id=self._credit.agent_id,
            amount=decision.max_amount,
            interest_rate=decision.interest_rate,
            tenure_months=decision.repayment_months,
            funding_account=funding_account,
            transaction_hash=payment.transaction_hash,
            timestamp=now_ms() if now is None else now,
            corridor=self._credit.corridor_label,
            notes=decision.reason,
        )
        await self._store.record_loan_disbursement(event)

        logger.info(
            "loan_disbursed",
            worker_id=worker_id,
            event_id=event.id,
            amount=str(event.amount),
            transaction_hash=payment.transaction_hash,
        )

        return LoanDisbursement(event=event, payment=payment)

    async def _verify(self, artifact: ProofArtifact, log) -> bool:
        proof_type = artifact.proof_type.value
        timeout = self._settings.proof_timeout
        try:
            valid = await asyncio.wait_for(self._verifier.verify(artifact), timeout=timeout)
        except asyncio.TimeoutError:
            record_proof_failure(proof_type, "verify_timeout")
            log.warning("proof_verification_timeout", proof_type=proof_type, timeout=timeout)
            return False
        except ProofProviderError as e:
            record_proof_failure(proof_type, "verify_error")
            log.warning("proof_verification_error", proof_type=proof_type, error=e.message)
            return False
        except Exception as e:
            record_proof_failure(proof_type, "verify_error")
            log.error(
                "proof_verification_error",
                proof_type=proof_type,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        if valid is not True:
            record_proof_failure(proof_type, "invalid")
            log.warning("proof_verification_failed", proof_type=proof_type)
            return False
        return True
