"""Worker orchestrator: remittances in, loan applications out."""

import asyncio
from typing import Optional

import structlog

from zkredit.core.config import Settings, settings as app_settings
from zkredit.core.metrics import record_proof_failure, record_remittance, track_proof_latency
from zkredit.domain.entities import (
    LoanApplication,
    Notification,
    NotificationType,
    ProfileTransaction,
    ProofArtifact,
    ProofRequest,
    ProofType,
    RemittanceEvent,
    TransferMode,
    WindowSummary,
    WorkerProfile,
    ZkAttributes,
)
from zkredit.domain.exceptions import (
    ProofInsufficientError,
    ProofProviderError,
    ProofTimeoutError,
    ValidationError,
)
from zkredit.domain.interfaces import EventPublisher, EventStore, ProofProvider
from zkredit.application.dto import RemittanceRequest, RemittanceResult
from zkredit.service.attributes import (
    AttributeSettings,
    WindowedSummarizer,
    attribute_settings as default_attribute_settings,
    derive_attributes,
    now_ms,
)
from zkredit.service.credit import CreditSettings, credit_settings as default_credit_settings
from zkredit.service.payment import (
    PaymentRouter,
    compute_fee,
    compute_net,
    normalize_address,
    to_decimal,
)

logger = structlog.get_logger(__name__)


class WorkerService:
    """
    Application service acting on behalf of one worker.

    Sends remittances through the payment router, records them in the
    event ledger, and assembles loan applications from zero-knowledge
    proofs plus attributes derived from the worker's own history.
    """

    def __init__(
        self,
        profile: WorkerProfile,
        event_store: EventStore,
        router: PaymentRouter,
        proof_provider: ProofProvider,
        publisher: Optional[EventPublisher] = None,
        settings: Settings = app_settings,
        credit_settings: CreditSettings = default_credit_settings,
        attribute_settings: AttributeSettings = default_attribute_settings,
    ):
        self._profile = profile
        self._store = event_store
        self._router = router
        self._prover = proof_provider
        self._publisher = publisher
        self._settings = settings
        self._credit = credit_settings
        self._attribute_settings = attribute_settings
        self._summarizer = WindowedSummarizer(event_store, attribute_settings)

    @property
    def worker_id(self) -> str:
        return self._profile.worker_id

    @property
    def profile(self) -> WorkerProfile:
        return self._profile

    async def send_remittance(
        self,
        amount,
        receiver_id: Optional[str] = None,
        corridor: Optional[str] = None,
        now: Optional[int] = None,
    ) -> RemittanceResult:
        """
        Send a remittance and record it in the event ledger.

        Args:
            amount: Gross amount in settlement currency
            receiver_id: Receiver account (defaults to RECEIVER_ADDRESS)
            corridor: Corridor label (defaults to the worker's or configured one)
            now: Event time in ms since epoch (default: wall clock)

        Returns:
            RemittanceResult with the recorded event and payment

        Raises:
            ValidationError: If the amount or receiver is invalid
            ConfigurationError: If a required address is not configured
            PaymentExecutionError: If settlement fails

        A store failure after settlement is re-raised once the settled
        transfer has been logged as ``remittance_record_failed``.
        """
        log = logger.bind(worker_id=self.worker_id)

        request = RemittanceRequest(amount=amount, receiver_id=receiver_id, corridor=corridor)
        errors = request.validate(self._settings.remittance_cap)
        if errors:
            record_remittance("rejected")
            log.warning("remittance_rejected", errors=errors)
            raise ValidationError("; ".join(errors))

        gross = to_decimal(amount)
        route = corridor or self._profile.default_corridor or self._settings.default_corridor
        receiver = receiver_id.strip() if receiver_id else self._router.configured_receiver()

        try:
            normalize_address(receiver)
            fee = compute_fee(gross)
            net = compute_net(gross)
            amount_units = self._router.to_smallest_unit(net)
        except ValidationError as e:
            record_remittance("rejected")
            log.warning("remittance_rejected", errors=[e.message])
            raise

        mode = self._router.resolve_mode()
        sender = self._router.configured_sender() if mode is TransferMode.DIRECT_TRANSFER else ""

        log = log.bind(corridor=route, amount=str(gross), fee=str(fee), mode=mode.value)
        log.info("remittance_requested")

        try:
            payment = await self._router.execute(
                mode=mode,
                sender=sender,
                receiver_address=receiver,
                amount_smallest_unit=amount_units,
            )
        except Exception:
            record_remittance("failed")
            raise

        timestamp = now_ms() if now is None else now
        event = RemittanceEvent(
            worker_id=self.worker_id,
            receiver_id=receiver,
            corridor=route,
            amount=gross,
            fee=fee,
            net_amount=net,
            currency=self._settings.settlement_currency,
            transaction_hash=payment.transaction_hash,
            timestamp=timestamp,
            topic=self._settings.ledger_topic,
        )

        # The transfer has settled, so the worker's history keeps it even
        # when the ledger write below fails.
        self._profile.add_transaction(
            ProfileTransaction(
                hash=payment.transaction_hash,
                amount=gross,
                timestamp=timestamp,
                corridor=route,
            )
        )

        try:
            await self._store.record_remittance(event)
        except Exception as e:
            record_remittance("unrecorded")
            log.error(
                "remittance_record_failed",
                event_id=event.id,
                transaction_id=payment.transaction_id,
                transaction_hash=payment.transaction_hash,
                net_amount=str(net),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        if self._publisher is not None:
            await self._publisher.publish(
                Notification(
                    event_type=NotificationType.LEDGER_RECORDED,
                    payload=event.to_dict(),
                )
            )

        record_remittance("settled", gross)
        log.info(
            "remittance_recorded",
            event_id=event.id,
            transaction_hash=payment.transaction_hash,
            net_amount=str(net),
        )

        return RemittanceResult(event=event, payment=payment)

    async def remittance_summary(
        self,
        now: Optional[int] = None,
        window_months: Optional[int] = None,
    ) -> WindowSummary:
        return await self._summarizer.summarize(
            self.worker_id,
            window_months=window_months,
            now=now,
        )

    async def attributes(self, now: Optional[int] = None) -> ZkAttributes:
        summary = await self.remittance_summary(now=now)
        return derive_attributes(summary, self._attribute_settings)

    async def apply_for_loan(self, amount, now: Optional[int] = None) -> LoanApplication:
        """
        Build a loan application backed by income, credit-history and
        collateral proofs.

        Proofs are requested one at a time; the first private metric
        below its threshold aborts the application.

        Raises:
            ValidationError: If the requested amount is not positive
            ProofInsufficientError: If a private metric is below its threshold
            ProofTimeoutError: If a proof is not produced within the timeout
            ProofProviderError: If the proving service fails
        """
        requested = to_decimal(amount)
        if requested <= 0:
            raise ValidationError("Requested loan amount must be positive")

        profile = self._profile
        credit = self._credit
        log = logger.bind(worker_id=self.worker_id, requested_amount=str(requested))
        log.info("loan_application_started")

        proofs = {}

        self._require(
            ProofType.INCOME,
            profile.monthly_income >= credit.min_monthly_income,
            credit.min_monthly_income,
        )
        proofs[ProofType.INCOME] = await self._generate(
            ProofRequest(
                proof_type=ProofType.INCOME,
                worker_id=self.worker_id,
                public_inputs={"threshold": str(credit.min_monthly_income)},
                witness={"monthly_income": str(profile.monthly_income)},
            )
        )

        self._require(
            ProofType.CREDIT_HISTORY,
            profile.transaction_count >= credit.min_transactions,
            credit.min_transactions,
        )
        proofs[ProofType.CREDIT_HISTORY] = await self._generate(
            ProofRequest(
                proof_type=ProofType.CREDIT_HISTORY,
                worker_id=self.worker_id,
                public_inputs={
                    "threshold": credit.min_transactions,
                    "time_range_months": credit.proof_time_range_months,
                    "commitment": profile.history_commitment(),
                },
                witness={
                    "transaction_count": profile.transaction_count,
                    "transaction_hashes": [tx.hash for tx in profile.transaction_history],
                },
            )
        )

        self._require(
            ProofType.COLLATERAL,
            profile.collateral_value >= credit.min_collateral_value,
            credit.min_collateral_value,
        )
        proofs[ProofType.COLLATERAL] = await self._generate(
            ProofRequest(
                proof_type=ProofType.COLLATERAL,
                worker_id=self.worker_id,
                public_inputs={
                    "threshold": str(credit.min_collateral_value),
                    "country_code": credit.collateral_country_code,
                },
                witness={
                    "collateral_value": str(profile.collateral_value),
                    "title_ref": profile.collateral_title_ref,
                    "coordinates": list(profile.coordinates),
                    "employer_attestation": profile.employer_attestation,
                },
            )
        )

        attributes = await self.attributes(now=now)
        log.info(
            "loan_application_ready",
            proofs=sorted(p.value for p in proofs),
            stable_remitter=attributes.stable_remitter,
            total_remitted_band=attributes.total_remitted_band,
        )

        return LoanApplication(
            worker_id=self.worker_id,
            requested_amount=requested,
            proofs=proofs,
            attributes=attributes,
        )

    def _require(self, proof_type: ProofType, satisfied: bool, threshold) -> None:
        if not satisfied:
            record_proof_failure(proof_type.value, "insufficient")
            logger.warning(
                "proof_threshold_not_met",
                worker_id=self.worker_id,
                proof_type=proof_type.value,
                threshold=str(threshold),
            )
            raise ProofInsufficientError(proof_type.value, threshold)

    async def _generate(self, request: ProofRequest) -> ProofArtifact:
        proof_type = request.proof_type.value
        timeout = self._settings.proof_timeout
        try:
            with track_proof_latency(proof_type):
                return await asyncio.wait_for(self._prover.generate(request), timeout=timeout)
        except asyncio.TimeoutError:
            record_proof_failure(proof_type, "timeout")
            logger.error("proof_timeout", worker_id=self.worker_id, proof_type=proof_type, timeout=timeout)
            raise ProofTimeoutError(proof_type, timeout)
        except ProofTimeoutError:
            record_proof_failure(proof_type, "timeout")
            raise
        except ProofInsufficientError:
            record_proof_failure(proof_type, "insufficient")
            raise
        except ProofProviderError as e:
            record_proof_failure(proof_type, "provider_error")
            logger.error("proof_generation_failed", worker_id=self.worker_id, proof_type=proof_type, error=e.message)
            raise
