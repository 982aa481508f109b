"""Payment router: turns a monetary intent into a concrete ledger transfer."""

import asyncio
from decimal import Decimal
from typing import Optional

import structlog

from zkredit.core.config import Settings, settings as app_settings
from zkredit.core.metrics import record_payment_failure, track_payment_latency
from zkredit.domain.entities import (
    LedgerReceipt,
    Notification,
    NotificationType,
    PaymentResult,
    TransferMode,
)
from zkredit.domain.exceptions import (
    ConfigurationError,
    LedgerTimeoutError,
    PaymentExecutionError,
    ValidationError,
)
from zkredit.domain.interfaces import EventPublisher, LedgerClient

from .addresses import normalize_address, resolve_contract_id, resolve_mode, to_account_id
from .fees import compute_fee, compute_net, from_smallest_unit, to_smallest_unit

logger = structlog.get_logger(__name__)


class PaymentRouter:
    """
    Routes payments either as direct transfers or payment-contract calls.

    Settlement is never retried here: a retry without an idempotency
    key could settle the same payment twice.
    """

    CONTRACT_FUNCTION = "pay"

    def __init__(
        self,
        ledger_client: LedgerClient,
        publisher: Optional[EventPublisher] = None,
        settings: Settings = app_settings,
    ):
        self._ledger = ledger_client
        self._publisher = publisher
        self._settings = settings

    # --- pure helpers -------------------------------------------------------

    @staticmethod
    def normalize_address(value: str) -> str:
        return normalize_address(value)

    @staticmethod
    def compute_fee(gross_amount) -> Decimal:
        return compute_fee(gross_amount)

    @staticmethod
    def compute_net(gross_amount) -> Decimal:
        return compute_net(gross_amount)

    def to_smallest_unit(self, amount) -> int:
        return to_smallest_unit(amount, self._settings.smallest_unit_exponent)

    def from_smallest_unit(self, units: int) -> Decimal:
        return from_smallest_unit(units, self._settings.smallest_unit_exponent)

    # --- configuration ------------------------------------------------------

    def resolve_mode(self, contract_id: Optional[str] = None) -> TransferMode:
        """
        Settlement mode for an explicit or the configured payment contract.

        Raises:
            ConfigurationError: If the configured contract id is malformed
        """
        identifier = contract_id if contract_id is not None else self._settings.payment_contract_id
        try:
            return resolve_mode(identifier)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid payment contract id: {e.message}")

    def configured_contract_id(self) -> str:
        """
        Raises:
            ConfigurationError: If no usable payment contract is configured
        """
        identifier = self._settings.payment_contract_id
        if self.resolve_mode(identifier) is TransferMode.DIRECT_TRANSFER:
            raise ConfigurationError("PAYMENT_CONTRACT_ID is not configured")
        return resolve_contract_id(identifier)

    def configured_sender(self) -> str:
        """
        Raises:
            ConfigurationError: If SENDER_ADDRESS is missing or malformed
        """
        return self._configured_address("sender_address", "SENDER_ADDRESS")

    def configured_receiver(self) -> str:
        """
        Raises:
            ConfigurationError: If RECEIVER_ADDRESS is missing or malformed
        """
        return self._configured_address("receiver_address", "RECEIVER_ADDRESS")

    def configured_funding_account(self) -> str:
        """
        Raises:
            ConfigurationError: If FUNDING_ACCOUNT is missing or malformed
        """
        return self._configured_address("funding_account", "FUNDING_ACCOUNT")

    def _configured_address(self, field: str, env_name: str) -> str:
        value = getattr(self._settings, field)
        if not value:
            raise ConfigurationError(f"{env_name} is not configured.")
        try:
            normalize_address(value)
        except ValidationError as e:
            raise ConfigurationError(f"{env_name} is malformed: {e.message}")
        return value.strip()

    # --- settlement ---------------------------------------------------------

    async def execute(
        self,
        mode: TransferMode,
        sender: str,
        receiver_address: str,
        amount_smallest_unit: int,
        contract_id: Optional[str] = None,
    ) -> PaymentResult:
        """
        Settle a payment through the ledger client.

        Args:
            mode: Direct transfer or contract call
            sender: Account debited (direct transfers)
            receiver_address: Receiver, native id or hex
            amount_smallest_unit: Positive amount in smallest units
            contract_id: Payment contract (defaults to the configured one)

        Returns:
            PaymentResult with the canonical receiver address

        Raises:
            ValidationError: If the amount or receiver is invalid
            ConfigurationError: If contract mode has no contract configured
            LedgerTimeoutError: If settlement exceeds the ledger timeout
            PaymentExecutionError: If the receipt reports a non-success status
        """
        if isinstance(amount_smallest_unit, bool) or not isinstance(amount_smallest_unit, int):
            raise ValidationError("Amount must be an integer number of smallest units")
        if amount_smallest_unit <= 0:
            raise ValidationError(
                "Amount must be positive before a transfer executes",
                code="NON_POSITIVE_AMOUNT",
            )

        receiver = normalize_address(receiver_address)
        log = logger.bind(
            mode=mode.value,
            receiver=receiver,
            amount_smallest_unit=amount_smallest_unit,
        )

        if mode is TransferMode.CONTRACT_CALL:
            target = resolve_contract_id(contract_id) if contract_id else self.configured_contract_id()
            log = log.bind(contract_id=target)
            call = self._ledger.call_contract(
                contract_id=target,
                function=self.CONTRACT_FUNCTION,
                receiver_address=receiver,
                amount=amount_smallest_unit,
                payable_amount=amount_smallest_unit,
                gas_limit=self._settings.contract_gas_limit,
            )
        else:
            call = self._ledger.transfer(
                sender=sender,
                receiver=to_account_id(receiver),
                amount=amount_smallest_unit,
            )

        log.info("payment_submitted")
        receipt = await self._settle(call, mode, log)

        if not receipt.succeeded:
            record_payment_failure("status")
            log.error("payment_failed", status=receipt.status, transaction_id=receipt.transaction_id)
            raise PaymentExecutionError(
                message=f"{mode.value} failed with status {receipt.status}",
                status=receipt.status,
            )

        result = PaymentResult(
            transaction_id=receipt.transaction_id,
            transaction_hash=receipt.transaction_hash,
            status=receipt.status,
            amount_smallest_unit=amount_smallest_unit,
            receiver_address=receiver,
            mode=mode,
            settled_amount=self.from_smallest_unit(amount_smallest_unit),
        )

        log.info(
            "payment_executed",
            transaction_id=result.transaction_id,
            transaction_hash=result.transaction_hash,
        )

        if self._publisher is not None:
            await self._publisher.publish(
                Notification(
                    event_type=NotificationType.PAYMENT_EXECUTED,
                    payload=result.to_dict(),
                )
            )

        return result

    async def _settle(self, call, mode: TransferMode, log) -> LedgerReceipt:
        timeout = self._settings.ledger_timeout
        try:
            with track_payment_latency(mode.value):
                return await asyncio.wait_for(call, timeout=timeout)
        except asyncio.TimeoutError:
            record_payment_failure("timeout")
            log.error("payment_timeout", timeout=timeout)
            raise LedgerTimeoutError(timeout)
        except LedgerTimeoutError:
            record_payment_failure("timeout")
            raise
        except PaymentExecutionError as e:
            record_payment_failure("gateway")
            log.error("payment_failed", error=e.message, status=e.status)
            raise
