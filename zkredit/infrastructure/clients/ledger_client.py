"""HTTP implementation of LedgerClient."""

from typing import Any, Dict

import httpx
import structlog

from zkredit.core.config import settings
from zkredit.domain.entities import LedgerReceipt
from zkredit.domain.exceptions import LedgerTimeoutError, PaymentExecutionError
from zkredit.domain.interfaces import LedgerClient

logger = structlog.get_logger(__name__)


class HttpLedgerClient(LedgerClient):
    """
    HTTP client for the ledger gateway that holds operator keys.

    Submissions are not retried: a resubmitted transfer may settle twice.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        network: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.ledger_gateway_url).rstrip("/")
        self._timeout = timeout or settings.ledger_timeout
        self._network = network or settings.ledger_network
        self._transport = transport

    async def transfer(self, sender: str, receiver: str, amount: int) -> LedgerReceipt:
        payload = {
            "network": self._network,
            "sender": sender,
            "receiver": receiver,
            "amount": amount,
        }
        return await self._submit(f"{self._base_url}/v1/transfers", payload, "transfer")

    async def call_contract(
        self,
        contract_id: str,
        function: str,
        receiver_address: str,
        amount: int,
        payable_amount: int,
        gas_limit: int,
    ) -> LedgerReceipt:
        payload = {
            "network": self._network,
            "function": function,
            "params": [
                {"type": "address", "value": receiver_address},
                {"type": "uint256", "value": str(amount)},
            ],
            "payable_amount": payable_amount,
            "gas_limit": gas_limit,
        }
        url = f"{self._base_url}/v1/contracts/{contract_id}/calls"
        return await self._submit(url, payload, "contract_call")

    async def _submit(self, url: str, payload: Dict[str, Any], operation: str) -> LedgerReceipt:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload)
        except httpx.TimeoutException:
            logger.warning("ledger_gateway_timeout", operation=operation, timeout=self._timeout)
            raise LedgerTimeoutError(self._timeout)
        except httpx.HTTPError as e:
            logger.error("ledger_gateway_error", operation=operation, error=str(e))
            raise PaymentExecutionError(message=f"Ledger gateway unreachable: {e}")

        if response.status_code >= 400:
            logger.error(
                "ledger_gateway_rejected",
                operation=operation,
                status_code=response.status_code,
            )
            raise PaymentExecutionError(
                message=f"Ledger gateway error: {response.text}",
                status=str(response.status_code),
            )

        return self._parse_receipt(response, operation)

    def _parse_receipt(self, response: httpx.Response, operation: str) -> LedgerReceipt:
        """Parse the gateway response into a LedgerReceipt."""
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.error(
                "ledger_gateway_malformed_receipt",
                operation=operation,
                status_code=response.status_code,
            )
            raise PaymentExecutionError(
                message="Malformed ledger receipt",
                status=str(response.status_code),
            )

        transaction_id = str(data.get("transaction_id", ""))
        return LedgerReceipt(
            status=str(data.get("status", "UNKNOWN")),
            transaction_id=transaction_id,
            transaction_hash=str(data.get("transaction_hash") or transaction_id),
        )
