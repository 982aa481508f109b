"""HTTP implementation of ProofProvider and ProofVerifier."""

from typing import Any, Dict

import httpx
import structlog

from zkredit.core.config import settings
from zkredit.domain.entities import ProofArtifact, ProofRequest, ProofType
from zkredit.domain.exceptions import (
    ProofInsufficientError,
    ProofProviderError,
    ProofTimeoutError,
)
from zkredit.domain.interfaces import ProofProvider, ProofVerifier

logger = structlog.get_logger(__name__)


class HttpProofClient(ProofProvider, ProofVerifier):
    """
    HTTP client for the proving service.

    Witness values are sent only to the prover; they never appear in
    logs or in the returned artifact.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.proof_service_url).rstrip("/")
        self._timeout = timeout or settings.proof_timeout
        self._transport = transport

    async def generate(self, request: ProofRequest) -> ProofArtifact:
        url = f"{self._base_url}/v1/proofs/{request.proof_type.value}"
        payload = {
            "worker_id": request.worker_id,
            "public_inputs": request.public_inputs,
            "witness": request.witness,
        }
        response = await self._post(url, payload, request.proof_type)

        if response.status_code == 422:
            raise ProofInsufficientError(
                request.proof_type.value,
                request.public_inputs.get("threshold"),
            )
        self._raise_for_status(response, request.proof_type)

        data = self._json_object(response, request.proof_type)
        return ProofArtifact(
            proof_type=request.proof_type,
            proof=str(data.get("proof", "")),
            public_inputs=data.get("public_inputs", request.public_inputs),
        )

    async def verify(self, artifact: ProofArtifact) -> bool:
        url = f"{self._base_url}/v1/proofs/verify"
        response = await self._post(url, artifact.to_dict(), artifact.proof_type)
        self._raise_for_status(response, artifact.proof_type)

        data = self._json_object(response, artifact.proof_type)
        valid = data.get("valid", False)
        if not isinstance(valid, bool):
            raise ProofProviderError(message="Malformed verification result")
        return valid

    async def _post(
        self,
        url: str,
        payload: Dict[str, Any],
        proof_type: ProofType,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                return await client.post(url, json=payload)
        except httpx.TimeoutException:
            logger.warning("proof_service_timeout", proof_type=proof_type.value, timeout=self._timeout)
            raise ProofTimeoutError(proof_type.value, self._timeout)
        except httpx.HTTPError as e:
            logger.error("proof_service_error", proof_type=proof_type.value, error=str(e))
            raise ProofProviderError(message=f"Proof service unreachable: {e}")

    def _raise_for_status(self, response: httpx.Response, proof_type: ProofType) -> None:
        if response.status_code >= 400:
            logger.error(
                "proof_service_rejected",
                proof_type=proof_type.value,
                status_code=response.status_code,
            )
            raise ProofProviderError(
                message=f"Proof service error: {response.text}",
                status_code=response.status_code,
            )

    def _json_object(self, response: httpx.Response, proof_type: ProofType) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.error(
                "proof_service_malformed_response",
                proof_type=proof_type.value,
                status_code=response.status_code,
            )
            raise ProofProviderError(
                message="Malformed proof service response",
                status_code=response.status_code,
            )
        return data
