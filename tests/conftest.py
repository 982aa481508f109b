"""
Shared fixtures.

Provides:
- Mock ledger client recording transfers and contract calls
- Mock proof client acting as prover and verifier
- Settings with sender, receiver and funding accounts configured
"""

import asyncio
from decimal import Decimal
from typing import List, Optional

import pytest

from zkredit.core.config import Settings
from zkredit.domain.entities import (
    LedgerReceipt,
    ProofArtifact,
    ProofRequest,
    ProofType,
    WorkerProfile,
)
from zkredit.domain.exceptions import ProofProviderError
from zkredit.domain.interfaces import LedgerClient, ProofProvider, ProofVerifier
from zkredit.infrastructure.events import InMemoryEventPublisher
from zkredit.infrastructure.repositories import InMemoryEventStore
from zkredit.service.payment import PaymentRouter


SENDER = "0.0.1001"
RECEIVER = "0.0.5005"
FUNDING = "0.0.7007"


# =============================================================================
# Mock Clients
# =============================================================================

class MockLedgerClient(LedgerClient):
    """Ledger client that settles instantly and records every submission."""

    def __init__(self, status: str = "SUCCESS", delay: float = 0.0):
        self.status = status
        self.delay = delay
        self.transfers: List[dict] = []
        self.contract_calls: List[dict] = []

    @property
    def call_count(self) -> int:
        return len(self.transfers) + len(self.contract_calls)

    async def transfer(self, sender: str, receiver: str, amount: int) -> LedgerReceipt:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.transfers.append({"sender": sender, "receiver": receiver, "amount": amount})
        return self._receipt()

    async def call_contract(
        self,
        contract_id: str,
        function: str,
        receiver_address: str,
        amount: int,
        payable_amount: int,
        gas_limit: int,
    ) -> LedgerReceipt:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.contract_calls.append(
            {
                "contract_id": contract_id,
                "function": function,
                "receiver_address": receiver_address,
                "amount": amount,
                "payable_amount": payable_amount,
                "gas_limit": gas_limit,
            }
        )
        return self._receipt()

    def _receipt(self) -> LedgerReceipt:
        n = self.call_count
        return LedgerReceipt(
            status=self.status,
            transaction_id=f"0.0.1001@1705276800.{n:09d}",
            transaction_hash=f"0x{n:064x}",
        )


class MockProofClient(ProofProvider, ProofVerifier):
    """Prover that echoes public inputs, and a verifier with scripted results."""

    def __init__(
        self,
        invalid: Optional[set] = None,
        verify_errors: Optional[set] = None,
        generate_delay: float = 0.0,
        fail_generate: bool = False,
    ):
        self.invalid = invalid or set()
        self.verify_errors = verify_errors or set()
        self.generate_delay = generate_delay
        self.fail_generate = fail_generate
        self.requests: List[ProofRequest] = []
        self.verified: List[ProofType] = []

    async def generate(self, request: ProofRequest) -> ProofArtifact:
        self.requests.append(request)
        if self.generate_delay:
            await asyncio.sleep(self.generate_delay)
        if self.fail_generate:
            raise ProofProviderError("Prover crashed", status_code=500)
        return ProofArtifact(
            proof_type=request.proof_type,
            proof=f"proof-{request.proof_type.value}",
            public_inputs=dict(request.public_inputs),
        )

    async def verify(self, artifact: ProofArtifact) -> bool:
        self.verified.append(artifact.proof_type)
        if artifact.proof_type in self.verify_errors:
            raise ProofProviderError("Verifier unavailable", status_code=503)
        return artifact.proof_type not in self.invalid


# =============================================================================
# Fixtures
# =============================================================================

def make_settings(**overrides) -> Settings:
    values = {
        "sender_address": SENDER,
        "receiver_address": RECEIVER,
        "funding_account": FUNDING,
        "payment_contract_id": None,
        "ledger_timeout": 1.0,
        "proof_timeout": 1.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def mock_ledger() -> MockLedgerClient:
    return MockLedgerClient()


@pytest.fixture
def mock_proofs() -> MockProofClient:
    return MockProofClient()


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def publisher() -> InMemoryEventPublisher:
    return InMemoryEventPublisher()


@pytest.fixture
def router(mock_ledger, publisher, test_settings) -> PaymentRouter:
    return PaymentRouter(mock_ledger, publisher=publisher, settings=test_settings)


@pytest.fixture
def profile() -> WorkerProfile:
    return WorkerProfile(
        worker_id="worker-maria",
        monthly_income=Decimal("800"),
        collateral_value=Decimal("15000"),
    )
