"""
Fixtures for integration tests.

Provides:
- Test client for the FastAPI app with mocked ledger and proof services
- Fresh in-memory stores per test
- In-memory SQLite engine for the SQL event store
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from zkredit.main import app
from zkredit.core.dependencies import (
    get_event_publisher,
    get_event_store,
    get_payment_router,
    get_proof_client,
    get_worker_repository,
)
from zkredit.infrastructure.database import Base
from zkredit.infrastructure.repositories import (
    InMemoryEventStore,
    InMemoryWorkerRepository,
    SqlAlchemyEventStore,
)
from zkredit.service.payment import PaymentRouter

from tests.conftest import MockLedgerClient, MockProofClient


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def sql_event_store(test_engine) -> SqlAlchemyEventStore:
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    return SqlAlchemyEventStore(session_factory)


# =============================================================================
# App Client Fixtures
# =============================================================================

async def _client_with(
    ledger: MockLedgerClient,
    proofs: MockProofClient,
    event_store,
    publisher,
    settings,
) -> AsyncGenerator[AsyncClient, None]:
    workers = InMemoryWorkerRepository()

    def override_get_payment_router():
        return PaymentRouter(ledger, publisher=publisher, settings=settings)

    app.dependency_overrides[get_event_store] = lambda: event_store
    app.dependency_overrides[get_worker_repository] = lambda: workers
    app.dependency_overrides[get_event_publisher] = lambda: publisher
    app.dependency_overrides[get_proof_client] = lambda: proofs
    app.dependency_overrides[get_payment_router] = override_get_payment_router

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    mock_ledger: MockLedgerClient,
    mock_proofs: MockProofClient,
    publisher,
    test_settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Client backed by the in-memory event store."""
    async for ac in _client_with(mock_ledger, mock_proofs, InMemoryEventStore(), publisher, test_settings):
        yield ac


@pytest_asyncio.fixture
async def sql_client(
    mock_ledger: MockLedgerClient,
    mock_proofs: MockProofClient,
    sql_event_store: SqlAlchemyEventStore,
    publisher,
    test_settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Client backed by the SQL event store on SQLite."""
    async for ac in _client_with(mock_ledger, mock_proofs, sql_event_store, publisher, test_settings):
        yield ac


@pytest_asyncio.fixture
async def client_with_failing_ledger(
    mock_proofs: MockProofClient,
    publisher,
    test_settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Client whose ledger rejects every submission."""
    ledger = MockLedgerClient(status="INSUFFICIENT_PAYER_BALANCE")
    async for ac in _client_with(ledger, mock_proofs, InMemoryEventStore(), publisher, test_settings):
        yield ac


@pytest_asyncio.fixture
async def client_with_failing_prover(
    mock_ledger: MockLedgerClient,
    publisher,
    test_settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Client whose proving service errors on every request."""
    proofs = MockProofClient(fail_generate=True)
    async for ac in _client_with(mock_ledger, proofs, InMemoryEventStore(), publisher, test_settings):
        yield ac


# =============================================================================
# Request Fixtures
# =============================================================================

@pytest.fixture
def worker_payload() -> dict:
    return {
        "worker_id": "worker-maria",
        "monthly_income": "800",
        "collateral_value": "15000",
    }


@pytest_asyncio.fixture
async def registered_worker(client: AsyncClient, worker_payload: dict) -> str:
    response = await client.post("/v1/workers", json=worker_payload)
    assert response.status_code == 201
    return worker_payload["worker_id"]
