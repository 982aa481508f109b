"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from zkredit.core.config import settings
from zkredit.domain.exceptions import WorkerNotFoundException
from zkredit.domain.interfaces import (
    EventPublisher,
    EventStore,
    LedgerClient,
    ProofProvider,
    ProofVerifier,
    WorkerRepository,
)
from zkredit.infrastructure.clients import HttpLedgerClient, HttpProofClient
from zkredit.infrastructure.database import db_manager
from zkredit.infrastructure.events import InMemoryEventPublisher
from zkredit.infrastructure.repositories import (
    InMemoryEventStore,
    InMemoryWorkerRepository,
    SqlAlchemyEventStore,
)
from zkredit.application.services import LoanService, WorkerService
from zkredit.service.credit import CreditDecisionEngine
from zkredit.service.payment import PaymentRouter


# Store dependencies
@lru_cache
def get_event_store() -> EventStore:
    """Get the process-wide EventStore for the configured backend."""
    if settings.event_store_backend == "sql":
        return SqlAlchemyEventStore(db_manager.sessionmaker)
    return InMemoryEventStore()


@lru_cache
def get_worker_repository() -> WorkerRepository:
    """Get the process-wide WorkerRepository."""
    return InMemoryWorkerRepository()


@lru_cache
def get_event_publisher() -> EventPublisher:
    """Get the process-wide EventPublisher."""
    return InMemoryEventPublisher()


# External client dependencies
def get_ledger_client() -> LedgerClient:
    """Get a LedgerClient instance."""
    return HttpLedgerClient()


def get_proof_client() -> HttpProofClient:
    """Get a ProofProvider / ProofVerifier instance."""
    return HttpProofClient()


def get_proof_provider(
    client: Annotated[HttpProofClient, Depends(get_proof_client)],
) -> ProofProvider:
    return client


def get_proof_verifier(
    client: Annotated[HttpProofClient, Depends(get_proof_client)],
) -> ProofVerifier:
    return client


# Service dependencies
def get_payment_router(
    ledger_client: Annotated[LedgerClient, Depends(get_ledger_client)],
    publisher: Annotated[EventPublisher, Depends(get_event_publisher)],
) -> PaymentRouter:
    """Get a PaymentRouter bound to the ledger client."""
    return PaymentRouter(ledger_client=ledger_client, publisher=publisher)


@lru_cache
def get_decision_engine() -> CreditDecisionEngine:
    """Get the CreditDecisionEngine with the configured strategy."""
    return CreditDecisionEngine()


async def get_worker_service(
    worker_id: str,
    workers: Annotated[WorkerRepository, Depends(get_worker_repository)],
    event_store: Annotated[EventStore, Depends(get_event_store)],
    router: Annotated[PaymentRouter, Depends(get_payment_router)],
    prover: Annotated[ProofProvider, Depends(get_proof_provider)],
    publisher: Annotated[EventPublisher, Depends(get_event_publisher)],
) -> WorkerService:
    """
    Get a WorkerService for the worker named in the path.

    Raises:
        WorkerNotFoundException: If the worker is not registered
    """
    profile = await workers.get_by_id(worker_id)
    if profile is None:
        raise WorkerNotFoundException(worker_id)
    return WorkerService(
        profile=profile,
        event_store=event_store,
        router=router,
        proof_provider=prover,
        publisher=publisher,
    )


def get_loan_service(
    event_store: Annotated[EventStore, Depends(get_event_store)],
    router: Annotated[PaymentRouter, Depends(get_payment_router)],
    verifier: Annotated[ProofVerifier, Depends(get_proof_verifier)],
    engine: Annotated[CreditDecisionEngine, Depends(get_decision_engine)],
    publisher: Annotated[EventPublisher, Depends(get_event_publisher)],
) -> LoanService:
    """Get a LoanService instance with all dependencies."""
    return LoanService(
        event_store=event_store,
        router=router,
        verifier=verifier,
        engine=engine,
        publisher=publisher,
    )
