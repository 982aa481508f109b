"""In-memory implementation of EventStore."""

import asyncio
from typing import List

import structlog

from zkredit.domain.entities import LoanDisbursementEvent, RemittanceEvent
from zkredit.domain.exceptions import DuplicateEventError
from zkredit.domain.interfaces import EventStore

logger = structlog.get_logger(__name__)


class InMemoryEventStore(EventStore):
    """
    Process-local event store.

    One lock serializes appends and snapshot reads, so concurrent
    workers never lose an append and a reader never iterates a list
    that is being extended.
    """

    def __init__(self):
        self._remittances: List[RemittanceEvent] = []
        self._loans: List[LoanDisbursementEvent] = []
        self._ids: set[str] = set()
        self._lock = asyncio.Lock()

    async def record_remittance(self, event: RemittanceEvent) -> RemittanceEvent:
        async with self._lock:
            self._claim_id(event.id)
            self._remittances.append(event)

        logger.info(
            "remittance_event_recorded",
            event_id=event.id,
            topic=event.topic,
            corridor=event.corridor,
            worker_id=event.worker_id,
            receiver_id=event.receiver_id,
            amount=str(event.amount),
            timestamp=event.timestamp,
        )
        return event

    async def record_loan_disbursement(
        self,
        event: LoanDisbursementEvent,
    ) -> LoanDisbursementEvent:
        async with self._lock:
            self._claim_id(event.id)
            self._loans.append(event)

        logger.info(
            "loan_disbursement_event_recorded",
            event_id=event.id,
            worker_id=event.worker_id,
            credit_agent_id=event.credit_agent_id,
            amount=str(event.amount),
            interest_rate=str(event.interest_rate),
            tenure_months=event.tenure_months,
            transaction_hash=event.transaction_hash,
        )
        return event

    async def events_for_worker(self, worker_id: str) -> List[RemittanceEvent]:
        async with self._lock:
            snapshot = [e for e in self._remittances if e.worker_id == worker_id]
        return sorted(snapshot, key=lambda e: e.timestamp, reverse=True)

    async def loan_disbursements_for_worker(
        self,
        worker_id: str,
    ) -> List[LoanDisbursementEvent]:
        async with self._lock:
            snapshot = [e for e in self._loans if e.worker_id == worker_id]
        return sorted(snapshot, key=lambda e: e.timestamp, reverse=True)

    async def all_loan_disbursements(self) -> List[LoanDisbursementEvent]:
        async with self._lock:
            snapshot = list(self._loans)
        return sorted(snapshot, key=lambda e: e.timestamp, reverse=True)

    def _claim_id(self, event_id: str) -> None:
        """Reserve an event id; caller must hold the lock."""
        if event_id in self._ids:
            raise DuplicateEventError(event_id)
        self._ids.add(event_id)
