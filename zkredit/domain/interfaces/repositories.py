"""Repository interfaces for the event ledger and worker profiles."""

from abc import ABC, abstractmethod
from typing import List, Optional

from zkredit.domain.entities import (
    LoanDisbursementEvent,
    RemittanceEvent,
    WorkerProfile,
)


class EventStore(ABC):
    """
    Append-only store of remittance and loan-disbursement events.

    Implementations may use in-memory storage, PostgreSQL, etc.
    Appends must be serialized per store, and reads must observe a
    consistent snapshot rather than a concurrent append mid-iteration.
    """

    @abstractmethod
    async def record_remittance(self, event: RemittanceEvent) -> RemittanceEvent:
        """
        Append a remittance event.

        Args:
            event: The event to record

        Returns:
            The recorded event

        Raises:
            DuplicateEventError: If an event with the same id exists
        """
        ...

    @abstractmethod
    async def record_loan_disbursement(
        self,
        event: LoanDisbursementEvent,
    ) -> LoanDisbursementEvent:
        """
        Append a loan-disbursement event.

        Raises:
            DuplicateEventError: If an event with the same id exists
        """
        ...

    @abstractmethod
    async def events_for_worker(self, worker_id: str) -> List[RemittanceEvent]:
        """
        Retrieve a worker's remittances.

        Args:
            worker_id: The worker's identifier

        Returns:
            Remittance events ordered by timestamp, most recent first
        """
        ...

    @abstractmethod
    async def loan_disbursements_for_worker(
        self,
        worker_id: str,
    ) -> List[LoanDisbursementEvent]:
        """Retrieve a worker's loan disbursements, most recent first."""
        ...

    @abstractmethod
    async def all_loan_disbursements(self) -> List[LoanDisbursementEvent]:
        """Retrieve every loan disbursement in the store, most recent first."""
        ...


class WorkerRepository(ABC):
    """Abstract repository for private worker profiles."""

    @abstractmethod
    async def save(self, profile: WorkerProfile) -> WorkerProfile:
        """Register or replace a worker profile."""
        ...

    @abstractmethod
    async def get_by_id(self, worker_id: str) -> Optional[WorkerProfile]:
        """
        Retrieve a worker profile.

        Returns:
            The profile if registered, None otherwise
        """
        ...
