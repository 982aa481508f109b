"""Event ledger and worker lookup domain exceptions."""

from .base import DomainException


class DuplicateEventError(DomainException):
    """Raised when an event id is already present in the store."""

    def __init__(self, event_id: str):
        super().__init__(
            message=f"Event already recorded: {event_id}",
            code="DUPLICATE_EVENT",
        )
        self.event_id = event_id


class WorkerNotFoundException(DomainException):
    """Raised when a worker profile is not registered."""

    def __init__(self, worker_id: str):
        super().__init__(
            message=f"Worker not found: {worker_id}",
            code="WORKER_NOT_FOUND",
        )
        self.worker_id = worker_id
