"""Repository implementations."""

from .memory_event_store import InMemoryEventStore
from .sql_event_store import SqlAlchemyEventStore
from .worker_repository import InMemoryWorkerRepository

__all__ = [
    "InMemoryEventStore",
    "SqlAlchemyEventStore",
    "InMemoryWorkerRepository",
]
