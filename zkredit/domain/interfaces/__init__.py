"""
Domain Interfaces (Ports)
"""

from .repositories import EventStore, WorkerRepository
from .clients import LedgerClient, ProofProvider, ProofVerifier
from .publisher import EventPublisher

__all__ = [
    "EventStore",
    "WorkerRepository",
    "LedgerClient",
    "ProofProvider",
    "ProofVerifier",
    "EventPublisher",
]
