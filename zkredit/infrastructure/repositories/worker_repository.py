"""In-memory implementation of WorkerRepository."""

import asyncio
from typing import Dict, Optional

from zkredit.domain.entities import WorkerProfile
from zkredit.domain.interfaces import WorkerRepository


class InMemoryWorkerRepository(WorkerRepository):
    """Holds private worker profiles for the lifetime of the process."""

    def __init__(self):
        self._profiles: Dict[str, WorkerProfile] = {}
        self._lock = asyncio.Lock()

    async def save(self, profile: WorkerProfile) -> WorkerProfile:
        async with self._lock:
            self._profiles[profile.worker_id] = profile
        return profile

    async def get_by_id(self, worker_id: str) -> Optional[WorkerProfile]:
        async with self._lock:
            return self._profiles.get(worker_id)
