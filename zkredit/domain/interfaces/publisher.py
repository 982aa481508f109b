"""Notification publishing interface."""

from abc import ABC, abstractmethod

from zkredit.domain.entities import Notification


class EventPublisher(ABC):
    """Publishes structured notifications to interested subscribers."""

    @abstractmethod
    async def publish(self, notification: Notification) -> None:
        ...
