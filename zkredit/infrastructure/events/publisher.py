"""In-process notification publisher."""

import inspect
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Set, Tuple, Union

import structlog

from zkredit.domain.entities import Notification, NotificationType
from zkredit.domain.interfaces import EventPublisher

logger = structlog.get_logger(__name__)

Handler = Callable[[Notification], Union[Awaitable[Any], Any]]


class InMemoryEventPublisher(EventPublisher):
    """
    Fans notifications out to subscribed handlers.

    Handlers may be plain callables or coroutine functions. A failing
    handler is logged and does not stop delivery to the others, nor
    fail the flow that published.
    """

    def __init__(self):
        self._subscribers: List[Tuple[Handler, Optional[Set[NotificationType]]]] = []

    def subscribe(
        self,
        handler: Handler,
        event_types: Optional[Iterable[NotificationType]] = None,
    ) -> Callable[[], None]:
        """
        Register a handler, optionally filtered by event type.

        Returns:
            A callable that removes the subscription
        """
        entry = (handler, set(event_types) if event_types is not None else None)
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    async def publish(self, notification: Notification) -> None:
        logger.info(
            "notification_published",
            notification_id=str(notification.id),
            event_type=notification.event_type.value,
        )

        for handler, event_types in list(self._subscribers):
            if event_types is not None and notification.event_type not in event_types:
                continue
            try:
                result = handler(notification)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    "notification_handler_failed",
                    event_type=notification.event_type.value,
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                )
