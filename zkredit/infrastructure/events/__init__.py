"""Notification delivery."""

from .publisher import InMemoryEventPublisher

__all__ = ["InMemoryEventPublisher"]
