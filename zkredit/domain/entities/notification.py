"""Structured notifications emitted by the ledger, payment and loan flows."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


class NotificationType(str, Enum):
    LEDGER_RECORDED = "ledger_recorded"
    LOAN_DECIDED = "loan_decided"
    PAYMENT_EXECUTED = "payment_executed"


@dataclass(frozen=True)
class Notification:
    """A single published event, delivered to every subscriber."""

    event_type: NotificationType
    payload: dict[str, Any]
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "event_type": self.event_type.value,
            "payload": self.payload,
            "created_at": self.created_at.isoformat(),
        }
