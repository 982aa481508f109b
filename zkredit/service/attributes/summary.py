"""
Windowed summarization of a worker's remittance history.

Months are approximated as fixed 30-day periods when computing the
window cutoff and the account age; active months are counted on real
UTC calendar months.
"""

import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from zkredit.domain.entities import RemittanceEvent, WindowSummary
from zkredit.domain.interfaces import EventStore

from .settings import AttributeSettings, attribute_settings

logger = structlog.get_logger(__name__)


def now_ms() -> int:
    """Current wall-clock time in ms since epoch."""
    return int(time.time() * 1000)


def _calendar_month(timestamp_ms: int) -> tuple[int, int]:
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.year, moment.month


def summarize_events(
    events: Iterable[RemittanceEvent],
    window_months: Optional[int] = None,
    now: Optional[int] = None,
    settings: AttributeSettings = attribute_settings,
) -> WindowSummary:
    """
    Aggregate remittance events over a trailing window.

    Events may arrive in any order; nothing here relies on append
    order implying time order.

    Args:
        events: A worker's remittance events (whole history)
        window_months: Window length in 30-day months (default from settings)
        now: Reference time in ms since epoch (default: wall clock)
        settings: Attribute settings (uses defaults if not provided)

    Returns:
        WindowSummary; all zero when there are no events
    """
    history = list(events)
    if not history:
        return WindowSummary()

    window = settings.window_months if window_months is None else window_months
    reference = now_ms() if now is None else now
    cutoff = reference - window * settings.month_ms

    in_window = [event for event in history if event.timestamp >= cutoff]

    months_with_activity = len({_calendar_month(e.timestamp) for e in in_window})
    total_volume = sum((e.amount for e in in_window), Decimal("0"))

    oldest = min(event.timestamp for event in history)
    account_age_months = max(1, (reference - oldest) // settings.month_ms)

    return WindowSummary(
        months_with_activity=months_with_activity,
        total_volume=total_volume,
        account_age_months=int(account_age_months),
        total_transactions=len(in_window),
    )


class WindowedSummarizer:
    """Computes window summaries for one worker from an event store."""

    def __init__(
        self,
        store: EventStore,
        settings: AttributeSettings = attribute_settings,
    ):
        self._store = store
        self._settings = settings

    async def summarize(
        self,
        worker_id: str,
        window_months: Optional[int] = None,
        now: Optional[int] = None,
    ) -> WindowSummary:
        events = await self._store.events_for_worker(worker_id)
        summary = summarize_events(
            events,
            window_months=window_months,
            now=now,
            settings=self._settings,
        )
        logger.debug(
            "remittance_history_summarized",
            worker_id=worker_id,
            events=len(events),
            months_with_activity=summary.months_with_activity,
            total_transactions=summary.total_transactions,
        )
        return summary
