from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Iterable

from .config import DEFAULT_METRICS_CONFIG, MetricsConfig
from .models import EventType, MetricsSnapshot, TrackingEvent

logger = logging.getLogger(__name__)


def _rate(numerator: int, denominator: int) -> float:
    if denominator <= 0:
        return 0.0
    return min(100.0, numerator / denominator * 100)


class MetricsAccumulator:
    """
    Impression / click / booking counters plus an append-only event log.

    One instance is shared by every request handler, so all mutation goes
    through a lock. ``ctr`` and ``conversion`` are always derived from the
    current counts, never stored.
    """

    def __init__(
        self,
        config: MetricsConfig = DEFAULT_METRICS_CONFIG,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._clock = clock
        self._lock = threading.Lock()
        self._impressions = 0
        self._clicks = 0
        self._bookings = 0
        self._events: list[TrackingEvent] = []
        self._last_ts = 0.0

    # ── Derived rates ────────────────────────────────────────────────────

    @property
    def ctr(self) -> float:
        return _rate(self._clicks, self._impressions)

    @property
    def conversion(self) -> float:
        return _rate(self._bookings, self._clicks)

    # ── Mutation ─────────────────────────────────────────────────────────

    def _now(self) -> float:
        # Caller holds the lock. Timestamps never go backwards.
        self._last_ts = max(self._last_ts, self._clock())
        return self._last_ts

    def record_impressions(
        self,
        session_id: str,
        user_id: str,
        item_ids: Iterable[str],
    ) -> int:
        """Log one impression per item id, all sharing one timestamp."""
        ids = list(item_ids)
        with self._lock:
            ts = self._now()
            self._events.extend(
                TrackingEvent(
                    session_id=session_id,
                    user_id=user_id,
                    event_type=EventType.impression,
                    item_id=item_id,
                    timestamp=ts,
                )
                for item_id in ids
            )
            self._impressions += len(ids)
        return len(ids)

    def record_event(
        self,
        session_id: str,
        user_id: str,
        event_type: EventType | str,
        item_id: str,
    ) -> MetricsSnapshot:
        """
        Append a single reported event and return the updated metrics.

        Clicks and bookings bump their counters. A reported impression is
        logged only; the impression counter tracks served recommendations.
        """
        event_type = EventType(event_type)
        with self._lock:
            self._events.append(TrackingEvent(
                session_id=session_id,
                user_id=user_id,
                event_type=event_type,
                item_id=item_id,
                timestamp=self._now(),
            ))
            if event_type == EventType.click:
                self._clicks += 1
            elif event_type == EventType.booking:
                self._bookings += 1
            snapshot = self._snapshot_locked(self._config.recent_events)
        logger.info("Tracked %s on %s (session %s)", event_type.value, item_id, session_id)
        return snapshot

    def reset(self) -> None:
        """Zero the counters and drop the event log.

        The timestamp floor survives a reset so event times stay
        non-decreasing for the life of the accumulator.
        """
        with self._lock:
            self._impressions = 0
            self._clicks = 0
            self._bookings = 0
            self._events = []
        logger.info("Metrics reset")

    # ── Queries ──────────────────────────────────────────────────────────

    def _snapshot_locked(self, recent: int) -> MetricsSnapshot:
        window = self._events[-recent:] if recent > 0 else []
        return MetricsSnapshot(
            impressions=self._impressions,
            clicks=self._clicks,
            bookings=self._bookings,
            ctr=self.ctr,
            conversion=self.conversion,
            events=list(window),
        )

    def snapshot(self, recent: int | None = None) -> MetricsSnapshot:
        """Counters plus the most recent *recent* events (config default)."""
        with self._lock:
            return self._snapshot_locked(
                self._config.recent_events if recent is None else recent
            )

    def events(self) -> list[TrackingEvent]:
        """Copy of the full event log."""
        with self._lock:
            return list(self._events)

    def report(self) -> tuple[MetricsSnapshot, list[TrackingEvent]]:
        """Snapshot and full log taken under one lock, so they agree."""
        with self._lock:
            return (
                self._snapshot_locked(self._config.recent_events),
                list(self._events),
            )
