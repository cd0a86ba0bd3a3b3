from __future__ import annotations

from collections import Counter
from typing import Any

from .models import EventType, MetricsSnapshot, TrackingEvent


def _ctr_insight(ctr: float) -> dict[str, str]:
    if ctr > 20:
        return {"level": "excellent", "message": "Excellent CTR - recommendations are highly relevant"}
    if ctr > 10:
        return {"level": "good", "message": "Good CTR - room for improvement"}
    return {"level": "low", "message": "Low CTR - consider improving recommendation quality"}


def _conversion_insight(conversion: float, clicks: int) -> dict[str, str] | None:
    if conversion > 15:
        return {"level": "high", "message": "High conversion rate - users are engaged"}
    if conversion > 5:
        return {"level": "moderate", "message": "Moderate conversion - optimize booking flow"}
    if clicks > 0:
        return {"level": "low", "message": "Low conversion - check pricing and booking experience"}
    return None


def compute_dashboard(
    metrics: MetricsSnapshot,
    events: list[TrackingEvent],
) -> dict[str, Any]:
    """Summarise the full event log for the analytics dashboard."""
    by_type: Counter[str] = Counter(e.event_type.value for e in events)

    clicked: Counter[str] = Counter()
    booked: Counter[str] = Counter()
    for e in events:
        if e.event_type == EventType.click:
            clicked[e.item_id] += 1
        elif e.event_type == EventType.booking:
            booked[e.item_id] += 1

    return {
        "impressions": metrics.impressions,
        "clicks": metrics.clicks,
        "bookings": metrics.bookings,
        "ctr": round(metrics.ctr, 1),
        "conversion": round(metrics.conversion, 1),
        "total_events": len(events),
        "events_by_type": {t.value: by_type.get(t.value, 0) for t in EventType},
        "unique_sessions": len({e.session_id for e in events}),
        "top_clicked_items": [{"item_id": i, "count": c} for i, c in clicked.most_common(5)],
        "top_booked_items": [{"item_id": i, "count": c} for i, c in booked.most_common(5)],
        "insights": {
            "ctr": _ctr_insight(metrics.ctr),
            "conversion": _conversion_insight(metrics.conversion, metrics.clicks),
        },
    }
