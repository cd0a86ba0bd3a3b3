from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    impression = "impression"
    click = "click"
    booking = "booking"


class TrackingEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: str
    user_id: str
    event_type: EventType
    item_id: str
    timestamp: float


class TrackEventRequest(BaseModel):
    session_id: str | None = None
    user_id: str = Field(..., min_length=1)
    event_type: EventType
    item_id: str = Field(..., min_length=1)


class MetricsSnapshot(BaseModel):
    impressions: int = 0
    clicks: int = 0
    bookings: int = 0
    ctr: float = 0.0
    conversion: float = 0.0
    events: list[TrackingEvent] = Field(default_factory=list)
