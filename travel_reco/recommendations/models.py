from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Justifications shown per recommended item
MAX_REASONS = 3


class BudgetLevel(str, Enum):
    low = "low"
    mid = "mid"
    high = "high"


class Purpose(str, Enum):
    business = "business"
    leisure = "leisure"


class Category(str, Enum):
    flights = "flights"
    hotels = "hotels"
    packages = "packages"


def _dedupe(tags: list[str]) -> list[str]:
    """Drop repeated tags, keeping first-seen order."""
    return list(dict.fromkeys(t.strip() for t in tags if t and t.strip()))


class Preferences(BaseModel):
    purpose: Purpose | None = None
    budget_level: BudgetLevel = BudgetLevel.mid
    preferred_tags: list[str] = Field(default_factory=list)

    @field_validator("preferred_tags")
    @classmethod
    def _unique_tags(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class HistoryEntry(BaseModel):
    type: str
    tags: list[str] = Field(default_factory=list)
    price: float = 0


class User(BaseModel):
    id: str
    name: str
    preferences: Preferences = Field(default_factory=Preferences)
    history: list[HistoryEntry] = Field(default_factory=list)

    def history_tags(self) -> set[str]:
        tags: set[str] = set()
        for entry in self.history:
            tags.update(entry.tags)
        return tags


class TravelItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    tags: list[str] = Field(default_factory=list)
    price: float = Field(..., gt=0)
    rating: float = Field(..., ge=1.0, le=5.0)
    image_url: str | None = None
    trending: bool = False
    details: dict[str, Any] | None = None


class ScoredItem(TravelItem):
    score: float = Field(..., ge=0.0)
    reasons: list[str] = Field(default_factory=list, max_length=MAX_REASONS)


class RecommendationRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    query: str | None = Field(default=None, max_length=500)
    purpose: Purpose | None = None
    budget_level: BudgetLevel | None = Field(
        default=None, description="Overrides the user's stored budget for this request"
    )
    session_id: str | None = None


class RecommendationResponse(BaseModel):
    flights: list[ScoredItem]
    hotels: list[ScoredItem]
    packages: list[ScoredItem]
    session_id: str
    intent_tags: list[str] = Field(default_factory=list)


class PreferencesUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    purpose: Purpose | None = None
    budget_level: BudgetLevel | None = None
    preferred_tags: list[str] | None = None
