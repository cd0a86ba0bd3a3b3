from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import MAX_REASONS, BudgetLevel, TravelItem, User

REASON_INTENT = "Matches your search intent"
REASON_LOW_BUDGET = "Great value within budget"
REASON_MID_BUDGET = "Perfect for your budget"
REASON_HIGHLY_RATED = "Highly rated by travelers"
REASON_HISTORY = "Similar to your past trips"
REASON_TRENDING = "Currently trending"

_HIGHLY_RATED = 4.5


@dataclass(frozen=True)
class ScoreResult:
    score: float
    reasons: list[str] = field(default_factory=list)


def _budget_fit(
    price: float,
    budget: BudgetLevel,
    config: RecommendationConfig,
) -> tuple[float, str | None]:
    """Return ``(contribution, reason)`` for the item's price under *budget*.

    Prices below the low ceiling under a mid/high budget, or above it under
    a low budget, earn nothing.
    """
    if budget == BudgetLevel.low and price < config.low_price_ceiling:
        return config.budget_fit_score, REASON_LOW_BUDGET
    if budget == BudgetLevel.mid and config.low_price_ceiling <= price < config.high_price_floor:
        return config.budget_fit_score, REASON_MID_BUDGET
    if budget == BudgetLevel.high:
        if price >= config.high_price_floor:
            return config.high_budget_fit_score, None
        return config.high_budget_partial_score, None
    return 0.0, None


def score_item(
    item: TravelItem,
    user: User,
    intent_tags: Iterable[str],
    budget_override: BudgetLevel | str | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> ScoreResult:
    """
    Score *item* for *user*.

    The score is the sum of independent signals, evaluated in this order:
    preference match, query intent, budget fit, rating, past trips,
    trending, plus a popularity fallback for users without preferences.
    Reasons are collected in the same order and cut to the first
    ``MAX_REASONS``. The total is floored at zero.
    """
    intent = set(intent_tags)
    preferred = user.preferences.preferred_tags
    preferred_set = set(preferred)
    score = 0.0
    reasons: list[str] = []

    # 1. Stored preferences
    pref_matches = sum(1 for t in item.tags if t in preferred_set)
    if pref_matches > 0:
        score += pref_matches * config.preference_weight
        first = next(t for t in preferred if t in item.tags)
        reasons.append(f"Matches your {first} preference")

    # 2. Query intent
    intent_matches = sum(1 for t in item.tags if t in intent)
    if intent_matches > 0:
        score += intent_matches * config.intent_weight
        reasons.append(REASON_INTENT)

    # 3. Budget
    budget = BudgetLevel(budget_override) if budget_override else user.preferences.budget_level
    price_score, price_reason = _budget_fit(item.price, budget, config)
    score += price_score
    if price_reason:
        reasons.append(price_reason)

    # 4. Rating, [3, 5] -> [0, 2]; lower ratings go negative
    score += (item.rating - 3) / 2 * 2
    if item.rating >= _HIGHLY_RATED:
        reasons.append(REASON_HIGHLY_RATED)

    # 5. Past trips
    history = user.history_tags()
    history_matches = sum(1 for t in item.tags if t in history)
    if history_matches > 0:
        score += history_matches * config.history_weight
        reasons.append(REASON_HISTORY)

    # 6. Trending
    if item.trending:
        score += config.trending_boost
        reasons.append(REASON_TRENDING)

    # Cold start
    if not preferred:
        score += item.rating + (config.trending_boost if item.trending else 0.0)

    return ScoreResult(score=max(0.0, score), reasons=reasons[:MAX_REASONS])
