from __future__ import annotations

import logging
import time
import uuid
from typing import Iterable

from ..analytics.metrics import MetricsAccumulator
from ..intent.extractor import extract_intent_tags
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .data_store import get_catalog
from .models import (
    BudgetLevel,
    Category,
    RecommendationRequest,
    RecommendationResponse,
    ScoredItem,
    TravelItem,
    User,
)
from .scoring import score_item
from .users import get_user

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    return uuid.uuid4().hex


def rank(
    catalog: Iterable[TravelItem],
    user: User,
    intent_tags: Iterable[str],
    budget_override: BudgetLevel | str | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[ScoredItem]:
    """
    Score every item and return the best ``config.top_k``.

    The sort is stable, so items with equal scores keep catalog order.
    """
    intent = set(intent_tags)
    scored: list[tuple[float, TravelItem, list[str]]] = []
    for item in catalog:
        result = score_item(item, user, intent, budget_override, config)
        scored.append((result.score, item, result.reasons))

    scored.sort(key=lambda entry: entry[0], reverse=True)

    return [
        ScoredItem(**item.model_dump(), score=round(score, 4), reasons=reasons)
        for score, item, reasons in scored[: config.top_k]
    ]


def get_recommendations(
    request: RecommendationRequest,
    metrics: MetricsAccumulator,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> RecommendationResponse:
    start_time = time.time()

    # Raises before anything is recorded
    user = get_user(request.user_id)

    session_id = request.session_id or generate_session_id()
    intent_tags = extract_intent_tags(request.query) if request.query else set()

    ranked: dict[Category, list[ScoredItem]] = {
        category: rank(
            get_catalog(category),
            user,
            intent_tags,
            request.budget_level,
            config,
        )
        for category in Category
    }

    served_ids = [item.id for category in Category for item in ranked[category]]
    metrics.record_impressions(session_id, user.id, served_ids)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Served %d recommendations to %s (purpose=%s, budget=%s, intent=%s) in %.1f ms",
        len(served_ids),
        user.id,
        request.purpose.value if request.purpose else None,
        (request.budget_level or user.preferences.budget_level).value,
        sorted(intent_tags),
        elapsed_ms,
    )

    return RecommendationResponse(
        flights=ranked[Category.flights],
        hotels=ranked[Category.hotels],
        packages=ranked[Category.packages],
        session_id=session_id,
        intent_tags=sorted(intent_tags),
    )
