from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_dashboard
from .analytics.metrics import MetricsAccumulator
from .analytics.models import MetricsSnapshot, TrackEventRequest
from .intent.extractor import KNOWN_TAGS
from .recommendations.data_store import get_catalog
from .recommendations.models import (
    BudgetLevel,
    Category,
    PreferencesUpdate,
    Purpose,
    RecommendationRequest,
    RecommendationResponse,
    TravelItem,
    User,
)
from .recommendations.retrieval import generate_session_id, get_recommendations
from .recommendations.users import (
    UserNotFoundError,
    get_user,
    list_users,
    update_preferences,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Travel Recommendation API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "travel-reco-secret-change-in-production"),
)

# Single accumulator for the process; tests reset it through app.state.
app.state.metrics = MetricsAccumulator()


def get_metrics_store(request: Request) -> MetricsAccumulator:
    return request.app.state.metrics


def _session_id(request: Request, supplied: str | None) -> str:
    """Prefer the caller's id, then the cookie's, else mint and remember one."""
    if supplied:
        return supplied
    session_id = request.session.get("session_id")
    if not session_id:
        session_id = generate_session_id()
        request.session["session_id"] = session_id
    return session_id


def _not_found(exc: UserNotFoundError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(exc))


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "budget_levels": [b.value for b in BudgetLevel],
        "purposes": [p.value for p in Purpose],
        "categories": [c.value for c in Category],
        "tags": list(KNOWN_TAGS),
    }


@app.get("/catalog/{category}", response_model=list[TravelItem])
def catalog(category: Category) -> list[TravelItem]:
    return get_catalog(category)


# ── User endpoints ───────────────────────────────────────────────────────


@app.get("/users", response_model=list[User])
def users() -> list[User]:
    return list_users()


@app.get("/users/{user_id}", response_model=User)
def user_detail(user_id: str) -> User:
    try:
        return get_user(user_id)
    except UserNotFoundError as exc:
        raise _not_found(exc) from exc


@app.patch("/users/{user_id}/preferences", response_model=User)
def user_preferences(user_id: str, body: PreferencesUpdate) -> User:
    try:
        return update_preferences(user_id, body)
    except UserNotFoundError as exc:
        raise _not_found(exc) from exc


# ── Recommendations & tracking ───────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(
    body: RecommendationRequest,
    request: Request,
    metrics: MetricsAccumulator = Depends(get_metrics_store),
) -> RecommendationResponse:
    body = body.model_copy(update={"session_id": _session_id(request, body.session_id)})
    try:
        return get_recommendations(body, metrics)
    except UserNotFoundError as exc:
        raise _not_found(exc) from exc


@app.post("/events", response_model=MetricsSnapshot)
def track_event(
    body: TrackEventRequest,
    request: Request,
    metrics: MetricsAccumulator = Depends(get_metrics_store),
) -> MetricsSnapshot:
    return metrics.record_event(
        _session_id(request, body.session_id),
        body.user_id,
        body.event_type,
        body.item_id,
    )


# ── Metrics endpoints ────────────────────────────────────────────────────


@app.get("/metrics", response_model=MetricsSnapshot)
def metrics_view(metrics: MetricsAccumulator = Depends(get_metrics_store)) -> MetricsSnapshot:
    return metrics.snapshot()


@app.post("/metrics/reset")
def metrics_reset(metrics: MetricsAccumulator = Depends(get_metrics_store)) -> dict[str, str]:
    metrics.reset()
    return {"status": "reset"}


@app.get("/dashboard")
def dashboard(metrics: MetricsAccumulator = Depends(get_metrics_store)) -> dict:
    return compute_dashboard(*metrics.report())
