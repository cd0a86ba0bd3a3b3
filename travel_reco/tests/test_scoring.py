from __future__ import annotations

import pytest

from travel_reco.recommendations.models import HistoryEntry, Preferences, TravelItem, User
from travel_reco.recommendations.scoring import (
    REASON_HIGHLY_RATED,
    REASON_HISTORY,
    REASON_INTENT,
    REASON_LOW_BUDGET,
    REASON_MID_BUDGET,
    REASON_TRENDING,
    score_item,
)


def _user(tags=None, budget="mid", history=None) -> User:
    return User(
        id="t1",
        name="Test",
        preferences=Preferences(budget_level=budget, preferred_tags=tags or []),
        history=history or [],
    )


def _item(tags=("misc",), price=20000, rating=3.0, trending=False) -> TravelItem:
    return TravelItem(
        id="i1", title="Item", tags=list(tags), price=price, rating=rating, trending=trending,
    )


# A user with a preference the test items never carry, so neither the
# preference signal nor the cold-start fallback fires.
_NEUTRAL = ["zzz"]


class TestColdStart:
    def test_scenario_cold_start_mid_budget(self):
        user = _user(tags=[], budget="mid")
        item = _item(tags=["beach"], price=20000, rating=4.8, trending=True)
        result = score_item(item, user, set())
        # 5.8 cold start + 2 budget + 1.8 rating + 1 trending
        assert result.score == pytest.approx(10.6)
        assert result.reasons == [REASON_MID_BUDGET, REASON_HIGHLY_RATED, REASON_TRENDING]

    def test_cold_start_without_trending(self):
        user = _user(tags=[], budget="low")
        item = _item(price=50000, rating=4.0)
        # rating component 1.0 + cold start 4.0
        assert score_item(item, user, set()).score == pytest.approx(5.0)


class TestPreferenceAndIntent:
    def test_preference_reason_names_first_user_tag(self):
        user = _user(tags=["spa", "beach"])
        item = _item(tags=["beach", "spa"], price=5000)
        result = score_item(item, user, set())
        assert result.score == pytest.approx(4.0)
        assert result.reasons == ["Matches your spa preference"]

    def test_intent_match(self):
        user = _user(tags=_NEUTRAL)
        item = _item(tags=["beach", "resort", "city"], price=5000)
        result = score_item(item, user, {"beach", "resort"})
        assert result.score == pytest.approx(3.0)
        assert result.reasons == [REASON_INTENT]

    def test_history_match(self):
        history = [
            HistoryEntry(type="hotel", tags=["beach"], price=9000),
            HistoryEntry(type="flight", tags=["city", "beach"], price=4000),
        ]
        user = _user(tags=_NEUTRAL, history=history)
        item = _item(tags=["beach", "city", "spa"], price=5000)
        result = score_item(item, user, set())
        assert result.score == pytest.approx(2.0)
        assert result.reasons == [REASON_HISTORY]


class TestBudget:
    @pytest.mark.parametrize(
        "budget, price, expected, reason",
        [
            ("low", 9999, 2.0, REASON_LOW_BUDGET),
            ("low", 10000, 0.0, None),
            ("mid", 10000, 2.0, REASON_MID_BUDGET),
            ("mid", 30000, 0.0, None),
            ("mid", 5000, 0.0, None),
            ("high", 30000, 1.0, None),
            ("high", 5000, 0.5, None),
        ],
    )
    def test_budget_bands(self, budget, price, expected, reason):
        result = score_item(_item(price=price), _user(tags=_NEUTRAL, budget=budget), set())
        assert result.score == pytest.approx(expected)
        assert result.reasons == ([reason] if reason else [])

    def test_override_beats_stored_budget(self):
        user = _user(tags=_NEUTRAL, budget="low")
        item = _item(price=50000)
        assert score_item(item, user, set()).score == 0.0
        assert score_item(item, user, set(), budget_override="high").score == pytest.approx(1.0)


class TestBounds:
    def test_score_floored_at_zero(self):
        user = _user(tags=_NEUTRAL, budget="low")
        item = _item(price=50000, rating=1.0)
        assert score_item(item, user, set()).score == 0.0

    def test_reasons_truncated_in_evaluation_order(self):
        user = _user(
            tags=["beach"],
            history=[HistoryEntry(type="package", tags=["beach"], price=20000)],
        )
        item = _item(tags=["beach"], price=20000, rating=4.9, trending=True)
        result = score_item(item, user, {"beach"})
        assert result.reasons == [
            "Matches your beach preference",
            REASON_INTENT,
            REASON_MID_BUDGET,
        ]
        # 2 + 1.5 + 2 + 1.9 + 1 + 1
        assert result.score == pytest.approx(9.4)

    def test_deterministic(self):
        user = _user(tags=["beach"], budget="high")
        item = _item(tags=["beach", "luxury"], price=42000, rating=4.6, trending=True)
        first = score_item(item, user, {"luxury"})
        second = score_item(item, user, {"luxury"})
        assert first == second

    def test_rating_below_three_lowers_score(self):
        user = _user(tags=_NEUTRAL, budget="mid")
        item = _item(price=20000, rating=2.0)
        # budget fit 2 plus rating term -1
        assert score_item(item, user, set()).score == pytest.approx(1.0)

    def test_low_rating_offsets_other_signals(self):
        user = _user(tags=["beach"], budget="low")
        item = _item(tags=["beach"], price=5000, rating=1.5)
        # preference 2 + budget 2 + rating -1.5
        result = score_item(item, user, set())
        assert result.score == pytest.approx(2.5)
        assert REASON_HIGHLY_RATED not in result.reasons
