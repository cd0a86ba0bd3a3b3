from __future__ import annotations

import pytest

from travel_reco.recommendations.models import BudgetLevel, PreferencesUpdate, Purpose
from travel_reco.recommendations.users import (
    UserNotFoundError,
    get_user,
    list_users,
    reset_users,
    update_preferences,
)


def test_list_users():
    reset_users()
    assert len(list_users()) == 4


def test_get_unknown_user():
    with pytest.raises(UserNotFoundError) as excinfo:
        get_user("nobody")
    assert excinfo.value.user_id == "nobody"


def test_partial_update_keeps_other_fields():
    reset_users()
    before = get_user("u1")
    updated = update_preferences("u1", PreferencesUpdate(budget_level="high"))
    assert updated.preferences.budget_level == BudgetLevel.high
    assert updated.preferences.purpose == before.preferences.purpose
    assert updated.preferences.preferred_tags == before.preferences.preferred_tags
    assert get_user("u1").preferences.budget_level == BudgetLevel.high


def test_purpose_can_be_cleared():
    reset_users()
    updated = update_preferences("u1", PreferencesUpdate(purpose=None))
    assert updated.preferences.purpose is None


def test_tags_deduplicated_in_order():
    reset_users()
    updated = update_preferences(
        "u3", PreferencesUpdate(preferred_tags=["beach", "spa", "beach"]),
    )
    assert updated.preferences.preferred_tags == ["beach", "spa"]


def test_reset_restores_seed():
    reset_users()
    update_preferences("u2", PreferencesUpdate(purpose=Purpose.business))
    reset_users()
    assert get_user("u2").preferences.purpose == Purpose.leisure


def test_update_unknown_user():
    with pytest.raises(UserNotFoundError):
        update_preferences("nobody", PreferencesUpdate(budget_level="low"))
