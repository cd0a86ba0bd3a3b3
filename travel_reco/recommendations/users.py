from __future__ import annotations

import logging

from .data_store import load_seed_users
from .models import PreferencesUpdate, User

logger = logging.getLogger(__name__)

_users: dict[str, User] = {}


class UserNotFoundError(LookupError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


def _seed_users() -> None:
    """Load the demo users from the seed directory."""
    _users.clear()
    for user in load_seed_users():
        _users[user.id] = user


def _ensure_seeded() -> None:
    if not _users:
        _seed_users()


def list_users() -> list[User]:
    _ensure_seeded()
    return list(_users.values())


def get_user(user_id: str) -> User:
    """Return the user with *user_id* or raise ``UserNotFoundError``."""
    _ensure_seeded()
    user = _users.get(user_id)
    if user is None:
        logger.warning("Unknown user id %r", user_id)
        raise UserNotFoundError(user_id)
    return user


def update_preferences(user_id: str, update: PreferencesUpdate) -> User:
    """Apply only the fields set on *update*; the stored user is replaced."""
    user = get_user(user_id)
    # Only purpose may be cleared with an explicit null
    changes = {
        k: v
        for k, v in update.model_dump(exclude_unset=True).items()
        if v is not None or k == "purpose"
    }
    prefs = user.preferences.model_validate(
        {**user.preferences.model_dump(), **changes}
    )
    updated = user.model_copy(update={"preferences": prefs})
    _users[user_id] = updated
    logger.info("Updated preferences for %s: %s", user_id, sorted(changes))
    return updated


def reset_users() -> None:
    """Restore the seed users, discarding preference edits."""
    _seed_users()
