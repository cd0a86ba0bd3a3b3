from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd

from .config import DEFAULT_RECOMMENDATION_CONFIG
from .models import Category, TravelItem, User

logger = logging.getLogger(__name__)

_CORE_COLUMNS = ["id", "title", "tags", "price", "rating", "image_url", "trending"]

_catalogs: dict[Category, list[TravelItem]] = {}
_data_dir: Path = DEFAULT_RECOMMENDATION_CONFIG.data_dir


def _parse_tags(raw: object) -> list[str]:
    if not isinstance(raw, str):
        return []
    return [t.strip().lower() for t in raw.split(",") if t.strip()]


def _load_catalog(path: Path) -> list[TravelItem]:
    df = pd.read_csv(path, dtype={"id": str})

    df["tags_list"] = df["tags"].apply(_parse_tags)
    if "trending" in df.columns:
        df["trending"] = df["trending"].fillna(False).astype(bool)
    else:
        df["trending"] = False

    # Anything outside the core schema is display-only detail
    detail_columns = [c for c in df.columns if c not in _CORE_COLUMNS and c != "tags_list"]

    items: list[TravelItem] = []
    for _, row in df.iterrows():
        details = {
            # numpy scalars -> plain Python for serialisation
            c: row[c].item() if hasattr(row[c], "item") else row[c]
            for c in detail_columns
            if pd.notna(row[c])
        }
        items.append(TravelItem(
            id=str(row["id"]),
            title=row["title"],
            tags=row["tags_list"],
            price=float(row["price"]),
            rating=float(row["rating"]),
            image_url=row["image_url"] if pd.notna(row.get("image_url")) else None,
            trending=bool(row["trending"]),
            details=details or None,
        ))
    logger.info("Loaded %d items from %s", len(items), path.name)
    return items


def get_catalog(category: Category | str) -> list[TravelItem]:
    """Return one catalog, loading it from disk on first call."""
    category = Category(category)
    if category not in _catalogs:
        _catalogs[category] = _load_catalog(_data_dir / f"{category.value}.csv")
    return _catalogs[category]


def load_seed_users() -> list[User]:
    path = _data_dir / "users.json"
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    users = [User(**u) for u in raw]
    logger.info("Loaded %d users from %s", len(users), path.name)
    return users
