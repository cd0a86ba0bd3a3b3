from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Emotion / intent phrases
# ---------------------------------------------------------------------------
# Order is significant: tags are collected in table order so that callers
# which care about sequence see a stable one.

EMOTION_TAGS: dict[str, list[str]] = {
    # Social / group
    "sad": ["family", "resort", "cultural"],
    "lonely": ["family", "resort", "city"],
    "isolated": ["family", "resort", "city"],
    "need friends": ["family", "resort", "city"],
    # Solo / me time
    "me time": ["spa", "relax", "nature", "beach"],
    "alone time": ["spa", "relax", "nature", "beach"],
    "solo": ["adventure", "nature", "heritage", "city"],
    "peace": ["spa", "relax", "nature", "beach"],
    "quiet": ["spa", "relax", "nature"],
    # Relaxation
    "chill": ["beach", "resort", "spa", "relax"],
    "relax": ["beach", "resort", "spa", "relax"],
    "tired": ["spa", "resort", "relax"],
    "stressed": ["spa", "beach", "relax", "nature"],
    "overwhelmed": ["spa", "beach", "relax", "nature"],
    # Adventure / energy
    "adventurous": ["adventure", "nature", "mountains"],
    "excited": ["adventure", "city", "cultural"],
    "energetic": ["adventure", "city", "shopping"],
    "bored": ["adventure", "cultural", "city"],
    "restless": ["adventure", "nature", "city"],
    # Romance
    "romantic": ["luxury", "resort", "beach"],
    "love": ["luxury", "resort", "beach"],
    "honeymoon": ["luxury", "resort", "beach"],
    # Culture / learning
    "curious": ["cultural", "heritage", "city"],
    "learn": ["cultural", "heritage", "city"],
    "explore": ["cultural", "adventure", "city"],
    "discover": ["cultural", "heritage", "nature"],
}

# ---------------------------------------------------------------------------
# Direct tag vocabulary
# ---------------------------------------------------------------------------

KNOWN_TAGS: tuple[str, ...] = (
    "beach", "city", "business", "leisure", "family", "luxury", "budget",
    "resort", "hotel", "flight", "package", "tropical", "cultural", "heritage",
    "spa", "adventure", "relax", "downtown", "convenient", "nature", "temple",
    "backwaters", "mountains", "shopping", "food", "asia", "europe", "domestic",
    "international", "economy", "premium", "business-class",
)


def extract_intent_tags(query: str | None) -> set[str]:
    """
    Map free text to catalog tags.

    Matching is plain substring containment on the lower-cased query, so
    "relaxing" hits both the ``relax`` phrase and the ``relax`` tag. An
    empty or whitespace-only query yields an empty set.
    """
    if not query or not query.strip():
        return set()

    lower = query.lower()
    tags: set[str] = set()

    for phrase, phrase_tags in EMOTION_TAGS.items():
        if phrase in lower:
            tags.update(phrase_tags)

    tags.update(tag for tag in KNOWN_TAGS if tag in lower)

    logger.debug("Intent tags for %r: %s", query, sorted(tags))
    return tags
