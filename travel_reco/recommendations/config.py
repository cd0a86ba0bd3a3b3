from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data" / "seed"


@dataclass(frozen=True)
class RecommendationConfig:
    top_k: int = 3

    # Budget bands, in catalog price units
    low_price_ceiling: int = 10_000
    high_price_floor: int = 30_000

    preference_weight: float = 2.0
    intent_weight: float = 1.5
    history_weight: float = 1.0
    trending_boost: float = 1.0
    budget_fit_score: float = 2.0
    high_budget_fit_score: float = 1.0
    high_budget_partial_score: float = 0.5

    data_dir: Path = Path(os.getenv("TRAVEL_RECO_DATA_DIR", str(_DEFAULT_DATA_DIR)))


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
