from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class MetricsConfig:
    # Size of the event window returned by snapshots; the full log is kept.
    recent_events: int = int(os.getenv("METRICS_RECENT_EVENTS", "20"))


DEFAULT_METRICS_CONFIG = MetricsConfig()
