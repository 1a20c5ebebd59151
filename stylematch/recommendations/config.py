from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RecommendationConfig:
    default_page_size: int = 10
    max_page_size: int = 100
    cache_ttl_seconds: float = float(os.getenv("RECOMMEND_CACHE_TTL", "300"))


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
