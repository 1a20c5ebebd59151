from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RatingsConfig:
    k_factor: float = float(os.getenv("ELO_K_FACTOR", "32"))
    initial_rating: float = float(os.getenv("ELO_INITIAL_RATING", "1200"))
    max_retries: int = int(os.getenv("ELO_MAX_RETRIES", "3"))


DEFAULT_RATINGS_CONFIG = RatingsConfig()
