from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class CatalogConfig:
    seed_enabled: bool = os.getenv("CATALOG_SEED", "true").lower() in ("1", "true", "yes")
    seed_dir: Path = Path(__file__).resolve().parent / "data"
    stylists_filename: str = "stylists.csv"
    offerings_filename: str = "offerings.csv"

    @property
    def stylists_path(self) -> Path:
        return self.seed_dir / self.stylists_filename

    @property
    def offerings_path(self) -> Path:
        return self.seed_dir / self.offerings_filename


DEFAULT_CATALOG_CONFIG = CatalogConfig()
