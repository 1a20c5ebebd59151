from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RoleClientConfig:
    base_url: str = os.getenv("AUTH_SERVICE_URL", "")
    timeout: float = 5.0
    stylist_role: str = "STYLIST"

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)


DEFAULT_ROLE_CLIENT_CONFIG = RoleClientConfig()
