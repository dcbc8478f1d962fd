from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    log_level: str = "INFO"
    circle_steps: int = 64
    geonames_username: Optional[str] = None
    geonames_timeout_s: float = 10.0

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


def load_settings() -> Settings:
    """Read settings from the environment (and a .env file, if present)."""
    load_dotenv()
    steps = int(os.getenv("CIRCLE_STEPS", "64"))
    return Settings(
        environment=os.getenv("APP_ENV", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        circle_steps=max(8, min(512, steps)),
        geonames_username=os.getenv("GEONAMES_USERNAME") or None,
        geonames_timeout_s=float(os.getenv("GEONAMES_TIMEOUT_S", "10")),
    )
