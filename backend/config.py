"""Centralised settings for the likes backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Upstream post
    # ------------------------------------------------------------------
    target_url: str = field(
        default_factory=lambda: os.environ.get(
            "THREADS_POST_URL",
            "https://www.threads.net/@rioleia.cafe_satoka/post/DUrqbHRAbtV",
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "15.0"))
    )

    # ------------------------------------------------------------------
    # HTTP surface
    # ------------------------------------------------------------------
    cache_max_age: int = field(
        default_factory=lambda: int(os.environ.get("CACHE_MAX_AGE", "5"))
    )
    host: str = field(default_factory=lambda: os.environ.get("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "8000")))

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )

    @property
    def cache_control(self) -> str:
        """``Cache-Control`` value attached to successful responses."""
        return f"public, max-age={self.cache_max_age}"


# Module-level singleton — import this everywhere:
#   from backend.config import settings
settings = Settings()
