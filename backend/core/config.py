"""
core/config.py
──────────────
Centralised application settings via ``pydantic-settings``.

All configuration is driven by environment variables (or a ``.env`` file
in the ``backend/`` directory).  ``pydantic-settings`` validates types at
startup, so bad values fail fast with a clear error message.

Only the HTTP layer reads settings; ``segment_tree`` and
``series_analytics`` take everything they need as call arguments.

Usage
-----
    from core.config import get_settings

    settings = get_settings()
    print(settings.DEFAULT_WINDOW)
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from series_analytics import metrics

# Resolve the backend/ directory so relative .env paths work from any cwd.
_BACKEND_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables / ``.env`` file.

    Attributes:
        APP_TITLE:                   Human-readable API name shown in OpenAPI docs.
        APP_VERSION:                 Semantic version string.
        APP_DESCRIPTION:             Short description shown in the OpenAPI UI.
        DEBUG:                       Enable verbose logging.
        LOG_LEVEL:                   Root log level when ``DEBUG`` is off.
        MAX_SERIES_LENGTH:           Largest price series accepted by the API.
        DEFAULT_WINDOW:              Moving-average window when none is given.
        DEFAULT_STABILITY_THRESHOLD: Stability cut-off in percent of the average.
        SEED_PRICES:                 Optional comma-separated series loaded at startup.
        FRONTEND_URL:                Optional deployed frontend origin for CORS.
    """

    model_config = SettingsConfigDict(
        env_file=str(_BACKEND_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── API metadata ──────────────────────────────────────────────────────
    APP_TITLE: str = "Stock Segment Tree API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = (
        "Range sum/min/max queries and price analytics over a single "
        "in-memory daily price series."
    )

    # ── Logging ───────────────────────────────────────────────────────────
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── Series limits and defaults ────────────────────────────────────────
    MAX_SERIES_LENGTH: int = Field(default=100_000, gt=0)
    DEFAULT_WINDOW: int = Field(default=5, gt=0)
    DEFAULT_STABILITY_THRESHOLD: float = Field(
        default=metrics.DEFAULT_STABILITY_THRESHOLD, ge=0.0
    )
    SEED_PRICES: str = ""

    # ── CORS ──────────────────────────────────────────────────────────────
    FRONTEND_URL: str = ""

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """
        Build the CORS allow-list.

        Only the ``FRONTEND_URL`` env var; empty when it is unset.
        """
        return [self.FRONTEND_URL] if self.FRONTEND_URL else []

    @property
    def seed_prices(self) -> List[float]:
        """Parse ``SEED_PRICES`` into floats; empty when unset."""
        return [float(p) for p in self.SEED_PRICES.split(",") if p.strip()]

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, v: str) -> str:
        """Normalise and check the log level name."""
        v = v.strip().upper()
        if v not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"LOG_LEVEL must be a standard level name, got {v!r}")
        return v

    @field_validator("SEED_PRICES")
    @classmethod
    def _numeric_seed(cls, v: str) -> str:
        """Reject a seed series that contains non-numeric entries."""
        for part in v.split(","):
            if part.strip():
                float(part)  # raises ValueError → pydantic ValidationError
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached ``Settings`` singleton.

    The instance is created (and the ``.env`` file parsed) only once per
    process lifetime, courtesy of ``functools.lru_cache``.

    Returns:
        Settings: Validated application configuration.
    """
    return Settings()
