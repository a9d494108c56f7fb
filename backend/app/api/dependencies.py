"""
app/api/dependencies.py
───────────────────────
FastAPI dependency functions shared across all endpoints.

Usage
-----
    from app.api.dependencies import get_store

    @router.get("/foo")
    def my_route(store = Depends(get_store)):
        ...
"""

from core.config import Settings, get_settings
from core.store import SeriesStore, get_series_store


def get_store() -> SeriesStore:
    """
    FastAPI dependency that returns the series store singleton.

    Inject via ``Depends(get_store)`` in any route handler.
    """
    return get_series_store()


def get_app_settings() -> Settings:
    """FastAPI dependency wrapper around :func:`core.config.get_settings`."""
    return get_settings()
