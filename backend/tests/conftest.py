"""
tests/conftest.py
──────────────────
Shared pytest fixtures for the backend test suite.

Fixtures
--------
sample_prices
    The six-day reference series ``[100, 120, 90, 150, 200, 80]``.

tree
    ``RangeTree`` built from ``sample_prices``.

store
    Fresh ``SeriesStore`` per test, so no series leaks between tests.

app_client
    ``httpx.AsyncClient`` wired to the FastAPI app with ``store``
    injected in place of the process-wide singleton.

Usage
-----
    async def test_health(app_client):
        resp = await app_client.get("/")
        assert resp.status_code == 200
"""

from typing import AsyncGenerator, List

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_store
from app.main import app
from core.store import SeriesStore
from segment_tree import RangeTree


# ── Core fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def sample_prices() -> List[int]:
    return [100, 120, 90, 150, 200, 80]


@pytest.fixture
def tree(sample_prices: List[int]) -> RangeTree:
    return RangeTree(sample_prices)


# ── Store + HTTP client ───────────────────────────────────────────────────────


@pytest.fixture
def store() -> SeriesStore:
    """An empty store; tests load whatever series they need."""
    return SeriesStore()


@pytest.fixture
async def app_client(store: SeriesStore) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTPX client with the series store overridden by ``store``.

    Startup lifespan is skipped, so ``SEED_PRICES`` is never applied.
    """
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
