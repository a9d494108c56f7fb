"""
tests/test_api.py
──────────────────
HTTP-level tests for the series and analytics endpoints:

  POST   /api/v1/series/
  GET    /api/v1/series/
  DELETE /api/v1/series/
  PUT    /api/v1/series/prices/{index}
  GET    /api/v1/series/{sum,min,max}
  GET    /api/v1/analytics/...

Each test gets a fresh in-memory store through the ``app_client`` fixture.

Run with::

    pytest backend/tests/test_api.py -v
"""

import pytest

from app.api.dependencies import get_app_settings
from app.main import app
from core.config import Settings

# ── URL constants ─────────────────────────────────────────────────────────────

_SERIES_URL = "/api/v1/series"
_ANALYTICS_URL = "/api/v1/analytics"

_PRICES = [100, 120, 90, 150, 200, 80]


@pytest.fixture
async def loaded_client(app_client):
    """``app_client`` with the reference six-day series already loaded."""
    resp = await app_client.post(f"{_SERIES_URL}/", json={"prices": _PRICES})
    assert resp.status_code == 201
    return app_client


# ── Health ────────────────────────────────────────────────────────────────────


async def test_health(app_client) -> None:
    resp = await app_client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


# ── Series lifecycle ──────────────────────────────────────────────────────────


class TestSeriesLifecycle:
    async def test_201_create(self, app_client) -> None:
        resp = await app_client.post(f"{_SERIES_URL}/", json={"prices": _PRICES})
        assert resp.status_code == 201
        assert resp.json() == {"length": 6, "prices": _PRICES}

    async def test_200_get_after_create(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_SERIES_URL}/")
        assert resp.status_code == 200
        assert resp.json()["prices"] == _PRICES

    async def test_404_before_any_series(self, app_client) -> None:
        resp = await app_client.get(f"{_SERIES_URL}/")
        assert resp.status_code == 404
        assert "POST /api/v1/series/" in resp.json()["detail"]

    async def test_create_replaces_previous_series(self, loaded_client) -> None:
        await loaded_client.post(f"{_SERIES_URL}/", json={"prices": [1, 2]})
        resp = await loaded_client.get(f"{_SERIES_URL}/")
        assert resp.json() == {"length": 2, "prices": [1, 2]}

    async def test_204_delete_then_404(self, loaded_client) -> None:
        resp = await loaded_client.delete(f"{_SERIES_URL}/")
        assert resp.status_code == 204
        assert resp.content == b""
        resp = await loaded_client.get(f"{_SERIES_URL}/sum?left=0&right=1")
        assert resp.status_code == 404

    async def test_404_delete_without_series(self, app_client) -> None:
        resp = await app_client.delete(f"{_SERIES_URL}/")
        assert resp.status_code == 404

    async def test_422_empty_prices(self, app_client) -> None:
        resp = await app_client.post(f"{_SERIES_URL}/", json={"prices": []})
        assert resp.status_code == 422

    async def test_422_non_numeric_price(self, app_client) -> None:
        resp = await app_client.post(f"{_SERIES_URL}/", json={"prices": [1, "abc"]})
        assert resp.status_code == 422

    @pytest.mark.parametrize("prices", [[True, 5], [1.5, False]])
    async def test_422_boolean_price(self, app_client, prices) -> None:
        resp = await app_client.post(f"{_SERIES_URL}/", json={"prices": prices})
        assert resp.status_code == 422
        resp = await app_client.get(f"{_SERIES_URL}/")
        assert resp.status_code == 404

    async def test_422_over_configured_length(self, app_client) -> None:
        app.dependency_overrides[get_app_settings] = lambda: Settings(MAX_SERIES_LENGTH=3)
        resp = await app_client.post(f"{_SERIES_URL}/", json={"prices": [1, 2, 3, 4]})
        assert resp.status_code == 422
        assert resp.json() == {
            "detail": "Series has 4 prices; the limit is 3.",
            "error": "invalid_input",
        }

    async def test_404_body_names_error_kind(self, app_client) -> None:
        for resp in (
            await app_client.get(f"{_SERIES_URL}/"),
            await app_client.delete(f"{_SERIES_URL}/"),
        ):
            assert resp.status_code == 404
            assert resp.json()["error"] == "series_not_loaded"

    async def test_error_body_documented_in_openapi(self, app_client) -> None:
        schema = (await app_client.get("/openapi.json")).json()
        assert "ErrorOut" in schema["components"]["schemas"]
        responses = schema["paths"]["/api/v1/series/sum"]["get"]["responses"]
        assert responses["404"]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/ErrorOut"
        }


# ── Range queries and updates ─────────────────────────────────────────────────


class TestRangeQueries:
    async def test_reference_scenario(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_SERIES_URL}/sum?left=0&right=3")
        assert resp.json() == {"operation": "sum", "left": 0, "right": 3, "value": 460}
        resp = await loaded_client.get(f"{_SERIES_URL}/min?left=1&right=4")
        assert resp.json()["value"] == 90
        resp = await loaded_client.get(f"{_SERIES_URL}/max?left=2&right=5")
        assert resp.json()["value"] == 200

    async def test_update_then_query(self, loaded_client) -> None:
        resp = await loaded_client.put(f"{_SERIES_URL}/prices/2", json={"value": 95})
        assert resp.status_code == 200
        assert resp.json()["prices"][2] == 95

        resp = await loaded_client.get(f"{_SERIES_URL}/sum?left=0&right=3")
        assert resp.json()["value"] == 465
        resp = await loaded_client.get(f"{_SERIES_URL}/min?left=1&right=4")
        assert resp.json()["value"] == 95

    @pytest.mark.parametrize("left,right", [(-1, 2), (3, 2), (0, 6)])
    async def test_422_invalid_range(self, loaded_client, left, right) -> None:
        for op in ("sum", "min", "max"):
            resp = await loaded_client.get(
                f"{_SERIES_URL}/{op}?left={left}&right={right}"
            )
            assert resp.status_code == 422
            assert resp.json()["error"] == "invalid_range"

    async def test_422_update_out_of_range(self, loaded_client) -> None:
        resp = await loaded_client.put(f"{_SERIES_URL}/prices/6", json={"value": 1})
        assert resp.status_code == 422
        assert resp.json()["error"] == "index_out_of_range"
        resp = await loaded_client.get(f"{_SERIES_URL}/")
        assert resp.json()["prices"] == _PRICES

    async def test_422_boolean_update(self, loaded_client) -> None:
        resp = await loaded_client.put(f"{_SERIES_URL}/prices/0", json={"value": True})
        assert resp.status_code == 422
        resp = await loaded_client.get(f"{_SERIES_URL}/")
        assert resp.json()["prices"] == _PRICES

    async def test_422_missing_bounds(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_SERIES_URL}/sum?left=0")
        assert resp.status_code == 422


# ── Analytics ─────────────────────────────────────────────────────────────────


class TestAnalytics:
    async def test_average(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/average?left=0&right=5")
        assert resp.status_code == 200
        assert resp.json()["value"] == pytest.approx(123.33, abs=0.005)

    async def test_difference_and_std(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/difference?left=0&right=5")
        assert resp.json()["value"] == 120
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/std?left=1&right=2")
        assert resp.json()["value"] == pytest.approx(15.0)

    async def test_growth_and_volatility(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/growth?left=0&right=3")
        assert resp.json()["value"] == pytest.approx(50.0)
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/volatility?left=0&right=0")
        assert resp.json()["value"] == 0.0

    async def test_profit(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/profit?left=0&right=5")
        assert resp.json()["value"] == 110

    async def test_422_single_day_profit(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/profit?left=2&right=2")
        assert resp.status_code == 422
        assert resp.json()["error"] == "degenerate_operation"

    async def test_stability_uses_default_threshold(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/stability?left=0&right=5")
        body = resp.json()
        assert body["threshold"] == Settings().DEFAULT_STABILITY_THRESHOLD
        assert body["is_stable"] is False

    async def test_stability_explicit_threshold(self, loaded_client) -> None:
        resp = await loaded_client.get(
            f"{_ANALYTICS_URL}/stability?left=0&right=5&threshold=100"
        )
        assert resp.json()["is_stable"] is True

    async def test_summary_single_day(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/summary?left=4&right=4")
        assert resp.status_code == 200
        body = resp.json()
        assert body["sum"] == 200
        assert body["best_profit"] is None
        assert body["growth_percent"] == 0.0

    async def test_sma_and_ema(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/sma?window=1")
        assert resp.json() == {"kind": "sma", "window": 1, "values": _PRICES}
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/ema?window=3")
        assert resp.json()["values"] == pytest.approx([100, 110, 100, 125, 162.5, 121.25])

    async def test_default_window(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/sma")
        assert resp.json()["window"] == Settings().DEFAULT_WINDOW

    async def test_422_zero_window(self, loaded_client) -> None:
        resp = await loaded_client.get(f"{_ANALYTICS_URL}/ema?window=0")
        assert resp.status_code == 422
        assert resp.json()["error"] == "invalid_input"

    async def test_crossovers(self, app_client) -> None:
        await app_client.post(
            f"{_SERIES_URL}/", json={"prices": [10, 10, 10, 20, 30, 5, 5, 50]}
        )
        resp = await app_client.get(f"{_ANALYTICS_URL}/crossovers?window=3")
        assert resp.status_code == 200
        signals = resp.json()["signals"]
        assert [(s["index"], s["kind"]) for s in signals] == [(5, "buy"), (7, "sell")]

    async def test_predict(self, app_client) -> None:
        await app_client.post(f"{_SERIES_URL}/", json={"prices": [150, 160, 168, 175]})
        resp = await app_client.get(f"{_ANALYTICS_URL}/predict")
        assert resp.json() == {"last_price": 175, "predicted_price": 182}

    async def test_404_analytics_without_series(self, app_client) -> None:
        resp = await app_client.get(f"{_ANALYTICS_URL}/predict")
        assert resp.status_code == 404
