"""
app/api/v1/endpoints/analytics.py
───────────────────────────────────
Derived price analytics over the active series.

Routes
------
GET /api/v1/analytics/average      Mean price           (?left=&right=)
GET /api/v1/analytics/difference   Max − min            (?left=&right=)
GET /api/v1/analytics/std          Population std-dev   (?left=&right=)
GET /api/v1/analytics/growth       Percent change       (?left=&right=)
GET /api/v1/analytics/volatility   Std-dev / average %  (?left=&right=)
GET /api/v1/analytics/profit       Best buy → sell gain (?left=&right=)
GET /api/v1/analytics/stability    Stable?              (?left=&right=&threshold=)
GET /api/v1/analytics/summary      All of the above     (?left=&right=&threshold=)
GET /api/v1/analytics/sma          Simple moving average    (?window=)
GET /api/v1/analytics/ema          Exponential moving avg.  (?window=)
GET /api/v1/analytics/crossovers   SMA/EMA crossing events  (?window=)
GET /api/v1/analytics/predict      Next-day extrapolation

Error codes
-----------
404  No series loaded.
422  Range or window rejected by the core, or an undefined measure
     (e.g. growth from a zero price, profit over one day).
"""

import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_app_settings, get_store
from core.config import Settings
from core.store import SeriesStore
from schemas.series import (
    CrossoverOut,
    CrossoversOut,
    MovingAverageOut,
    PredictionOut,
    RangeSummary,
    RangeValueOut,
    StabilityOut,
)
from segment_tree import RangeTree
from series_analytics import metrics
from series_analytics import moving_averages as ma

logger = logging.getLogger(__name__)
router = APIRouter()

_LEFT = Query(..., description="First day of the range (inclusive, 0-based).")
_RIGHT = Query(..., description="Last day of the range (inclusive, 0-based).")
_THRESHOLD = Query(
    default=None,
    ge=0.0,
    description="Stability cut-off in percent of the average. "
                "Defaults to DEFAULT_STABILITY_THRESHOLD.",
)
_WINDOW = Query(
    default=None,
    description="Moving-average window in days. Defaults to DEFAULT_WINDOW.",
)


# ── helpers ───────────────────────────────────────────────────────────────────


def _range_metric(
    store: SeriesStore,
    operation: str,
    fn: Callable[[RangeTree, int, int], float],
    left: int,
    right: int,
) -> RangeValueOut:
    """Evaluate a ``(tree, left, right)`` metric under the store lock."""
    with store.session() as tree:
        value = fn(tree, left, right)
    return RangeValueOut(operation=operation, left=left, right=right, value=value)


# ── range metrics ─────────────────────────────────────────────────────────────


@router.get("/average", response_model=RangeValueOut, summary="Average price")
def average(
    left: int = _LEFT, right: int = _RIGHT, store: SeriesStore = Depends(get_store)
) -> RangeValueOut:
    return _range_metric(store, "average", metrics.average, left, right)


@router.get("/difference", response_model=RangeValueOut, summary="Price spread")
def difference(
    left: int = _LEFT, right: int = _RIGHT, store: SeriesStore = Depends(get_store)
) -> RangeValueOut:
    return _range_metric(store, "difference", metrics.difference, left, right)


@router.get("/std", response_model=RangeValueOut, summary="Standard deviation")
def standard_deviation(
    left: int = _LEFT, right: int = _RIGHT, store: SeriesStore = Depends(get_store)
) -> RangeValueOut:
    return _range_metric(store, "std_deviation", metrics.standard_deviation, left, right)


@router.get("/growth", response_model=RangeValueOut, summary="Growth percent")
def growth(
    left: int = _LEFT, right: int = _RIGHT, store: SeriesStore = Depends(get_store)
) -> RangeValueOut:
    return _range_metric(store, "growth_percent", metrics.growth_percent, left, right)


@router.get("/volatility", response_model=RangeValueOut, summary="Volatility index")
def volatility(
    left: int = _LEFT, right: int = _RIGHT, store: SeriesStore = Depends(get_store)
) -> RangeValueOut:
    return _range_metric(store, "volatility_index", metrics.volatility_index, left, right)


@router.get("/profit", response_model=RangeValueOut, summary="Best buy/sell profit")
def profit(
    left: int = _LEFT, right: int = _RIGHT, store: SeriesStore = Depends(get_store)
) -> RangeValueOut:
    """
    Best gain from buying on one day and selling on a later day.

    Needs ``left < right``; a single day is rejected with 422.
    """
    return _range_metric(store, "best_profit", metrics.best_buy_sell_profit, left, right)


@router.get("/stability", response_model=StabilityOut, summary="Stability check")
def stability(
    left: int = _LEFT,
    right: int = _RIGHT,
    threshold: Optional[float] = _THRESHOLD,
    store: SeriesStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> StabilityOut:
    """
    Report whether the range's spread stays within ``threshold`` percent
    of its average.  Zero-average ranges are never stable.
    """
    if threshold is None:
        threshold = settings.DEFAULT_STABILITY_THRESHOLD
    with store.session() as tree:
        stable = metrics.is_stable(tree, left, right, threshold)
    return StabilityOut(left=left, right=right, threshold=threshold, is_stable=stable)


@router.get("/summary", response_model=RangeSummary, summary="All range statistics")
def summary(
    left: int = _LEFT,
    right: int = _RIGHT,
    threshold: Optional[float] = _THRESHOLD,
    store: SeriesStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> RangeSummary:
    """
    Every range statistic in one response.

    Measures that are undefined on the range come back as ``null``
    instead of failing the whole request.
    """
    if threshold is None:
        threshold = settings.DEFAULT_STABILITY_THRESHOLD
    with store.session() as tree:
        stats = metrics.range_summary(tree, left, right, threshold)
    return RangeSummary(**stats)


# ── whole-series analytics ────────────────────────────────────────────────────


@router.get("/sma", response_model=MovingAverageOut, summary="Simple moving average")
def sma(
    window: Optional[int] = _WINDOW,
    store: SeriesStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> MovingAverageOut:
    """Trailing SMA for every day; early days use a truncated window."""
    window = window if window is not None else settings.DEFAULT_WINDOW
    with store.session() as tree:
        values = ma.simple_moving_average(tree, window)
    return MovingAverageOut(kind="sma", window=window, values=values)


@router.get("/ema", response_model=MovingAverageOut, summary="Exponential moving average")
def ema(
    window: Optional[int] = _WINDOW,
    store: SeriesStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> MovingAverageOut:
    """EMA seeded with the first price, ``k = 2 / (window + 1)``."""
    window = window if window is not None else settings.DEFAULT_WINDOW
    with store.session() as tree:
        values = ma.exponential_moving_average(tree, window)
    return MovingAverageOut(kind="ema", window=window, values=values)


@router.get("/crossovers", response_model=CrossoversOut, summary="SMA/EMA crossovers")
def crossovers(
    window: Optional[int] = _WINDOW,
    store: SeriesStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> CrossoversOut:
    """Buy/sell signals where the SMA crosses the EMA."""
    window = window if window is not None else settings.DEFAULT_WINDOW
    with store.session() as tree:
        signals = ma.crossover_signals(tree, window)
    logger.info("Returned %d crossover signals (window=%d)", len(signals), window)
    return CrossoversOut(
        window=window,
        signals=[
            CrossoverOut(index=s.index, kind=s.kind, price=s.price, sma=s.sma, ema=s.ema)
            for s in signals
        ],
    )


@router.get("/predict", response_model=PredictionOut, summary="Next-day prediction")
def predict(store: SeriesStore = Depends(get_store)) -> PredictionOut:
    """
    Linear one-step extrapolation of the latest slope.

    A one-day series predicts its only price.
    """
    with store.session() as tree:
        last = tree[len(tree) - 1]
        predicted = metrics.predict_next_price(tree)
    return PredictionOut(last_price=last, predicted_price=predicted)
