"""
schemas/series.py
──────────────────
Pydantic schemas for the series and analytics endpoints:

  /api/v1/series/...     → ``SeriesCreate`` / ``PriceUpdate`` / ``SeriesOut``
                           / ``RangeValueOut``
  /api/v1/analytics/...  → ``RangeValueOut`` / ``StabilityOut`` /
                           ``RangeSummary`` / ``MovingAverageOut`` /
                           ``CrossoversOut`` / ``PredictionOut``
"""

import math
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, field_validator

# Strict so JSON booleans are rejected instead of coerced to 0 / 1.
Price = Union[StrictInt, StrictFloat]


def _finite(v: float) -> float:
    if not math.isfinite(v):
        raise ValueError("prices must be finite numbers")
    return v


# ── Requests ──────────────────────────────────────────────────────────────────


class SeriesCreate(BaseModel):
    """Request body that loads (or replaces) the active price series."""

    prices: List[Price] = Field(
        ...,
        min_length=1,
        description="Daily prices, oldest first. Day 0 is the first entry.",
    )

    @field_validator("prices")
    @classmethod
    def check_finite(cls, v: List[Price]) -> List[Price]:
        for p in v:
            _finite(p)
        return v


class PriceUpdate(BaseModel):
    """Request body for a single-day price overwrite."""

    value: Price

    @field_validator("value")
    @classmethod
    def check_finite(cls, v: Price) -> Price:
        return _finite(v)


# ── Series responses ──────────────────────────────────────────────────────────


class SeriesOut(BaseModel):
    """The active price series."""

    length: int
    prices: List[Price]


class RangeValueOut(BaseModel):
    """
    A single numeric answer over an inclusive day range.

    Attributes:
        operation: Which measure was computed (``sum``, ``average``, ...).
        left:      First day of the range.
        right:     Last day of the range.
        value:     The result.
    """

    operation: str
    left: int
    right: int
    value: Price


# ── Analytics responses ───────────────────────────────────────────────────────


class StabilityOut(BaseModel):
    """Stability classification for a range."""

    left: int
    right: int
    threshold: float
    is_stable: bool


class RangeSummary(BaseModel):
    """All range statistics at once; undefined measures are ``None``."""

    left: int
    right: int
    days: int
    sum: Price
    min: Price
    max: Price
    average: float
    difference: Price
    std_deviation: float
    growth_percent: Optional[float]
    volatility_index: Optional[float]
    is_stable: bool
    stability_threshold: float
    best_profit: Optional[float]


class MovingAverageOut(BaseModel):
    """A smoothed series aligned day-for-day with the prices."""

    kind: Literal["sma", "ema"]
    window: int
    values: List[float]


class CrossoverOut(BaseModel):
    """One SMA/EMA crossover event."""

    index: int
    kind: Literal["buy", "sell"]
    price: float
    sma: float
    ema: float


class CrossoversOut(BaseModel):
    """Crossover events for a window, ordered by day."""

    window: int
    signals: List[CrossoverOut]


class PredictionOut(BaseModel):
    """Next-day price extrapolated from the latest slope."""

    last_price: Price
    predicted_price: Price


class ErrorOut(BaseModel):
    """Body of every 404 / 422 raised by the series store or the core."""

    detail: str
    error: str
