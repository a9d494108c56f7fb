"""
Pydantic schemas for request/response serialization.

Separate from the core (segment_tree, series_analytics) and routes (HTTP layer).
"""

from schemas.series import (
    CrossoverOut,
    CrossoversOut,
    ErrorOut,
    MovingAverageOut,
    PredictionOut,
    PriceUpdate,
    RangeSummary,
    RangeValueOut,
    SeriesCreate,
    SeriesOut,
    StabilityOut,
)

__all__ = [
    "SeriesCreate",
    "PriceUpdate",
    "SeriesOut",
    "RangeValueOut",
    "StabilityOut",
    "RangeSummary",
    "MovingAverageOut",
    "CrossoverOut",
    "CrossoversOut",
    "PredictionOut",
    "ErrorOut",
]
