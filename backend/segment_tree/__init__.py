"""
segment_tree — Range sum / min / max over a daily price series.

Public API
----------
    from segment_tree import RangeTree
    from segment_tree import SeriesError, InvalidInput, InvalidRange
"""

from segment_tree.aggregates import MAX, MIN, SUM, Aggregate
from segment_tree.exceptions import (
    DegenerateOperation,
    IndexOutOfRange,
    InvalidInput,
    InvalidRange,
    SeriesError,
)
from segment_tree.tree import RangeTree

__all__ = [
    "Aggregate",
    "SUM",
    "MIN",
    "MAX",
    "RangeTree",
    "SeriesError",
    "InvalidInput",
    "IndexOutOfRange",
    "InvalidRange",
    "DegenerateOperation",
]
