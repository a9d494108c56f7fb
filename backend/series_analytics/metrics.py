"""
series_analytics/metrics.py
────────────────────────────
Range statistics derived from a :class:`~segment_tree.RangeTree`.

Aggregate-backed metrics (average, difference, stability) are answered
from the tree in O(log n).  Metrics that need every price in the range
(standard deviation, profit scan) read the raw series from the tree.

Every function validates ``[left, right]`` exactly like the tree's own
queries and raises :class:`~segment_tree.InvalidRange` on violation.

Range metrics
-------------
average, difference, standard_deviation, growth_percent, is_stable,
volatility_index, best_buy_sell_profit

Whole-series metrics
--------------------
predict_next_price

Convenience wrapper
-------------------
range_summary — every range metric in one dict.
"""

import logging
from typing import Any, Dict, Optional

import numpy as np

from segment_tree import DegenerateOperation, RangeTree
from segment_tree.aggregates import Number

logger = logging.getLogger(__name__)

# Percent spread at or below which a range counts as stable.
DEFAULT_STABILITY_THRESHOLD = 10.0


# ── Aggregate-backed metrics ──────────────────────────────────────────────────


def average(tree: RangeTree, left: int, right: int) -> float:
    """Mean price over days ``left..right``."""
    return tree.query_sum(left, right) / (right - left + 1)


def difference(tree: RangeTree, left: int, right: int) -> Number:
    """Volatility range: highest minus lowest price over ``left..right``."""
    return tree.query_max(left, right) - tree.query_min(left, right)


def is_stable(
    tree: RangeTree,
    left: int,
    right: int,
    threshold: float = DEFAULT_STABILITY_THRESHOLD,
) -> bool:
    """
    Classify a range as stable when its spread is small relative to its mean.

    stable ⇔ (difference / |average|) × 100 ≤ threshold

    The spread is measured against the magnitude of the average, so a
    negative-mean range is judged by how wide it is, not by its sign.
    A range whose average is zero has no meaningful relative spread and
    is reported as not stable.

    Args:
        tree:      Price tree.
        left:      First day (inclusive).
        right:     Last day (inclusive).
        threshold: Maximum spread, in percent of the average.
    """
    mean = average(tree, left, right)
    if mean == 0:
        logger.debug("Range [%d, %d] has zero average; reporting unstable", left, right)
        return False
    return (difference(tree, left, right) / abs(mean)) * 100.0 <= threshold


# ── Raw-series metrics ────────────────────────────────────────────────────────


def standard_deviation(tree: RangeTree, left: int, right: int) -> float:
    """
    Population standard deviation of prices over ``left..right``.

    Flat ranges return exactly ``0.0``.
    """
    if difference(tree, left, right) == 0:
        return 0.0
    window = np.asarray(tree.slice(left, right), dtype=float)
    mean = average(tree, left, right)
    return float(np.sqrt(np.mean((window - mean) ** 2)))


def growth_percent(tree: RangeTree, left: int, right: int) -> float:
    """
    Percent change from the price on ``left`` to the price on ``right``.

    Raises:
        DegenerateOperation: The starting price is zero.
    """
    tree.check_range(left, right)
    start, end = tree[left], tree[right]
    if start == 0:
        raise DegenerateOperation(
            f"growth from day {left} is undefined: starting price is zero"
        )
    return (end - start) / start * 100.0


def volatility_index(tree: RangeTree, left: int, right: int) -> float:
    """
    Coefficient of variation in percent: std-dev / |average| × 100.

    A flat range has zero volatility regardless of its average.

    Raises:
        DegenerateOperation: Prices vary but average to zero.
    """
    if difference(tree, left, right) == 0:
        return 0.0
    mean = average(tree, left, right)
    if mean == 0:
        raise DegenerateOperation(
            f"volatility index over [{left}, {right}] is undefined: average price is zero"
        )
    return standard_deviation(tree, left, right) / abs(mean) * 100.0


def best_buy_sell_profit(tree: RangeTree, left: int, right: int) -> Number:
    """
    Best profit from one buy followed by a later sell within ``left..right``.

    Single forward pass: track the cheapest price seen so far and the best
    gain against it.  Returns ``0`` when no profitable pair exists.

    Raises:
        InvalidRange:        Range reversed or outside the series.
        DegenerateOperation: ``left == right``; one day has no buy/sell pair.
    """
    prices = tree.slice(left, right)
    if left == right:
        raise DegenerateOperation(
            f"day {left} alone cannot produce a buy/sell pair; need l < r"
        )

    lowest = prices[0]
    best: Number = 0
    for price in prices[1:]:
        best = max(best, price - lowest)
        lowest = min(lowest, price)
    return best


def predict_next_price(tree: RangeTree) -> Number:
    """
    Extrapolate tomorrow's price from the most recent one-day slope.

    next = last + (last − previous)

    A single-day series has no slope; its only price is returned.
    """
    n = len(tree)
    last = tree[n - 1]
    if n < 2:
        return last
    return last + (last - tree[n - 2])


# ── Convenience aggregator ────────────────────────────────────────────────────


def _or_none(fn, *args) -> Optional[float]:
    """Evaluate a metric, mapping an undefined result to ``None``."""
    try:
        return round(fn(*args), 4)
    except DegenerateOperation as exc:
        logger.debug("%s undefined: %s", fn.__name__, exc)
        return None


def range_summary(
    tree: RangeTree,
    left: int,
    right: int,
    threshold: float = DEFAULT_STABILITY_THRESHOLD,
) -> Dict[str, Any]:
    """
    Aggregate every range metric for ``left..right`` into a single dict.

    Measures that are undefined on the range (growth from a zero price,
    profit over a single day, ...) are reported as ``None``.

    Returns:
        Dict matching the ``RangeSummary`` schema fields.
    """
    tree.check_range(left, right)
    return {
        "left": left,
        "right": right,
        "days": right - left + 1,
        "sum": tree.query_sum(left, right),
        "min": tree.query_min(left, right),
        "max": tree.query_max(left, right),
        "average": round(average(tree, left, right), 4),
        "difference": difference(tree, left, right),
        "std_deviation": round(standard_deviation(tree, left, right), 4),
        "growth_percent": _or_none(growth_percent, tree, left, right),
        "volatility_index": _or_none(volatility_index, tree, left, right),
        "is_stable": is_stable(tree, left, right, threshold),
        "stability_threshold": threshold,
        "best_profit": _or_none(best_buy_sell_profit, tree, left, right),
    }
