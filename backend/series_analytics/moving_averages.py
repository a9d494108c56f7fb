"""
series_analytics/moving_averages.py
────────────────────────────────────
Smoothed views of the full price series and the crossover signals
derived from them.

Each call rebuilds its result from the tree's current prices; nothing
is cached between calls.

Functions
---------
simple_moving_average
    Trailing mean over ``window`` days, truncated at the first day.
exponential_moving_average
    Fixed-weight EMA seeded with the first price, ``k = 2 / (window + 1)``.
crossover_signals
    Buy/sell events where the SMA crosses the EMA.
"""

import logging
from dataclasses import dataclass
from typing import List, Literal

import pandas as pd

from segment_tree import InvalidInput, RangeTree

logger = logging.getLogger(__name__)

SignalKind = Literal["buy", "sell"]


@dataclass(frozen=True)
class CrossoverSignal:
    """
    One SMA/EMA crossover event.

    Attributes:
        index: Day on which the crossing completes.
        kind:  ``"buy"`` when the SMA rises to or above the EMA,
               ``"sell"`` when it falls to or below it.
        price: Price on that day.
        sma:   SMA value on that day.
        ema:   EMA value on that day.
    """

    index: int
    kind: SignalKind
    price: float
    sma: float
    ema: float


def _check_window(window: int) -> None:
    if isinstance(window, bool) or not isinstance(window, int) or window <= 0:
        raise InvalidInput(f"window must be a positive integer, got {window!r}")


def _price_series(tree: RangeTree) -> pd.Series:
    return pd.Series(tree.values(), dtype=float, name="close")


def simple_moving_average(tree: RangeTree, window: int) -> List[float]:
    """
    Trailing simple moving average for every day of the series.

    Day ``i`` averages the last ``min(window, i + 1)`` prices, so the
    early days use a shorter window instead of being dropped.

    Raises:
        InvalidInput: ``window`` is not a positive integer.
    """
    _check_window(window)
    sma = _price_series(tree).rolling(window=window, min_periods=1).mean()
    return sma.tolist()


def exponential_moving_average(tree: RangeTree, window: int) -> List[float]:
    """
    Exponential moving average for every day of the series.

    ema[0] = price[0]
    ema[i] = price[i]·k + ema[i−1]·(1 − k),  k = 2 / (window + 1)

    Raises:
        InvalidInput: ``window`` is not a positive integer.
    """
    _check_window(window)
    ema = _price_series(tree).ewm(span=window, adjust=False).mean()
    return ema.tolist()


def crossover_signals(tree: RangeTree, window: int) -> List[CrossoverSignal]:
    """
    Scan adjacent days for SMA/EMA crossings.

    buy:  SMA below EMA on day i−1, at or above it on day i.
    sell: SMA above EMA on day i−1, at or below it on day i.

    Returns:
        Signals ordered by day; empty for a single-day series.

    Raises:
        InvalidInput: ``window`` is not a positive integer.
    """
    _check_window(window)
    if len(tree) < 2:
        return []

    sma = simple_moving_average(tree, window)
    ema = exponential_moving_average(tree, window)

    signals: List[CrossoverSignal] = []
    for i in range(1, len(tree)):
        kind: SignalKind
        if sma[i - 1] < ema[i - 1] and sma[i] >= ema[i]:
            kind = "buy"
        elif sma[i - 1] > ema[i - 1] and sma[i] <= ema[i]:
            kind = "sell"
        else:
            continue
        signals.append(
            CrossoverSignal(index=i, kind=kind, price=tree[i], sma=sma[i], ema=ema[i])
        )

    logger.debug("Found %d crossover signals for window=%d", len(signals), window)
    return signals
