"""
segment_tree/tree.py
─────────────────────
In-memory range tree over a fixed-length price series.

The tree covers day indices ``[0, n-1]`` and keeps sum, minimum and
maximum for every node in three flat arrays of size ``4n``.  Node ``1``
is the root; node ``i`` has children ``2i`` and ``2i + 1``.  A node
covering ``[start, end]`` splits at ``mid = (start + end) // 2``.

Complexity
----------
    construct       O(n)
    update          O(log n)
    query_*         O(log n)

Usage
-----
    from segment_tree import RangeTree

    tree = RangeTree([100, 120, 90, 150, 200, 80])
    tree.query_sum(0, 3)      # 460
    tree.update(2, 95)
    tree.query_min(1, 4)      # 95
"""

import logging
import math
import numbers
from typing import Dict, Iterable, List

from segment_tree.aggregates import ALL_AGGREGATES, MAX, MIN, SUM, Aggregate, Number
from segment_tree.exceptions import IndexOutOfRange, InvalidInput, InvalidRange

logger = logging.getLogger(__name__)


def _coerce_price(value: object, position: str) -> Number:
    """
    Return ``value`` as a plain ``int`` or ``float``.

    Integers stay integers so sums over integer series remain exact.

    Raises:
        InvalidInput: Non-numeric, boolean, NaN or infinite value.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInput(f"price at {position} must be a real number, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    coerced = float(value)
    if not math.isfinite(coerced):
        raise InvalidInput(f"price at {position} must be finite, got {coerced!r}")
    return coerced


class RangeTree:
    """
    Segment tree answering range sum / min / max with point updates.

    The tree owns a private copy of the seeding prices; later changes to
    the caller's sequence are not observed.

    Args:
        values: Initial prices, oldest day first.  Must be non-empty.

    Raises:
        InvalidInput: Empty sequence or a non-finite / non-numeric price.
    """

    def __init__(self, values: Iterable[Number]) -> None:
        prices = [_coerce_price(v, f"day {i}") for i, v in enumerate(values)]
        if not prices:
            raise InvalidInput("cannot build a range tree from an empty price series")

        self._values: List[Number] = prices
        self._n = len(prices)
        self._nodes: Dict[str, List[Number]] = {
            agg.name: [agg.identity] * (4 * self._n) for agg in ALL_AGGREGATES
        }
        self._build(1, 0, self._n - 1)
        logger.debug("Built range tree over %d prices", self._n)

    # ── construction ──────────────────────────────────────────────────────

    def _build(self, node: int, start: int, end: int) -> None:
        if start == end:
            for agg in ALL_AGGREGATES:
                self._nodes[agg.name][node] = self._values[start]
            return
        mid = (start + end) // 2
        self._build(2 * node, start, mid)
        self._build(2 * node + 1, mid + 1, end)
        self._pull(node)

    def _pull(self, node: int) -> None:
        """Recombine ``node`` from its two children for every aggregate."""
        for agg in ALL_AGGREGATES:
            column = self._nodes[agg.name]
            column[node] = agg.combine(column[2 * node], column[2 * node + 1])

    # ── point update ──────────────────────────────────────────────────────

    def update(self, index: int, value: Number) -> None:
        """
        Replace the price on day ``index`` and refresh its ancestors.

        Args:
            index: Day to overwrite, ``0 <= index <= n-1``.
            value: New price.

        Raises:
            IndexOutOfRange: ``index`` is outside the series.
            InvalidInput:    ``value`` is not a finite real number.
        """
        if not 0 <= index < self._n:
            raise IndexOutOfRange(index, self._n)
        price = _coerce_price(value, f"day {index}")

        self._values[index] = price
        self._update(1, 0, self._n - 1, index, price)
        logger.debug("Updated day %d to %s", index, price)

    def _update(self, node: int, start: int, end: int, index: int, price: Number) -> None:
        if start == end:
            for agg in ALL_AGGREGATES:
                self._nodes[agg.name][node] = price
            return
        mid = (start + end) // 2
        if index <= mid:
            self._update(2 * node, start, mid, index, price)
        else:
            self._update(2 * node + 1, mid + 1, end, index, price)
        self._pull(node)

    # ── range queries ─────────────────────────────────────────────────────

    def check_range(self, left: int, right: int) -> None:
        """
        Validate an inclusive day range against the series bounds.

        Raises:
            InvalidRange: Unless ``0 <= left <= right <= n-1``.
        """
        if not 0 <= left <= right < self._n:
            raise InvalidRange(left, right, self._n)

    def query(self, aggregate: Aggregate, left: int, right: int) -> Number:
        """
        Combine ``aggregate`` over days ``left..right`` (inclusive).

        Raises:
            InvalidRange: Range reversed or outside the series.
        """
        self.check_range(left, right)
        return self._query(aggregate, 1, 0, self._n - 1, left, right)

    def _query(
        self, agg: Aggregate, node: int, start: int, end: int, left: int, right: int
    ) -> Number:
        if right < start or end < left:
            return agg.identity
        if left <= start and end <= right:
            return self._nodes[agg.name][node]
        mid = (start + end) // 2
        return agg.combine(
            self._query(agg, 2 * node, start, mid, left, right),
            self._query(agg, 2 * node + 1, mid + 1, end, left, right),
        )

    def query_sum(self, left: int, right: int) -> Number:
        """Sum of prices over days ``left..right``."""
        return self.query(SUM, left, right)

    def query_min(self, left: int, right: int) -> Number:
        """Lowest price over days ``left..right``."""
        return self.query(MIN, left, right)

    def query_max(self, left: int, right: int) -> Number:
        """Highest price over days ``left..right``."""
        return self.query(MAX, left, right)

    # ── raw series access ─────────────────────────────────────────────────

    def __len__(self) -> int:
        return self._n

    def __getitem__(self, index: int) -> Number:
        if not 0 <= index < self._n:
            raise IndexOutOfRange(index, self._n)
        return self._values[index]

    def values(self) -> List[Number]:
        """Return a copy of the full price series."""
        return list(self._values)

    def slice(self, left: int, right: int) -> List[Number]:
        """
        Return a copy of the raw prices on days ``left..right``.

        Raises:
            InvalidRange: Range reversed or outside the series.
        """
        self.check_range(left, right)
        return self._values[left : right + 1]

    def __repr__(self) -> str:
        return f"RangeTree(n={self._n})"
