"""
segment_tree/aggregates.py
───────────────────────────
The three aggregate monoids stored in every tree node.

Each aggregate pairs an associative ``combine`` with its identity
element.  The tree uses the same pair at build, update and query time,
so a node's value is always ``combine(left, right)`` of its children.
"""

import math
from typing import Callable, NamedTuple, Tuple, Union

Number = Union[int, float]


class Aggregate(NamedTuple):
    """An associative combine operation plus its identity element."""

    name: str
    combine: Callable[[Number, Number], Number]
    identity: Number


def _add(a: Number, b: Number) -> Number:
    return a + b


SUM = Aggregate("sum", _add, 0)
MIN = Aggregate("min", min, math.inf)
MAX = Aggregate("max", max, -math.inf)

ALL_AGGREGATES: Tuple[Aggregate, ...] = (SUM, MIN, MAX)
