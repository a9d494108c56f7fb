"""
segment_tree/exceptions.py
───────────────────────────
Error kinds raised by the range tree and the analytics built on it.

Every error is detected before any state is touched, so a caller that
catches one can keep using the tree as if the call never happened.

Hierarchy
---------
    SeriesError (ValueError)
    ├── InvalidInput         empty / non-finite prices, non-positive window
    ├── IndexOutOfRange      update index outside [0, n-1]
    ├── InvalidRange         l > r, or a bound outside [0, n-1]
    └── DegenerateOperation  single-day profit, zero reference price
"""


class SeriesError(ValueError):
    """Base class for every error reported by the price series core."""

    kind = "series_error"


class InvalidInput(SeriesError):
    """Construction data or a call parameter is unusable."""

    kind = "invalid_input"


class IndexOutOfRange(SeriesError):
    """A point update addressed a day outside the series."""

    kind = "index_out_of_range"

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(
            f"index {index} is outside the series bounds [0, {length - 1}]"
        )


class InvalidRange(SeriesError):
    """A query range is reversed or reaches outside the series."""

    kind = "invalid_range"

    def __init__(self, left: int, right: int, length: int) -> None:
        self.left = left
        self.right = right
        self.length = length
        super().__init__(
            f"range [{left}, {right}] is invalid for a series of length {length}; "
            f"need 0 <= l <= r <= {length - 1}"
        )


class DegenerateOperation(SeriesError):
    """The range is valid but the requested measure is undefined on it."""

    kind = "degenerate_operation"
