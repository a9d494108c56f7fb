"""
core/store.py
─────────────
In-memory holder for the single active price series, with a
module-level singleton.

The store is the only place the API keeps state.  It owns one
:class:`~segment_tree.RangeTree` (or none) and a lock; every request
borrows the tree through :meth:`SeriesStore.session`, so point updates
never interleave with reads.

Usage (route handler)
---------------------
    from app.api.dependencies import get_store
    from fastapi import Depends

    @router.get("/")
    def my_route(store = Depends(get_store)):
        with store.session() as tree:
            return tree.query_sum(0, len(tree) - 1)
"""

import logging
import threading
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterable, Iterator, Optional

from segment_tree import RangeTree
from segment_tree.aggregates import Number

logger = logging.getLogger(__name__)


class SeriesNotLoaded(LookupError):
    """Raised when a request needs a series but none has been loaded."""

    kind = "series_not_loaded"

    def __init__(self) -> None:
        super().__init__(
            "No price series loaded. Create one with POST /api/v1/series/."
        )


class SeriesStore:
    """
    Holds at most one price series behind a lock.

    Loading a new series replaces the previous one wholesale; there is
    no history and nothing is persisted.
    """

    def __init__(self) -> None:
        self._tree: Optional[RangeTree] = None
        self._lock = threading.RLock()

    @property
    def loaded(self) -> bool:
        return self._tree is not None

    def load(self, prices: Iterable[Number]) -> RangeTree:
        """
        Build a tree from ``prices`` and make it the active series.

        The previous series survives if construction fails.

        Raises:
            InvalidInput: Empty or non-finite prices.
        """
        tree = RangeTree(prices)
        with self._lock:
            replaced = self._tree is not None
            self._tree = tree
        logger.info(
            "%s price series with %d days", "Replaced" if replaced else "Loaded", len(tree)
        )
        return tree

    def clear(self) -> bool:
        """Drop the active series.  Returns ``False`` if none was loaded."""
        with self._lock:
            had_series = self._tree is not None
            self._tree = None
        if had_series:
            logger.info("Cleared price series")
        return had_series

    @contextmanager
    def session(self) -> Iterator[RangeTree]:
        """
        Borrow the active tree with exclusive access.

        Raises:
            SeriesNotLoaded: No series has been loaded yet.
        """
        with self._lock:
            if self._tree is None:
                raise SeriesNotLoaded()
            yield self._tree


@lru_cache(maxsize=1)
def get_series_store() -> SeriesStore:
    """
    Return the application-wide series store singleton.

    Returns:
        The process-wide :class:`SeriesStore`.
    """
    return SeriesStore()
