"""
app/api/v1/endpoints/series.py
────────────────────────────────
Price series lifecycle and raw range queries.

Routes
------
POST   /api/v1/series/                 Load (or replace) the active series.
GET    /api/v1/series/                 Return the active series.
DELETE /api/v1/series/                 Drop the active series.
PUT    /api/v1/series/prices/{index}   Overwrite one day's price.
GET    /api/v1/series/sum              Range sum     (?left=&right=)
GET    /api/v1/series/min              Range minimum (?left=&right=)
GET    /api/v1/series/max              Range maximum (?left=&right=)

Range bounds are deliberately not constrained here; the tree validates
them and the app maps its errors to 422 responses.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response

from app.api.dependencies import get_app_settings, get_store
from core.config import Settings
from core.store import SeriesNotLoaded, SeriesStore
from schemas.series import PriceUpdate, RangeValueOut, SeriesCreate, SeriesOut
from segment_tree import InvalidInput

logger = logging.getLogger(__name__)
router = APIRouter()

_LEFT = Query(..., description="First day of the range (inclusive, 0-based).")
_RIGHT = Query(..., description="Last day of the range (inclusive, 0-based).")


@router.post(
    "/",
    response_model=SeriesOut,
    status_code=201,
    summary="Load a price series",
)
def create_series(
    body: SeriesCreate,
    store: SeriesStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> SeriesOut:
    """
    Build a range tree from ``body.prices`` and make it the active series.

    Any previously loaded series is replaced.

    Raises:
        InvalidInput: More than ``MAX_SERIES_LENGTH`` prices (422).
    """
    if len(body.prices) > settings.MAX_SERIES_LENGTH:
        raise InvalidInput(
            f"Series has {len(body.prices)} prices; "
            f"the limit is {settings.MAX_SERIES_LENGTH}."
        )
    tree = store.load(body.prices)
    return SeriesOut(length=len(tree), prices=tree.values())


@router.get("/", response_model=SeriesOut, summary="Active price series")
def get_series(store: SeriesStore = Depends(get_store)) -> SeriesOut:
    """Return every price of the active series, oldest first."""
    with store.session() as tree:
        return SeriesOut(length=len(tree), prices=tree.values())


@router.delete("/", status_code=204, summary="Drop the active series")
def delete_series(store: SeriesStore = Depends(get_store)) -> Response:
    """
    Discard the active series.

    Raises:
        SeriesNotLoaded: No series was loaded (404).
    """
    if not store.clear():
        raise SeriesNotLoaded()
    return Response(status_code=204)


@router.put(
    "/prices/{index}",
    response_model=SeriesOut,
    summary="Overwrite one day's price",
)
def update_price(
    index: int,
    body: PriceUpdate,
    store: SeriesStore = Depends(get_store),
) -> SeriesOut:
    """
    Replace the price on day ``index`` and return the updated series.

    An out-of-range ``index`` is rejected before anything changes.
    """
    with store.session() as tree:
        tree.update(index, body.value)
        logger.info("Day %d set to %s", index, body.value)
        return SeriesOut(length=len(tree), prices=tree.values())


@router.get("/sum", response_model=RangeValueOut, summary="Range sum")
def range_sum(
    left: int = _LEFT,
    right: int = _RIGHT,
    store: SeriesStore = Depends(get_store),
) -> RangeValueOut:
    """Sum of prices over days ``left..right``."""
    with store.session() as tree:
        value = tree.query_sum(left, right)
    return RangeValueOut(operation="sum", left=left, right=right, value=value)


@router.get("/min", response_model=RangeValueOut, summary="Range minimum")
def range_min(
    left: int = _LEFT,
    right: int = _RIGHT,
    store: SeriesStore = Depends(get_store),
) -> RangeValueOut:
    """Lowest price over days ``left..right``."""
    with store.session() as tree:
        value = tree.query_min(left, right)
    return RangeValueOut(operation="min", left=left, right=right, value=value)


@router.get("/max", response_model=RangeValueOut, summary="Range maximum")
def range_max(
    left: int = _LEFT,
    right: int = _RIGHT,
    store: SeriesStore = Depends(get_store),
) -> RangeValueOut:
    """Highest price over days ``left..right``."""
    with store.session() as tree:
        value = tree.query_max(left, right)
    return RangeValueOut(operation="max", left=left, right=right, value=value)
