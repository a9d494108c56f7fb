"""
app/api/v1/router.py
─────────────────────
Aggregates the v1 endpoint routers under one ``APIRouter``.

Every route documents the two error bodies produced by the handlers in
``app/main.py``: 404 when no series is loaded, 422 when the core rejects
a range, index, window or undefined measure.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import analytics, series
from schemas.series import ErrorOut

_ERROR_RESPONSES = {
    404: {"model": ErrorOut, "description": "No price series loaded"},
    422: {"model": ErrorOut, "description": "Rejected by the series core"},
}

api_router = APIRouter(responses=_ERROR_RESPONSES)
api_router.include_router(series.router, prefix="/series", tags=["series"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
