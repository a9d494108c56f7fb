"""
app/main.py
────────────
FastAPI application factory.

All business logic lives in ``segment_tree`` and ``series_analytics``;
routes live in ``app/api/v1/endpoints/``.  This file only wires together
middleware, routers, error translation and lifecycle events.

API Layout
----------
GET    /                               Health check
POST   /api/v1/series/                 Load a price series
GET    /api/v1/series/                 Active series
DELETE /api/v1/series/                 Drop the active series
PUT    /api/v1/series/prices/{index}   Point update
GET    /api/v1/series/{sum,min,max}    Range aggregates
GET    /api/v1/analytics/...           Derived analytics

OpenAPI docs
------------
- Swagger UI:  http://localhost:8000/docs
- ReDoc:       http://localhost:8000/redoc
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.router import api_router
from core.config import get_settings
from core.log_config import configure_logging
from core.store import SeriesNotLoaded, get_series_store
from schemas.series import ErrorOut
from segment_tree import SeriesError

logger = logging.getLogger(__name__)


# ── Lifespan ──────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application startup and shutdown logic.

    Startup:  Configure logging and load ``SEED_PRICES`` when set.
    Shutdown: Nothing to close; the series lives only in memory.
    """
    settings = get_settings()
    configure_logging(settings)
    logger.info(
        "Starting %s v%s (debug=%s)",
        settings.APP_TITLE,
        settings.APP_VERSION,
        settings.DEBUG,
    )
    seed = settings.seed_prices
    if seed:
        get_series_store().load(seed)

    yield

    logger.info("Shutting down %s", settings.APP_TITLE)


# ── App factory ───────────────────────────────────────────────────────────────

settings = get_settings()

app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    description=settings.APP_DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Error translation ─────────────────────────────────────────────────────────


@app.exception_handler(SeriesError)
async def series_error_handler(request: Request, exc: SeriesError) -> JSONResponse:
    """Core rejections become 422 with the error kind alongside the message."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    body = ErrorOut(detail=str(exc), error=exc.kind)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(SeriesNotLoaded)
async def series_not_loaded_handler(request: Request, exc: SeriesNotLoaded) -> JSONResponse:
    body = ErrorOut(detail=str(exc), error=exc.kind)
    return JSONResponse(status_code=404, content=body.model_dump())


# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(api_router, prefix="/api/v1")

# ── Root health-check ─────────────────────────────────────────────────────────


@app.get("/", tags=["health"], summary="Health check")
def health_check() -> dict:
    """
    Lightweight liveness check.

    Returns:
        Status, current API version and whether a series is loaded.
    """
    return {
        "status": "ok",
        "version": settings.APP_VERSION,
        "series_loaded": get_series_store().loaded,
    }
