# src/threadboard/main.py
"""Main entry point for the Threadboard application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from threadboard.api.v1 import (
    boards_router,
    bookmarks_router,
    feed_router,
    posts_router,
    users_router,
    votes_router,
)
from threadboard.core.errors import ThreadboardError
from threadboard.core.logging import configure_logging
from threadboard.core.settings import settings
from threadboard.services.cache import build_cache_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the cache store on startup and close it on shutdown."""
    configure_logging()
    cache = getattr(app.state, "cache", None) or build_cache_store(settings)
    cache.connect()
    app.state.cache = cache
    logger.info("Cache backend %s ready", type(cache).__name__)
    try:
        yield
    finally:
        cache.close()
        app.state.cache = None


# Initialize FastAPI app
app = FastAPI(
    title="Threadboard API",
    description="Threaded discussion boards with votes, bookmarks and ranked feeds",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)


@app.exception_handler(ThreadboardError)
async def handle_domain_error(request: Request, exc: ThreadboardError) -> JSONResponse:
    """Render domain errors as ``{"detail": ...}`` with their status code."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Include API routers
app.include_router(posts_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(bookmarks_router, prefix="/api/v1")
app.include_router(feed_router, prefix="/api/v1")
app.include_router(boards_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Threadboard API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("threadboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
