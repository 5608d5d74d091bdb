# src/loop_forum/main.py
"""Main entry point for the Loop forum application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from loop_forum.api.v1 import (
    auth_router,
    bookmarks_router,
    categories_router,
    follows_router,
    posts_router,
    replies_router,
)
from loop_forum.core.errors import ForumError
from loop_forum.core.logging import configure_logging
from loop_forum.core.settings import settings
from loop_forum.db.seed import seed_categories
from loop_forum.db.session import build_engine, build_session_factory, create_tables

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
DESCRIPTION = "Discussion forum API with threaded replies, upvotes, bookmarks and follows"


async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    """Render a ``ForumError`` as ``{"detail": ..., "code": ...}``."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    else:
        logger.warning("%s %s rejected: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def create_app() -> FastAPI:
    """Build the API application with its own engine and session factory.

    Configuration comes from the process-wide ``settings`` object, the same
    one the services and token helpers read.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        if settings.create_tables_on_startup:
            create_tables(app.state.engine)
            with app.state.session_factory() as db:
                seed_categories(db)
        logger.info("%s %s started", settings.app_name, settings.app_version)
        yield
        app.state.engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description=DESCRIPTION,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.engine = build_engine(settings.database_url, echo=settings.sql_debug)
    app.state.session_factory = build_session_factory(app.state.engine)

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

    app.add_exception_handler(ForumError, forum_error_handler)

    # Include API routers
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(categories_router, prefix=API_PREFIX)
    app.include_router(posts_router, prefix=API_PREFIX)
    app.include_router(replies_router, prefix=API_PREFIX)
    app.include_router(bookmarks_router, prefix=API_PREFIX)
    app.include_router(follows_router, prefix=API_PREFIX)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": DESCRIPTION,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("loop_forum.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
