"""
Slug Routes — FastAPI Application Factory
=========================================

What:  Assembles the reference application around the binding routers.
Why:   NotFoundError only becomes a 404 once an app registers a handler for
       it; this factory shows the full wiring and is what the tests drive.
How:   create_app() returns a configured FastAPI instance.
Who:   `slug-routes` console script (run()), uvicorn and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │  Middleware:  Request ID → Logging                  │
    │                                                     │
    │  Routes:      /api/articles/...  (SlugRouter)       │
    │               /api/users/...     (SlugRouter)       │
    │               /health                               │
    │                                                     │
    │  Exception Handlers:                                │
    │     NotFoundError → 404 │ SlugRoutesError → 500     │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from slug_routes import __version__
from slug_routes.config import settings
from slug_routes.database import dispose_engine
from slug_routes.exceptions import NotFoundError, SlugRoutesError
from slug_routes.middleware.logging import RequestLoggingMiddleware
from slug_routes.middleware.request_id import RequestIDMiddleware, request_id_var
from slug_routes.routes import articles, health, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger from `settings.log_level`.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("slug_routes %s starting up", __version__)
    logger.info("Database: %s", settings.database_label())
    logger.info("Default slug column: %s", settings.default_slug_column)

    yield

    logger.info("Shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map slug_routes exceptions to JSON responses.

    Handler hierarchy:
        NotFoundError             → 404 Not Found
        SlugRoutesError (base)    → 500 Internal Server Error

    Database errors are deliberately not handled here; they reach FastAPI's
    default 500 handling unchanged.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(SlugRoutesError)
    async def handle_slug_routes_error(request: Request, exc: SlugRoutesError):
        rid = request_id_var.get("")
        logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Slug Routes",
        description="Route parameters bound to database records by slug or primary key.",
        version=__version__,
        lifespan=lifespan,
    )

    # Last added runs first: RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(articles.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on `settings.app_host`:`settings.app_port`."""
    uvicorn.run(
        "slug_routes.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
