"""
Blog API Backend: FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn blogapi.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Access log     │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────┐ ┌─────────────────┐  │
    │  │ GET/POST/PUT/DELETE posts │ │ GET /health     │  │
    │  └───────────────────────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers (all render an Envelope):       │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ BlogApiError → ErrorKind status │ other → 500│   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → settings validation → create missing tables
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogapi import __version__
from blogapi.config import settings
from blogapi.database import create_tables, dispose_engine
from blogapi.exceptions import BlogApiError, ErrorKind
from blogapi.middleware.logging import RequestLoggingMiddleware
from blogapi.middleware.request_id import (
    RequestIDFilter,
    RequestIDMiddleware,
    request_id_var,
)
from blogapi.routes import health, posts
from blogapi.schemas import Envelope

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s
    The request id comes from RequestIDFilter, attached to the handler so
    every record carries it (records logged outside a request show "-").
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate security-sensitive configuration (logged, not fatal)
        3. Create missing tables when DB_CREATE_ALL is set
    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    setup_logging()
    logger.info("Blog API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    if settings.db_create_all:
        await create_tables()
        logger.info("Database tables ensured")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Blog API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, message: str) -> JSONResponse:
    """Render an error as the standard envelope."""
    envelope = Envelope(status_code=status_code, message=message)
    return JSONResponse(status_code=status_code, content=envelope.to_response_content())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to envelopes.

    Handler hierarchy:
        BlogApiError (any subclass) → status from its ErrorKind
        RequestValidationError      → 422 naming the first invalid field
        Exception (fallback)        → 500 with a generic message

    Internal errors never echo the underlying exception text; details stay
    in the server log together with the request id.
    """

    @app.exception_handler(BlogApiError)
    async def handle_blog_api_error(request: Request, exc: BlogApiError):
        rid = request_id_var.get("")
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("[%s] Internal error: %s | Context: %s", rid, exc.message, exc.context)
            return error_response(exc.status_code, INTERNAL_ERROR_MESSAGE)

        logger.info(
            "[%s] %s on %s %s: %s",
            rid, exc.kind.value, request.method, request.url.path, exc.message,
        )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "Request validation failed"
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            detail = first.get("msg", "invalid value")
            message = f"{message}: {field}: {detail}"
        logger.info("Validation error on %s %s: %s", request.method, request.url.path, message)
        return error_response(422, message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return error_response(500, INTERNAL_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Blog API",
        description="Posts for a blog: public listing, owner-only create/update/delete.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(posts.router)
    app.include_router(posts.legacy_router)
    app.include_router(health.router)

    return app


app = create_app()
