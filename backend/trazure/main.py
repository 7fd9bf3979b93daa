"""
Trazure Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() freezes the web settings into a WebConfig, then wires
       middleware, exception handlers and routers from it.
Who:   uvicorn (uvicorn trazure.main:app) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware: Request ID → Logging → GZip → CORS     │
    │                                                     │
    │  Routes:                                            │
    │    /footprints   /uploads   /health   /test/users*  │
    │                                  (* diagnostics on) │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400 │ NotFound→404 │ Storage→500 │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the uploads directory
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from trazure import __version__
from trazure.config import WebConfig, settings
from trazure.database import dispose_engine
from trazure.exceptions import (
    FileStorageError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from trazure.middleware.logging import RequestLoggingMiddleware
from trazure.middleware.request_id import RequestIDMiddleware, request_id_var
from trazure.routes import diagnostics, footprints, health, uploads
from trazure.services.file_service import FileService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise; our access logger covers it
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    web_config: WebConfig = app.state.web_config

    logger.info("Trazure Backend %s starting up...", __version__)
    app.state.file_service.ensure_directory()
    logger.info("Uploads directory: %s", web_config.uploads_dir)
    if web_config.allow_origin_regex:
        logger.info("CORS: any origin (pattern), credentials=%s", web_config.allow_credentials)
    else:
        logger.info("CORS origins: %s", ", ".join(web_config.allow_origins))
    if web_config.diagnostics_enabled:
        logger.warning("Diagnostic routes are enabled (/test/users)")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Trazure Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the ErrorResponse format.

        ValidationError  → 400
        NotFoundError    → 404
        FileStorageError → 500
        PersistenceError → 500 (generic message; context logged only)
        Exception        → 500 (unexpected; stack trace logged only)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        rid = request_id_var.get("")
        logger.error("[%s] Persistence error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        rid = request_id_var.get("")
        logger.error("[%s] File storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(web_config: Optional[WebConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        web_config: Frozen web configuration. Built from settings when
                    omitted; tests pass their own.
    """
    web_config = web_config or settings.web_config()

    app = FastAPI(
        title="Trazure API",
        description="Travel footprints: light up the places you have been.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.web_config = web_config
    app.state.file_service = FileService(
        uploads_dir=web_config.uploads_dir,
        max_size=web_config.max_upload_size,
    )

    # ── Middleware (last added runs first) ────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(web_config.allow_origins),
        allow_origin_regex=web_config.allow_origin_regex,
        allow_credentials=web_config.allow_credentials,
        allow_methods=list(web_config.allow_methods),
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
        max_age=web_config.max_age,
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Routes ────────────────────────────────────────────────────────────
    app.include_router(footprints.router)
    app.include_router(uploads.router)
    app.include_router(health.router)
    if web_config.diagnostics_enabled:
        app.include_router(diagnostics.router)

    return app


app = create_app()
