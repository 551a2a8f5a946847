"""
svc-notes: FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires settings, the persistence gateway,
       the metrics registry, middleware, routes and exception handlers.
Who:   Called by svc_notes.server (production) and by the test suite; also
       usable as `uvicorn --factory svc_notes.main:create_app`.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                     FastAPI App                      │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────────┐ ┌─────────────────┐                │
    │  │  Request ID  │→│  Logging        │                │
    │  └──────────────┘ └─────────────────┘                │
    │                                                      │
    │  Routes:                                             │
    │  ┌──────────────────────┐ ┌─────────────────────────┐│
    │  │ GET/POST lecture     │ │ /healthz /readyz        ││
    │  │ notes                │ │ /metrics /openapi /docs ││
    │  └──────────────────────┘ └─────────────────────────┘│
    │                                                      │
    │  Exception Handlers (registered last):               │
    │  ┌──────────────────────────────────────────────────┐│
    │  │ bad body→400 │ PersistenceError→500 │ other→500  ││
    │  └──────────────────────────────────────────────────┘│
    └──────────────────────────────────────────────────────┘

App state (set by create_app):
    app.state.settings          Settings
    app.state.gateway           NoteGateway
    app.state.metrics           MetricsRegistry
    app.state.openapi_document  dict loaded from settings.openapi_path

Lifecycle:
    Startup:  log the configured address
    Shutdown: close the gateway; uvicorn runs this after in-flight requests
              have drained
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from svc_notes import __version__
from svc_notes.config import Settings, load_settings
from svc_notes.exceptions import PersistenceError
from svc_notes.gateway import NoteGateway
from svc_notes.metrics import MetricsRegistry
from svc_notes.middleware.logging import INTERNAL_ERROR_BODY, RequestLoggingMiddleware
from svc_notes.middleware.request_id import RequestIDMiddleware, request_id_var
from svc_notes.routes import docs, health, notes
from svc_notes.routes.docs import load_openapi_document

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once by the entry point before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # svc_notes.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    logger.info("svc-notes %s starting on %s:%d", __version__, settings.host, settings.port)

    yield

    logger.info("Closing persistence gateway...")
    await app.state.gateway.close()


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the terminal error handlers.

    Handler hierarchy:
        RequestValidationError → 400 {"error": "Invalid request body"}
        PersistenceError       → 500 {"error": "Internal server error"}
        Exception (fallback)   → 500 {"error": "Internal server error"}

    Handler errors that are not PersistenceError are answered by
    RequestLoggingMiddleware; the Exception fallback only sees failures in
    the middleware layers themselves.

    Validation of note content is not here: the create-note handler answers
    that 400 itself. Responses never contain exception details; those go to
    the server log only.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request body: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Persistence error: %s | Context: %s",
            rid,
            exc.message,
            exc.context,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    *,
    gateway: Optional[NoteGateway] = None,
    metrics: Optional[MetricsRegistry] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Validated settings; loaded from the environment if omitted.
        gateway:  Persistence gateway; built from settings if omitted.
        metrics:  Metrics registry; a fresh one if omitted.

    Raises:
        ConfigurationError: settings were omitted and the environment is
            incomplete.
    """
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="svc-notes",
        description="Lecture notes storage service.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    if gateway is None:
        gateway = NoteGateway.from_settings(settings)
    if metrics is None:
        metrics = MetricsRegistry()

    app.state.settings = settings
    app.state.gateway = gateway
    app.state.metrics = metrics
    app.state.openapi_document = load_openapi_document(settings.openapi_path)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(docs.router)
    app.include_router(health.router)
    app.include_router(notes.router)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    return app
