"""
Pastebin Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       and store lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       that owns one PasteStore.
Who:   Called by uvicorn (uvicorn pastebin.main:app) or the `pastebin` script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐                  │
    │  │   Req ID     │→│   Logging    │                  │
    │  └──────────────┘ └──────────────┘                  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌───────────┐ ┌──────────────┐  │
    │  │ /api/paste...  │ │ /health   │ │ /, /{id}     │  │
    │  └────────────────┘ └───────────┘ └──────────────┘  │
    │  Static: /static (client widget script)             │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Storage→500  │   │
    │  └──────────────────────────────────────────────┘   │
    │                                                     │
    │  app.state.store: PasteStore                        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Open the paste store (creates db directory and table if absent)

    Shutdown:
    1. Close the paste store (dispose engine, close connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from pastebin import __version__
from pastebin.config import settings
from pastebin.exceptions import (
    PastebinError,
    ValidationError,
    NotFoundError,
    StorageError,
)
from pastebin.middleware.request_id import RequestIDMiddleware, request_id_var
from pastebin.middleware.logging import RequestLoggingMiddleware
from pastebin.routes import pastes, pages, health
from pastebin.store import PasteStore

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] pastebin.access: POST /api/paste 201 ...
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,  # Override any existing logging config
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the paste store on startup and close it on shutdown.

    A store that cannot be opened aborts startup: the service has nothing
    to serve without its table.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Pastebin Backend %s starting up...", __version__)

    try:
        settings.validate_for_startup()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    store: PasteStore = app.state.store
    await store.open()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Pastebin Backend shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError (+ ContentTooLongError) → 400
        RequestValidationError (malformed body) → 400 "Invalid content."
        NotFoundError                           → 404
        StorageError (+ ConstraintViolation)    → 500 "Database error."
        PastebinError (base)                    → 500

    Every body has the shape {"error": message}. Exception context is logged
    server-side only. Any other exception is answered inside
    RequestLoggingMiddleware, where the response still gets its X-Request-ID.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent invalid content."""
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_body(request: Request, exc: RequestValidationError):
        """Body is not JSON or not an object: same answer as bad content."""
        # Error types only: the errors' "input" fields may hold paste content
        logger.warning(
            "[%s] Malformed request body: %s",
            request_id_var.get(""),
            [error.get("type") for error in exc.errors()],
        )
        return _error_response(400, ValidationError().message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, exc.message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        """Database error: generic message to user, details logged server-side."""
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(500, exc.message)

    @app.exception_handler(PastebinError)
    async def handle_app_error(request: Request, exc: PastebinError):
        logger.error("[%s] Application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error_response(500, exc.message)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[PasteStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Paste store to serve from. Defaults to a store on
               settings.database_url. Tests pass an already opened store.

    Returns:
        Fully configured FastAPI instance; the store is on app.state.store.
    """
    app = FastAPI(
        title="Pastebin API",
        description=(
            "Minimal paste storage: submit text, get a short ID and a shareable URL, "
            "fetch it back as JSON or view it as a page."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store or PasteStore(settings.database_url)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    # pages.router holds the catch-all /{paste_id}; it must come last
    app.include_router(pastes.router)
    app.include_router(health.router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(pages.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured address."""
    import uvicorn

    uvicorn.run(
        "pastebin.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `pastebin.main:app` to be importable
app = create_app()
