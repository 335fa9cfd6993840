"""
Catalog API — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, documentation
       endpoints and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn catalog_api.main:app`) or `run()`.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware: Request ID → Logging → CORS             │
    │                                                      │
    │  Routes:                                             │
    │    {api_prefix}            GET list / POST create    │
    │    {api_prefix}/{id}       GET / PATCH / DELETE      │
    │    /api/sample-products    GET static list           │
    │    /health                 GET                       │
    │                                                      │
    │  Docs:  /api.json (OpenAPI)   /docs (Swagger UI)     │
    │                                                      │
    │  Exception Handlers:                                 │
    │    Validation→400  NotFound→404  OperationFailed→400 │
    │    Database→500    RequestValidation→400  other→500  │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging → open Database → (optional) create tables
    Shutdown: close Database (dispose pool)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_api import __version__
from catalog_api.config import Settings, settings as default_settings
from catalog_api.database import Database
from catalog_api.exceptions import (
    CatalogError,
    DatabaseError,
    NotFoundError,
    OperationFailedError,
    ValidationError,
)
from catalog_api.middleware.logging import RequestLoggingMiddleware
from catalog_api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from catalog_api.routes import health, products, samples

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure the root logger once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output goes to stdout so container runtimes capture it.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the injected Database on startup and close it on shutdown."""
    config: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("Catalog API %s starting up...", __version__)

    database.open()
    if config.auto_create_tables:
        await database.create_all()
        logger.info("Database tables created from ORM metadata")

    logger.info("Listening on %s:%d", config.host, config.port)
    logger.info("API docs: %s%s", config.server_url, config.docs_url)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Catalog API shutting down...")
    await database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

# First element of a request-validation `loc`; not part of the field name
_LOCATION_SOURCES = {"body", "path", "query", "header", "cookie"}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes.

    Handler hierarchy:
        ValidationError         → 400 (field-specific message)
        RequestValidationError  → 400 (malformed JSON, non-integer id)
        NotFoundError           → 404
        OperationFailedError    → 400 (generic write failure)
        DatabaseError           → 500 (generic read failure)
        CatalogError (base)     → 500
        Exception (fallback)    → 500

    Every body is {"error": "<message>"}. Store details stay in the log.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            first = errors[0]
            if first.get("type") == "json_invalid":
                message = "The request body is not valid JSON"
            else:
                location = ".".join(
                    str(part) for part in first.get("loc", ()) if part not in _LOCATION_SOURCES
                )
                message = f"Invalid value for [{location}]: {first.get('msg', 'invalid')}"
        logger.warning("[%s] Request validation error: %s", request_id_var.get(""), message)
        return _error(400, message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(OperationFailedError)
    async def handle_operation_failed(request: Request, exc: OperationFailedError):
        logger.error(
            "[%s] Store write failed: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return _error(400, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return _error(500, exc.message)

    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError):
        logger.error("[%s] Unhandled application error: %s", request_id_var.get(""), exc.message)
        return _error(500, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config:   Settings to use (defaults to the module singleton)
        database: Pre-built Database to inject (defaults to one built from config)

    Returns:
        Fully configured FastAPI instance. The Database is opened by the
        lifespan handler unless the caller already opened it.
    """
    config = config or default_settings
    database = database or Database.from_settings(config)

    app = FastAPI(
        title="Product API",
        description="A simple API for managing products",
        version=__version__,
        docs_url=config.docs_url,
        redoc_url=None,
        openapi_url=config.openapi_url,
        servers=[{"url": config.server_url}],
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(products.router, prefix=config.api_prefix)
    app.include_router(samples.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on settings.host:settings.port."""
    import uvicorn

    uvicorn.run(
        "catalog_api.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


# uvicorn expects `catalog_api.main:app` to be importable
app = create_app()
