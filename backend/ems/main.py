"""
EMS Backend — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging, middleware, exception handlers, routes and the
       store in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       that owns its Store.
Who:   Called by uvicorn (uvicorn ems.main:app) and by the test fixtures.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────┐     │
    │  │  Req ID  │→│  Logging        │→│  CORS    │     │
    │  └──────────┘ └─────────────────┘ └──────────┘     │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐ │
    │  │ /employees/* │ │ /admin/* │ │ GET /health     │ │
    │  └──────────────┘ └──────────┘ └─────────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ ValidationError→400 │ NotFound→404 │ DB→500  │  │
    │  └──────────────────────────────────────────────┘  │
    │                                                     │
    │  app.state.store → Store (in-memory SQLite)         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the schema, log readiness
    Shutdown: dispose the store's engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ems import __version__
from ems.config import settings
from ems.database import Store
from ems.exceptions import DatabaseError, NotFoundError, ValidationError
from ems.middleware.logging import RequestLoggingMiddleware
from ems.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from ems.routes import admin, employees, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    Output: stdout (captured by Docker / process supervisors)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
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
    Startup: logging, schema creation. Shutdown: dispose the engine.

    The schema is created with CREATE TABLE IF NOT EXISTS semantics, so a
    store whose schema a test fixture already created is left as it is.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Employee Management System API starting up...")

    store: Store = app.state.store
    await store.create_schema()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info(
        "API docs: http://%s:%d%s", settings.backend_host, settings.backend_port, settings.docs_url
    )
    logger.info("=" * 60)

    yield

    logger.info("Employee Management System API shutting down...")
    await store.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request (missing required input)
        RequestValidationError  → 400 Bad Request (malformed body), 404 for a non-integer path id
        NotFoundError           → 404 Not Found
        DatabaseError           → 500 Internal Server Error (fixed message)
        Exception (fallback)    → 500 Internal Server Error

    Exception handlers never expose engine messages or stack traces in the
    API response. Details are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("Validation error: %s", exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """
        Request could not be parsed.

        A path id that is not an integer names no stored employee, so it is
        answered like any other unknown id (404). Body errors stay 400.
        """
        rid = request_id_var.get("")
        path_params = [
            err["loc"][1] for err in exc.errors()
            if len(err.get("loc", ())) > 1 and err["loc"][0] == "path"
        ]
        if path_params:
            return await handle_not_found(
                request,
                NotFoundError(
                    resource="employee",
                    context={"path_params": path_params},
                ),
            )

        fields = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
        logger.warning("Request validation error on %s", fields)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Invalid request.",
                "details": {"fields": fields},
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

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Store failure: fixed per-operation message, context logged only."""
        rid = request_id_var.get("")
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
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
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[Store] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Store the application should own. Defaults to a new Store built
               from settings.database_url. Tests pass their own isolated store.

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Employee Management System API",
        description="API for managing employees, roles, and related operations",
        version=__version__,
        docs_url=settings.docs_url,
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store or Store()

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(employees.router)
    app.include_router(admin.router)
    app.include_router(health.router)

    return app


# uvicorn expects `ems.main:app` to be importable
app = create_app()
