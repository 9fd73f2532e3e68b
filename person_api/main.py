"""
Person API — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the Database, the person store and the
       PersonService, stores them on `app.state`, registers middleware,
       exception handlers and routes, and returns the app.
Who:   uvicorn (`uvicorn person_api.main:app`) or `python -m person_api`.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────────┐ ┌─────────────────┐                │
    │  │   Req ID     │→│    Logging      │                │
    │  └──────────────┘ └─────────────────┘                │
    │                                                      │
    │  Routes:                                             │
    │  ┌──────────────┐ ┌──────────────────────┐ ┌───────┐ │
    │  │  POST /api   │ │ GET/PATCH/DELETE     │ │/health│ │
    │  │              │ │ /api/{id_or_name}    │ │   /   │ │
    │  └──────────────┘ └──────────────────────┘ └───────┘ │
    │                                                      │
    │  Exception Handlers:                                 │
    │  ┌────────────────────────────────────────────────┐  │
    │  │ NotFound→404 │ Store→500 │ BadBody→400 │ *→500 │  │
    │  └────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, connect the database
    Shutdown: disconnect the database
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from person_api import __version__
from person_api.config import Settings, settings as default_settings
from person_api.database import Database
from person_api.exceptions import NotFoundError, StoreError
from person_api.middleware.logging import RequestLoggingMiddleware
from person_api.middleware.request_id import RequestIDMiddleware, request_id_var
from person_api.routes import health, persons
from person_api.services.person_service import PersonService
from person_api.services.person_store import SqlPersonStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, written to
    stdout. Called once during startup before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Third-party libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Connect the person store before serving; disconnect on shutdown."""
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("Person API starting up...")

    await database.connect()

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)
    logger.info("API docs: http://%s:%d/api-docs", app_settings.host, app_settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Person API shutting down...")
    await database.disconnect()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to `{"error": ...}` responses.

    Handler hierarchy:
        NotFoundError           → 404 Not Found ("Person not found")
        StoreError              → 500 (raw store message)
        RequestValidationError  → 400 (body is not valid JSON / not an object)
        Exception (fallback)    → 500 (generic message, stack trace logged)
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        logger.warning("[%s] Rejected request body: %s", rid, message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-loaded ones.
        database: Database to use; defaults to one built from `settings`.
                  It is connected by the lifespan, not here.
    """
    settings = settings or default_settings
    database = database or Database(settings)

    app = FastAPI(
        title="Person API",
        description="A simple CRUD API for persons, addressable by id or by name.",
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.person_service = PersonService(SqlPersonStore(database))

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(persons.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Serve the module-level app with uvicorn on the configured host/port."""
    import uvicorn

    uvicorn.run(
        "person_api.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )
