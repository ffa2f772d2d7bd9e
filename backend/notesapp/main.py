"""
NotesApp Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the Database, injects it into the
       services, registers middleware, exception handlers and routes.
Who:   uvicorn (`uvicorn notesapp.main:app`) or the `notesapp` console script.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  Request ID → Logging → CORS            │
    │                                                      │
    │  Routes:  GET /  │ /health │ /api/setup-*            │
    │           /api/signup │ /api/register │ /api/login   │
    │           /api/notes[/{id}]                          │
    │                                                      │
    │  app.state:  database ─┬─▶ CredentialService         │
    │                        └─▶ NoteService               │
    │                                                      │
    │  Exception Handlers:                                 │
    │   Validation/Credential→400 │ NotFound→404 │ Store→500│
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, run the idempotent schema step (AUTO_MIGRATE)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notesapp import __version__
from notesapp.config import Settings, settings as default_settings
from notesapp.database import Database
from notesapp.exceptions import (
    CredentialError,
    NotesAppError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from notesapp.middleware.logging import RequestLoggingMiddleware
from notesapp.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from notesapp.routes import auth, health, notes, setup
from notesapp.services.credential_service import CredentialService
from notesapp.services.note_service import NoteService

# Registers every table on Base.metadata before the schema step runs
import notesapp.models  # noqa: F401

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] notesapp.access: GET /api/notes 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access logger replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  logging, then the schema step when AUTO_MIGRATE is on. A schema
              failure is logged and the server still starts; requests that
              touch the store will then surface StoreError.
    Shutdown: close all pooled connections.
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(app_settings.log_level)
    logger.info("NotesApp Backend %s starting up...", __version__)
    logger.info(
        "Database: %s",
        database.url.render_as_string(hide_password=True),
    )

    if app_settings.auto_migrate:
        try:
            await database.create_schema()
        except StoreError as e:
            logger.error("Startup migration failed: %s", e.context.get("error", e.message))

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)

    yield

    logger.info("NotesApp Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The ContextVar is already reset when the fallback handler runs
    return getattr(request.state, "request_id", None) or request_id_var.get("")


def _error_response(request: Request, status_code: int, exc: NotesAppError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "details": exc.context,
            "request_id": _request_id(request),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error body.

    Handler hierarchy:
        ValidationError         → 400 (missing field, bad email format)
        CredentialError         → 400 (duplicate user, unknown user, bad password)
        RequestValidationError  → 400 (malformed JSON body)
        NotFoundError           → 404
        StoreError              → 500, with the underlying error text
        Exception (fallback)    → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", _request_id(request), exc.message)
        return _error_response(request, 400, exc)

    @app.exception_handler(CredentialError)
    async def handle_credential_error(request: Request, exc: CredentialError):
        return _error_response(request, 400, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed bodies and path parameters are reported as 400, not 422."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Request could not be parsed",
                "details": {"errors": jsonable_errors(exc)},
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(request, 404, exc)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "[%s] Store error: %s | Context: %s",
            _request_id(request), exc.message, exc.context,
        )
        return _error_response(request, 500, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Location and message of each schema error, without the raw input."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


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
        settings: Configuration; the environment-loaded singleton by default
        database: Store client; built from settings when omitted

    Returns:
        Fully configured FastAPI instance. Building it opens no connection.
    """
    settings = settings or default_settings
    database = database or Database(settings)

    app = FastAPI(
        title="NotesApp API",
        description="User signup/login and CRUD for notes.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Application State ─────────────────────────────────────────────────
    app.state.settings = settings
    app.state.database = database
    app.state.note_service = NoteService(database)
    app.state.credential_service = CredentialService(
        database, bcrypt_rounds=settings.bcrypt_rounds
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → CORS
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

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(setup.router)
    app.include_router(auth.router)
    app.include_router(notes.router)

    return app


def run() -> None:
    """Console entry point: serve the app on HOST:PORT."""
    uvicorn.run(
        "notesapp.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


# uvicorn expects `notesapp.main:app` to be importable
app = create_app()
