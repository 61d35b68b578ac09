"""
Scorekeeper Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (uvicorn scorekeeper.main:app) and the test suite.

Application Architecture:
    ┌───────────────────────────────────────────────────────┐
    │                     FastAPI App                       │
    │                                                       │
    │  Middleware:  Request ID → Access log → CORS          │
    │                                                       │
    │  Routes:                                              │
    │   /users   /userRooms   /rooms   /rooms/{id}/players  │
    │   /health                                             │
    │                                                       │
    │  Exception Handlers:                                  │
    │   Validation→400  Unauthorized→401  NotFound→404      │
    │   Conflict→409    Database→500      Unexpected→500    │
    └───────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the listening address
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from scorekeeper import __version__
from scorekeeper.config import settings
from scorekeeper.database import dispose_engine
from scorekeeper.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ScorekeeperError,
    UnauthorizedError,
    ValidationError,
)
from scorekeeper.middleware.logging import RequestLoggingMiddleware
from scorekeeper.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from scorekeeper.routes import health, players, rooms, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s
    Called once during startup, before anything else logs.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Third-party loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Scorekeeper Backend %s starting up...", __version__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Scorekeeper Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs outside RequestIDMiddleware, after the
    # ContextVar has been reset
    return (
        request_id_var.get("")
        or getattr(request.state, "request_id", "")
        or request.headers.get(REQUEST_ID_HEADER, "")
    )


def _error_response(
    request: Request, status_code: int, error: str, message: str, details=None
) -> JSONResponse:
    content = {
        "error": error,
        "message": message,
        "request_id": _request_id(request),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the ErrorResponse shape.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        UnauthorizedError                        → 401
        NotFoundError                            → 404
        ConflictError                            → 409
        DatabaseError                            → 500 (generic message)
        ScorekeeperError (base)                  → 500
        Exception (fallback)                     → 500

    Internal details (statements, stack traces) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return _error_response(request, 400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        logger.warning("Request validation failed: %s", errors)
        return _error_response(request, 400, "validation_error", "Request validation failed", {"errors": errors})

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return _error_response(request, 401, "unauthorized", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(request, 404, "not_found", exc.message)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _error_response(request, 409, "conflict", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return _error_response(request, 500, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(ScorekeeperError)
    async def handle_app_error(request: Request, exc: ScorekeeperError):
        logger.error("Unhandled application error: %s | Context: %s", exc.message, exc.context)
        return _error_response(request, 500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return _error_response(
            request,
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Scorekeeper API",
        description=(
            "Scorekeeping backend: users own rooms, rooms hold players, "
            "players accumulate points."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(rooms.router)
    app.include_router(players.router)
    app.include_router(health.router)

    return app


app = create_app()
