"""
DelipuCash Backend: FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings) returns a configured FastAPI instance; tests build
       their own with test settings.
Who:   uvicorn (uvicorn delipucash.main:app) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────┐ ┌─────────┐ ┌──────────────────┐ ┌────────┐  │
    │  │ Req ID │→│ Logging │→│ Security Headers │→│  CORS  │  │
    │  └────────┘ └─────────┘ └──────────────────┘ └────────┘  │
    │                                                          │
    │  Routes:                                                 │
    │  ┌───────────────────────────────┐ ┌───────────────────┐ │
    │  │ /api/responses/{id}/...       │ │ /, /health, /ping │ │
    │  └───────────────────────────────┘ └───────────────────┘ │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound/route→404 │ Method→405   │  │
    │  │ Database/other→500                                 │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, ready banner
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from delipucash import __version__
from delipucash.config import Settings, settings
from delipucash.database import dispose_engine
from delipucash.exceptions import (
    DatabaseError,
    DelipuCashError,
    NotFoundError,
    ValidationError,
)
from delipucash.middleware.logging import RequestLoggingMiddleware
from delipucash.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from delipucash.middleware.security_headers import SecurityHeadersMiddleware
from delipucash.routes import health, responses
from delipucash.routes.health import AVAILABLE_ROUTES
from delipucash.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    413: "payload_too_large",
    415: "unsupported_media_type",
}

# Mobile clients send auth tokens in custom headers; browsers may cache a
# preflight answer for a day.
CORS_ALLOWED_HEADERS = [
    "Content-Type",
    "Authorization",
    "X-Requested-With",
    "Accept",
    "Origin",
    "Access-Control-Request-Method",
    "Access-Control-Request-Headers",
    "x-access-token",
    "x-refresh-token",
    REQUEST_ID_HEADER,
]
CORS_EXPOSED_HEADERS = ["Authorization", "x-access-token", "x-refresh-token", REQUEST_ID_HEADER]
CORS_MAX_AGE_SECONDS = 86400


# ══════════════════════════════════════════════════════════════════════════
# Structured Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # platform log drains read stdout
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("DelipuCash Backend starting up (%s)...", app_settings.environment)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health still reports and operators see the error
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    logger.info(
        "Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port
    )
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("DelipuCash Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(
    message: str, error: str, details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Serialize the shared error shape; absent fields are omitted."""
    rid = request_id_var.get("") or None
    body = ErrorResponse(message=message, error=error, details=details or None, request_id=rid)
    return jsonable_encoder(body.model_dump(by_alias=True, exclude_none=True))


def register_exception_handlers(app: FastAPI, app_settings: Settings) -> None:
    """
    Map exception types to HTTP status codes and the shared error body.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (malformed body / params)
        NotFoundError           → 404 Not Found
        HTTPException (routing) → its own status (unknown route 404, wrong method 405)
        DatabaseError           → 500 (cause attached outside production)
        DelipuCashError (base)  → 500
        Exception (fallback)    → 500

    Stack traces and SQL never reach the response; they are logged here.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body(exc.message, "validation_error", exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Missing or mistyped body fields: same 400 shape as business validation."""
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), exc.errors())
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "Invalid request", "validation_error", {"errors": jsonable_encoder(exc.errors())}
            ),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body(exc.message, "not_found", {"resource": exc.resource}),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Router-level errors (unknown path, wrong method) in the shared error shape."""
        details = None
        if exc.status_code == 404:
            message = f"Route {request.url.path} not found"
            details = {"availableRoutes": list(AVAILABLE_ROUTES)}
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(message, HTTP_ERROR_CODES.get(exc.status_code, "http_error"), details),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        details = None
        if not app_settings.is_production and exc.cause is not None:
            details = {"cause": str(exc.cause)}
        return JSONResponse(
            status_code=500,
            content=_error_body(exc.message, "server_error", details),
        )

    @app.exception_handler(DelipuCashError)
    async def handle_application_error(request: Request, exc: DelipuCashError):
        logger.error(
            "[%s] Unhandled application error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(exc.message, "server_error"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "An unexpected error occurred. Please try again later.", "internal_server_error"
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Configuration to build from; defaults to the module-level
                      settings loaded from the environment.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="DelipuCash API",
        description=(
            "Response interaction service: likes, dislikes and threaded replies "
            "on survey and question responses."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: RequestID → Logging → Security → CORS
    if app_settings.is_production:
        cors_options: Dict[str, Any] = {
            "allow_origins": app_settings.cors_origins_list,
            "allow_origin_regex": app_settings.cors_origin_regex,
        }
    else:
        cors_options = {"allow_origins": ["*"]}

    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=CORS_ALLOWED_HEADERS,
        expose_headers=CORS_EXPOSED_HEADERS,
        max_age=CORS_MAX_AGE_SECONDS,
        **cors_options,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app, app_settings)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(responses.router)
    app.include_router(health.router)

    return app


# uvicorn expects `delipucash.main:app` to be importable
app = create_app()
