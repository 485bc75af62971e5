"""
Wardrobe Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting
       and lifecycle management in one place.
How:   create_app(settings) builds the per-application objects (Database,
       TokenService), stores them on `app.state` and wires everything up.
Who:   uvicorn (`uvicorn wardrobe.main:app`) and the test suite, which calls
       create_app() with its own Settings.

Application Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │                         FastAPI App                          │
    │                                                              │
    │  Middleware: Request ID → Logging → Upload Limit → GZip → CORS│
    │                                                              │
    │  Routes: /garments  /comments  /labels*  /users  /health     │
    │          (* every route needs a bearer token)                │
    │                                                              │
    │  app.state: settings · database · token_service              │
    │                                                              │
    │  Exception Handlers: WardrobeError subclasses → {"message"}  │
    │                      RequestValidationError   → 400          │
    │                      Exception                → 500          │
    └──────────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config validation (warn only) → create tables
    Shutdown: dispose the connection pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from wardrobe import __version__
from wardrobe.config import Settings
from wardrobe.database import Database
from wardrobe.exceptions import DatabaseError, WardrobeError
from wardrobe.middleware.logging import RequestLoggingMiddleware
from wardrobe.middleware.request_id import RequestIDMiddleware, request_id_var
from wardrobe.middleware.upload_limit import UploadLimitMiddleware
from wardrobe.routes import comments, garments, health, labels, users
from wardrobe.services.auth_service import TokenService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-01-15T12:00:00 [INFO] wardrobe.services.garment_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("Wardrobe Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # The API still works with the development secret; make it loud
        logger.warning("%s", str(e))

    if settings.create_schema:
        await database.create_schema()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Wardrobe Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to status codes and `{"message": ...}` bodies.

    Handler hierarchy:
        WardrobeError subclasses → their status_code (400/401/404/409/413/415)
        DatabaseError            → 500, generic message, context logged
        RequestValidationError   → 400 (malformed JSON, wrong body types)
        HTTPException            → its status code (unknown route, wrong method)
        Exception                → 500, stack trace logged

    `context` is logged server-side and never returned.
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": "An internal error occurred. Please try again later."},
        )

    @app.exception_handler(WardrobeError)
    async def handle_wardrobe_error(request: Request, exc: WardrobeError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = exc.errors()
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg')}"
            for err in errors
        )
        logger.info("[%s] Request validation failed: %s", rid, details)
        return JSONResponse(
            status_code=400,
            content={"message": f"Invalid request data. {details}".strip()},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred. Please try again later."},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration. Defaults to Settings() read from the
                  environment / .env file.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Wardrobe API",
        description=(
            "Inventory of a folk-dance group's wardrobe: garments with their photos, "
            "recordings and documents, comments, classification labels and users."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database.from_settings(settings)
    app.state.token_service = TokenService.from_settings(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition (last added = outermost)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(UploadLimitMiddleware, max_upload_size=settings.max_upload_size)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(garments.router)
    app.include_router(comments.router)
    app.include_router(labels.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


# uvicorn expects `wardrobe.main:app` to be importable
app = create_app()
