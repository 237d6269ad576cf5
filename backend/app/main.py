"""
AquaGuard Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐ │
    │  │ Req ID   │→│  Logging        │→│  GZip / CORS │ │
    │  └──────────┘ └─────────────────┘ └──────────────┘ │
    │                                                     │
    │  Routes:                                            │
    │  POST /api/login          GET/POST /api/locations   │
    │  PATCH /api/locations/{id}/simulate                 │
    │  POST /api/assessments    GET /health               │
    │                                                     │
    │  Exception Handlers:                                │
    │  Auth→401 │ NotFound→404 │ DB→500 │ other→500     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Open the Database handle, create missing tables, seed empty tables
    4. Build the Gemini assessment service from the app's Settings

    Shutdown:
    1. Dispose the Database handle
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, JSONResponse

from app import __version__
from app.config import Settings, settings as default_settings
from app.database import Database
from app.exceptions import (
    AquaGuardError,
    AuthenticationError,
    DatabaseError,
    NotFoundError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import assessments, auth, health, locations
from app.services.gemini_service import GeminiService
from app.services.seed_service import seed_defaults

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the store on startup and close it on shutdown.

    The Database handle lives on app.state.database; request handlers get
    sessions from it through get_db_session. The assessment service lives on
    app.state.assessment_service.
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("AquaGuard Backend starting up (mode=%s)...", app_settings.app_env)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: assessments degrade to fallback text
        logger.error("Configuration error: %s", str(e))

    database = Database(app_settings.database_url, echo=app_settings.log_level == "DEBUG")
    await database.create_all()
    async with database.session() as session:
        await seed_defaults(session, app_settings)
        await session.commit()
    app.state.database = database
    app.state.assessment_service = GeminiService(app_settings)

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("AquaGuard Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        AuthenticationError  → 401 Unauthorized ({success: false, message})
        NotFoundError        → 404 Not Found
        DatabaseError        → 500 Internal Server Error
        AquaGuardError       → 500 (catch-all for custom errors)
        Exception            → 500 (unexpected errors)

    Handlers never put stack traces, SQL or file paths in the response body.
    """

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        """Wrong credentials; the login form shows `message` inline."""
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=401,
            content={
                "success": False,
                "error": "authentication_failed",
                "message": exc.message,
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
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(AquaGuardError)
    async def handle_app_error(request: Request, exc: AquaGuardError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
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
        """Catch-all; the stack trace goes to the log only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the environment-loaded
                      singleton. Tests pass their own (e.g. a temp database).

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="AquaGuard API",
        description=(
            "Property water-leak monitoring demo: locations with simulated sensor "
            "readings and Gemini-generated risk assessments."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(locations.router)
    app.include_router(assessments.router)
    app.include_router(health.router)

    # ── Static Frontend (production mode) ─────────────────────────────────
    # Registered last so API routes take precedence
    static_dir = Path(app_settings.static_dir)
    if app_settings.is_production:
        if static_dir.is_dir():
            register_frontend(app, static_dir)
        else:
            logger.warning("Production mode but static dir %s does not exist", static_dir)

    return app


def register_frontend(app: FastAPI, static_dir: Path) -> None:
    """
    Serve the built frontend: existing files as-is, index.html for any other
    GET path so client-side deep links load the app.
    """
    root = static_dir.resolve()
    index_file = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str) -> FileResponse:
        candidate = (root / full_path).resolve()
        # Never serve files outside static_dir
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        return FileResponse(index_file)


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `app.main:app` to be importable
app = create_app()
