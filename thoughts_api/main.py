"""
Happy Thoughts API — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Run by uvicorn (uvicorn thoughts_api.main:app) or python -m thoughts_api.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  GET /   │ │  /thoughts ...  │ │ GET /health  │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ MalformedId→400 │ NotFound→404│  │
    │  │ Storage→500/400 │ Unexpected→500              │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Check the database connection (logged, never fatal)
    3. Seed sample thoughts if SEED_DATABASE is set

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from thoughts_api import __version__
from thoughts_api.config import settings
from thoughts_api.database import async_session_factory, check_connection, dispose_engine
from thoughts_api.exceptions import ThoughtsAPIError, ThoughtValidationError
from thoughts_api.middleware.logging import RequestLoggingMiddleware
from thoughts_api.middleware.request_id import RequestIDMiddleware, request_id_var
from thoughts_api.routes import health, root, thoughts
from thoughts_api.seed import seed_thoughts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

async def seed_database() -> None:
    async with async_session_factory() as session:
        try:
            await seed_thoughts(session)
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error("Seeding sample thoughts failed: %s", str(e))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Run startup checks, yield to serve requests, then release the engine."""
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Happy Thoughts API %s starting up...", __version__)

    # A database that is down at startup is reported, not fatal: requests
    # fail with 500 until it comes back
    if await check_connection():
        logger.info("Connected to database")
        if settings.seed_database:
            await seed_database()
    else:
        logger.error("Could not connect to the database at startup; continuing without it")

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Happy Thoughts API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and JSON bodies.

    Handler hierarchy:
        ThoughtsAPIError (and subclasses) → exc.status_code, exc.to_response()
        RequestValidationError            → 400 in the "Validation failed" shape
        Exception (fallback)              → 500
    """

    @app.exception_handler(ThoughtsAPIError)
    async def handle_thoughts_error(request: Request, exc: ThoughtsAPIError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.label, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, exc.label, exc.message or "")
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed JSON bodies are reported like any other validation failure."""
        messages = [
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid')}"
            for error in exc.errors()
        ]
        body = ThoughtValidationError(messages or ["Invalid request body"])
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), body.message)
        return JSONResponse(status_code=400, content=body.to_response())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc)},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Happy Thoughts API",
        description="Post short happy thoughts, like them, edit and delete them.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → CORS
    origins = settings.cors_origins_list or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(thoughts.router)
    app.include_router(health.router)

    return app


app = create_app()
