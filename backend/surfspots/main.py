"""
SurfSpots Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Keeps middleware, routers, error mapping and startup/shutdown in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn surfspots.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐ │
    │  │ Req ID   │→│  Logging        │→│ GZip │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  /spots  /management/*  /auth/token  /health        │
    │                                                     │
    │  Exception Handlers:                                │
    │  SurfSpotsError → status by ErrorKind               │
    │  RequestValidationError → 400 │ Exception → 500     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Check production configuration (logged, not fatal)
    3. Open the shared Nominatim HTTP client

    Shutdown:
    1. Close the HTTP client
    2. Dispose the database engine (close all pooled connections)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from surfspots import __version__
from surfspots.config import settings
from surfspots.database import dispose_engine
from surfspots.exceptions import ErrorKind, SurfSpotsError, ValidationError
from surfspots.geo.nominatim import NominatimLocationSource
from surfspots.log import setup_logging
from surfspots.middleware.logging import RequestLoggingMiddleware
from surfspots.middleware.request_id import RequestIDMiddleware, request_id_var
from surfspots.routes import auth, health, management, surfer

logger = logging.getLogger(__name__)

# What: HTTP status for each application error kind
# Why a table: new error classes pick a kind instead of registering a handler
STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.EMPTY_UPDATE: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.UNAUTHORIZED: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.LOCATION_SOURCE: 502,
    ErrorKind.DATABASE: 500,
}


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("SurfSpots Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: public search and health checks work without auth config
        logger.error("Configuration error: %s", str(e))

    # Why one client: connection pooling across requests; closed on shutdown
    http_client = httpx.AsyncClient(timeout=settings.nominatim_timeout)
    app.state.location_source = NominatimLocationSource(
        client=http_client,
        base_url=settings.nominatim_base_url,
        max_attempts=settings.retry_max_attempts,
        min_wait=settings.retry_min_wait,
        max_wait=settings.retry_max_wait,
    )
    logger.info("Location source: Nominatim at %s", settings.nominatim_base_url)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("SurfSpots Backend shutting down...")
    await http_client.aclose()
    # Why: returns pooled connections so PostgreSQL frees their backends
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Every application error carries an ErrorKind; the status code is looked
    up from it. Server-side failures never expose their context to clients.
    """

    @app.exception_handler(SurfSpotsError)
    async def handle_surfspots_error(request: Request, exc: SurfSpotsError):
        rid = request_id_var.get("")
        status_code = STATUS_BY_KIND.get(exc.kind, 500)
        content = {
            "error": exc.kind.value,
            "message": exc.message,
            "request_id": rid,
        }

        # Why: clients need every failed field, not just the first
        if isinstance(exc, ValidationError):
            content["fields"] = [
                {"field": v.field, "description": v.description} for v in exc.errors
            ]

        # Why split: context may hold SQL or upstream details; it stays in the logs
        if status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s",
                rid,
                type(exc).__name__,
                exc.message,
                exc.context,
            )
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)

        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed query/body values (e.g. latitude=abc) in the same shape as ours."""
        rid = request_id_var.get("")
        fields = [
            {
                "field": str(error["loc"][-1]) if error.get("loc") else "",
                "description": error.get("msg", "Invalid value."),
            }
            for error in exc.errors()
        ]
        message = (
            "1 rule failed validation"
            if len(fields) == 1
            else f"{len(fields)} rules failed validation"
        )
        return JSONResponse(
            status_code=400,
            content={
                "error": ErrorKind.VALIDATION.value,
                "message": message,
                "fields": fields,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the stack trace is logged server-side only."""
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

def create_app() -> FastAPI:
    app = FastAPI(
        title="SurfSpots API",
        description=(
            "Surf spot directory. Anyone can browse and search spots; "
            "administrators manage them and look up locations by coordinates."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    # Why CORS: browser clients on the cors_origins list run on other origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    # Why minimum_size=500: compressing tiny JSON bodies costs more than it saves
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(surfer.router)
    app.include_router(management.router)
    app.include_router(auth.router)
    app.include_router(health.router)

    return app


# Why module-level: uvicorn expects `surfspots.main:app` to be importable
app = create_app()
