"""FastAPI application entry point for budget-tracker-service.

Configures middleware, exception handlers, lifecycle hooks, and routes.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.db.session import create_all_tables
from app.routes import health
from app.routes.links import router as links_router
from app.routes.purchases import router as purchases_router
from app.schemas.common import ErrorResponse

# ---------------------------------------------------------------------------
# Logging Configuration
# ---------------------------------------------------------------------------

# Configure root logger with level from settings
logging.basicConfig(
    level=settings.get_log_level_int(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup / shutdown lifecycle."""
    # --- Startup ---
    logger.info(
        "Starting budget-tracker-service (env=%s, port=%d)",
        settings.service_env,
        settings.port,
    )

    # Ensure tables exist (dev convenience - production uses alembic)
    if settings.service_env == "development":
        try:
            # Import models so Base.metadata knows about them
            import app.models  # noqa: F401

            create_all_tables()
            logger.info("Database tables ensured (dev mode) at %s", settings.database_url)
        except Exception:
            logger.warning(
                "Could not auto-create tables (database may not be available). "
                "Use 'alembic upgrade head' to create tables."
            )

    logger.info(
        "Link extraction: timeout=%dms, max_redirects=%d",
        settings.link_fetch_timeout_ms,
        settings.link_fetch_max_redirects,
    )

    yield

    # --- Shutdown ---
    logger.info("Shutting down budget-tracker-service")


# ---------------------------------------------------------------------------
# App instance
# ---------------------------------------------------------------------------

app = FastAPI(
    title="budget-tracker API",
    version=health.SERVICE_VERSION,
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log every request with method, path, status, and duration."""
    start = time.monotonic()
    response = await call_next(request)
    duration_ms = (time.monotonic() - start) * 1000
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


# ---------------------------------------------------------------------------
# Global exception handler
# ---------------------------------------------------------------------------


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler that returns a structured JSON error."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error={
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
            }
        ).model_dump(),
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

# Health check at /health (no prefix)
app.include_router(health.router)

# Purchases, totals and rooms (prefixed with /api)
app.include_router(purchases_router)

# Product link extraction (prefixed with /api)
app.include_router(links_router)
