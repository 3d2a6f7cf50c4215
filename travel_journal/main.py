"""FastAPI application for Travel Journal.

This module provides the main FastAPI application with health endpoints,
API routes, error mapping and lifecycle management.

Run with:
    uvicorn travel_journal.main:app --reload

Examples:
    >>> # Health check
    >>> curl http://localhost:8000/health

    >>> # API docs
    >>> # Open http://localhost:8000/docs

Tests:
    - tests/unit/test_main.py
    - tests/integration/test_api_journals.py
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from travel_journal import __version__
from travel_journal.api import router as api_router
from travel_journal.config import StorageBackendType, get_settings
from travel_journal.database import check_db_connection, close_db, init_db
from travel_journal.errors import ConfigurationError, JournalError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str
    database: bool
    storage_configured: bool


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Creates tables on startup and closes connections on shutdown. Missing
    storage configuration is only reported here; it fails uploads, not startup.
    """
    logger.info(f"Starting Travel Journal v{__version__} ({settings.ENVIRONMENT.value})")
    logger.info(f"Document store: {'SQLite' if settings.is_sqlite else 'PostgreSQL'}")

    try:
        await init_db()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")

    if not settings.storage_configured:
        logger.warning("BLOB_CONNECTION_STRING is not set; uploads will fail until configured")

    yield

    logger.info("Shutting down Travel Journal")
    await close_db()


settings = get_settings()

app = FastAPI(
    title="Travel Journal",
    description="Journal entries with likes, comments and image uploads",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

if settings.STORAGE_BACKEND == StorageBackendType.LOCAL:
    Path(settings.LOCAL_BLOB_ROOT).mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.LOCAL_BLOB_ROOT), name="uploads")


# Exception handlers
@app.exception_handler(JournalError)
async def journal_error_handler(request, exc: JournalError):
    """Map typed errors to stable status codes without leaking internals."""
    if isinstance(exc, ConfigurationError):
        logger.error(f"Storage configuration error: {exc.message}")
    elif exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.response_message, "detail": None},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc: RequestValidationError):
    """Report malformed request bodies as 400 like other validation errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request",
            "detail": str(exc.errors()) if settings.expose_error_details else None,
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions with consistent response format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "detail": None},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.expose_error_details else None,
        },
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Check application health.

    Returns:
        HealthResponse with database and storage status.
    """
    db_healthy = await check_db_connection()

    return HealthResponse(
        status="healthy" if db_healthy else "degraded",
        version=__version__,
        environment=settings.ENVIRONMENT.value,
        database=db_healthy,
        storage_configured=settings.storage_configured,
    )


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint with basic info."""
    return {
        "name": "Travel Journal",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "travel_journal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
