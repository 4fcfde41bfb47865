"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, auditscan.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auditscan.api.deps.dependencies import get_service_cache
from auditscan.boundary.db import get_async_engine
from auditscan.boundary.db.create_tables import create_all_tables
from auditscan.configs import get_settings
from auditscan.observability import configure_logging
from auditscan.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import health_router, scans_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    if settings.database.create_tables_on_startup:
        await create_all_tables()
    cache = get_service_cache()
    _ = cache.dispatcher
    logger.info("Scan dispatcher ready")

    yield

    # Shutdown
    await cache.dispatcher.drain(timeout=settings.scans.shutdown_grace_seconds)
    cache.clear()
    await get_async_engine().dispose()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="AuditScan API",
        description="Scan job lifecycle orchestration for project audits",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(scans_router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "auditscan.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
