"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, ideation.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ideation.api.deps.dependencies import get_service_cache
from ideation.configs import get_settings
from ideation.observability.langfuse_tracer import LangfuseTracer
from ideation.observability.logger import configure_logging
from ideation.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    events_stream_router,
    health_router,
    ideas_router,
    sessions_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the service graph on startup; cancels running turns and flushes
    traces on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.effective_log_level)
    logger = logging.getLogger("uvicorn")
    logger.info(
        "Starting ideation service: environment=%s log_level=%s",
        settings.environment, settings.effective_log_level,
    )

    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.orchestrator
    logger.info("Service cache pre-warmed")

    yield

    await cache.shutdown()
    LangfuseTracer().flush()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Ideation Session API",
        description="Streaming AI ideation sessions with disk-checkpointed transcripts",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added last so it runs first and logging below sees the correlation id
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(sessions_router, prefix="/api/v1")
    app.include_router(ideas_router, prefix="/api/v1")
    app.include_router(events_stream_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "ideation.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
