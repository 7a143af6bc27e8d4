"""API routers."""

from ideation.api.routers.events_stream import router as events_stream_router
from ideation.api.routers.health import router as health_router
from ideation.api.routers.ideas import router as ideas_router
from ideation.api.routers.sessions import router as sessions_router

__all__ = [
    "events_stream_router",
    "health_router",
    "ideas_router",
    "sessions_router",
]
