"""FastAPI dependencies."""

from ideation.api.deps.dependencies import (
    ServiceCache,
    get_event_bus,
    get_idea_service,
    get_orchestrator,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_event_bus",
    "get_idea_service",
    "get_orchestrator",
    "get_service_cache",
    "get_settings_dependency",
]
