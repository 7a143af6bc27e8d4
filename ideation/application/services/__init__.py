"""Application services."""

from ideation.application.services.idea_service import IdeaService
from ideation.application.services.session_orchestrator import (
    SessionOrchestrator,
    TurnHandle,
)

__all__ = ["IdeaService", "SessionOrchestrator", "TurnHandle"]
