"""
Pydantic models.

Session, idea and event schemas shared by the service layer and the API.
"""

from ideation.models.events import EventChannel, SessionEvent, parse_event
from ideation.models.idea import (
    CreateIdeaInput,
    Idea,
    IdeaCategory,
    IdeaLevel,
    IdeaStatus,
    UpdateIdeaInput,
)
from ideation.models.session import (
    IdeationMessage,
    IdeationSession,
    IdeationSessionWithMessages,
    MessageRole,
    SendMessageOptions,
    SessionSnapshot,
    SessionStatus,
    StartSessionOptions,
)

__all__ = [
    "CreateIdeaInput",
    "EventChannel",
    "Idea",
    "IdeaCategory",
    "IdeaLevel",
    "IdeaStatus",
    "IdeationMessage",
    "IdeationSession",
    "IdeationSessionWithMessages",
    "MessageRole",
    "SendMessageOptions",
    "SessionEvent",
    "SessionSnapshot",
    "SessionStatus",
    "StartSessionOptions",
    "UpdateIdeaInput",
    "parse_event",
]
