"""
Core domain module.

Exception hierarchy, cooperative cancellation and the in-process event bus.
"""

from ideation.core.cancellation import CancellationToken
from ideation.core.event_bus import EventBus, Subscription
from ideation.core.exceptions import (
    IdeaNotFoundError,
    IdeationException,
    PersistenceError,
    ProviderError,
    SessionAlreadyRunningError,
    SessionNotFoundError,
    TurnCancelledError,
    ValidationError,
)

__all__ = [
    "CancellationToken",
    "EventBus",
    "IdeaNotFoundError",
    "IdeationException",
    "PersistenceError",
    "ProviderError",
    "SessionAlreadyRunningError",
    "SessionNotFoundError",
    "Subscription",
    "TurnCancelledError",
    "ValidationError",
]
