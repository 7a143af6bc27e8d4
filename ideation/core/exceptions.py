"""
Exception hierarchy for the ideation service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class IdeationException(Exception):
    """Base exception for all ideation service errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(IdeationException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ModelResolutionError(ValidationError):
    """Raised when a model identifier cannot be mapped to a provider."""

    def __init__(self, model: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["model"] = model
        super().__init__(f"Unsupported model: {model}", field="model", details=details)


class SessionNotFoundError(IdeationException):
    """Raised when a session is neither resident nor persisted."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found", details)


class SessionAlreadyRunningError(IdeationException):
    """Raised when a second turn is started while one is in flight."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize already-running error.

        Args:
            session_id: ID of the busy session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        self.session_id = session_id
        super().__init__("Session is already processing a message", details)


class ProviderError(IdeationException):
    """Raised when the provider gateway fails mid-turn."""

    def __init__(
        self,
        message: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            model: Model identifier that was being called
            details: Additional context
        """
        details = details or {}
        if model:
            details["model"] = model
        super().__init__(message, details)


class TurnCancelledError(IdeationException):
    """Raised inside a turn when its cancellation token fires. Not a failure."""

    def __init__(self, session_id: str | None = None, reason: str | None = None) -> None:
        details: dict[str, Any] = {}
        if session_id:
            details["session_id"] = session_id
        if reason:
            details["reason"] = reason
        super().__init__("Turn was cancelled", details)


class PersistenceError(IdeationException):
    """Raised when a snapshot write fails (non-fatal for the orchestrator)."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Error message
            path: File path that could not be written
            details: Additional context
        """
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)


class IdeaNotFoundError(IdeationException):
    """Raised when an idea cannot be found."""

    def __init__(self, idea_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["idea_id"] = idea_id
        super().__init__(f"Idea not found: {idea_id}", details)
