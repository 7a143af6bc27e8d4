"""
Session event schemas.

Closed set of events the orchestrator publishes on the event bus. Each event
kind is its own model tagged by `type`, so consumers match on the variant
instead of probing optional fields.

Channels:
    ideation:session-started  session-started
    ideation:session-ended    session-ended
    ideation:stream           message, stream, message-complete, aborted, error

Dependencies: pydantic, ideation.models.session
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from ideation.models.session import IdeationMessage


class EventChannel(str, Enum):
    """Bus channel an event is published under."""

    SESSION_STARTED = "ideation:session-started"
    SESSION_ENDED = "ideation:session-ended"
    STREAM = "ideation:stream"


class _SessionEventBase(BaseModel):
    """Fields shared by every event."""

    session_id: str

    @property
    def channel(self) -> EventChannel:
        """Channel the event is published under."""
        return EventChannel.STREAM

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "event": self.channel.value,
            "data": self.model_dump(mode="json"),
        }


class SessionStartedEvent(_SessionEventBase):
    """A session was created and checkpointed."""

    type: Literal["session-started"] = "session-started"
    project_path: str

    @property
    def channel(self) -> EventChannel:
        return EventChannel.SESSION_STARTED


class SessionEndedEvent(_SessionEventBase):
    """A session was stopped and marked completed."""

    type: Literal["session-ended"] = "session-ended"

    @property
    def channel(self) -> EventChannel:
        return EventChannel.SESSION_ENDED


class MessageEvent(_SessionEventBase):
    """The user message that opened a turn, echoed back."""

    type: Literal["message"] = "message"
    message: IdeationMessage


class StreamChunkEvent(_SessionEventBase):
    """
    Incremental assistant output.

    Attributes:
        content: Cumulative assistant text so far
        done: Always False for stream events
    """

    type: Literal["stream"] = "stream"
    content: str
    done: Literal[False] = False


class MessageCompleteEvent(_SessionEventBase):
    """The finalized assistant message of a turn."""

    type: Literal["message-complete"] = "message-complete"
    message: IdeationMessage
    content: str
    done: Literal[True] = True


class AbortedEvent(_SessionEventBase):
    """The turn was cancelled before completion."""

    type: Literal["aborted"] = "aborted"


class ErrorEvent(_SessionEventBase):
    """The turn failed; the session stays usable."""

    type: Literal["error"] = "error"
    error: str


SessionEvent = Annotated[
    Union[
        SessionStartedEvent,
        SessionEndedEvent,
        MessageEvent,
        StreamChunkEvent,
        MessageCompleteEvent,
        AbortedEvent,
        ErrorEvent,
    ],
    Field(discriminator="type"),
]

session_event_adapter: TypeAdapter[SessionEvent] = TypeAdapter(SessionEvent)


def parse_event(data: dict[str, Any]) -> SessionEvent:
    """
    Rebuild an event from its `data` payload.

    Args:
        data: Dict produced by `event.to_dict()["data"]`

    Returns:
        SessionEvent: The matching event variant
    """
    return session_event_adapter.validate_python(data)
