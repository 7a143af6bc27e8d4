"""
Session domain models and schemas.

Sessions, transcript messages, the persisted snapshot document and the
option objects accepted by the orchestrator. Serialised with camelCase keys
so snapshots on disk match the desktop application's files.

Dependencies: pydantic
System role: Session data model
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ideation.models.idea import IdeaCategory


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Random UUID4 string used for session and message ids."""
    return str(uuid.uuid4())


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        """Dump to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class SessionStatus(str, Enum):
    """Lifecycle status of a session."""

    ACTIVE = "active"
    COMPLETED = "completed"


class MessageRole(str, Enum):
    """Author of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"


class IdeationMessage(CamelModel):
    """
    One turn in a session transcript.

    Attributes:
        id: Unique message identifier
        role: user or assistant
        content: Message text
        timestamp: Creation time
    """

    id: str = Field(default_factory=new_id)
    role: MessageRole
    content: str = ""
    timestamp: datetime = Field(default_factory=utc_now)


class IdeationSession(CamelModel):
    """
    One continuous ideation conversation.

    Attributes:
        id: Opaque session identifier, immutable
        project_path: Owning project directory, immutable
        status: active until stopped, then completed
        prompt_category: Optional focus area chosen when the session started
        prompt_id: Optional id of the guided prompt that opened the session
        created_at: Creation time
        updated_at: Refreshed on every persisted mutation
    """

    id: str = Field(default_factory=new_id)
    project_path: str
    status: SessionStatus = SessionStatus.ACTIVE
    prompt_category: IdeaCategory | None = None
    prompt_id: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def touch(self) -> None:
        """Refresh updated_at."""
        self.updated_at = utc_now()


class SessionSnapshot(CamelModel):
    """Persisted `{session, messages}` document."""

    session: IdeationSession
    messages: list[IdeationMessage] = Field(default_factory=list)


class IdeationSessionWithMessages(IdeationSession):
    """Session view returned by get_session, including transcript and run flag."""

    messages: list[IdeationMessage] = Field(default_factory=list)
    is_running: bool = False


class StartSessionOptions(CamelModel):
    """Options for starting a session."""

    prompt_category: IdeaCategory | None = None
    prompt_id: str | None = None
    initial_message: str | None = None


class SendMessageOptions(CamelModel):
    """Options for a single turn."""

    model: str | None = Field(
        default=None,
        description="Model alias or provider-prefixed id; default model when omitted",
    )


class StartSessionRequest(CamelModel):
    """Request schema for starting a session."""

    project_path: str = Field(min_length=1, description="Project directory")
    prompt_category: IdeaCategory | None = None
    prompt_id: str | None = None
    initial_message: str | None = Field(
        default=None, description="Sent as the first turn right after creation"
    )

    def to_options(self) -> StartSessionOptions:
        return StartSessionOptions(
            prompt_category=self.prompt_category,
            prompt_id=self.prompt_id,
            initial_message=self.initial_message,
        )


class SendMessageRequest(CamelModel):
    """Request schema for sending a message."""

    message: str = Field(min_length=1, description="User message text")
    model: str | None = Field(default=None, description="Model alias or prefixed id")
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Abort the turn if it has not finished after this many seconds",
    )


class TurnAcceptedResponse(CamelModel):
    """Response for an accepted turn; results arrive over the event stream."""

    session_id: str
    message_id: str


class SessionRunningResponse(CamelModel):
    """Running flag of a session."""

    session_id: str
    is_running: bool
