"""
Idea domain models and schemas.

Ideas are brainstorming outcomes stored next to sessions. The session model
reuses IdeaCategory to tag the focus area of a conversation.

Dependencies: pydantic
System role: Idea data model and request contracts
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IdeaCategory(str, Enum):
    """Focus area of an idea or ideation session."""

    FEATURE = "feature"
    UX_UI = "ux-ui"
    DX = "dx"
    GROWTH = "growth"
    TECHNICAL = "technical"
    SECURITY = "security"
    PERFORMANCE = "performance"
    ACCESSIBILITY = "accessibility"
    ANALYTICS = "analytics"


class IdeaStatus(str, Enum):
    """Maturity of an idea."""

    RAW = "raw"
    REFINED = "refined"
    READY = "ready"
    ARCHIVED = "archived"


class IdeaLevel(str, Enum):
    """Coarse rating used for impact and effort."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


_camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Idea(BaseModel):
    """Stored idea."""

    model_config = _camel_config

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    description: str = ""
    category: IdeaCategory
    status: IdeaStatus = IdeaStatus.RAW
    impact: IdeaLevel = IdeaLevel.MEDIUM
    effort: IdeaLevel = IdeaLevel.MEDIUM
    conversation_id: str | None = None
    source_prompt_id: str | None = None
    user_stories: list[str] | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CreateIdeaInput(BaseModel):
    """Request schema for creating an idea."""

    model_config = _camel_config

    title: str = Field(min_length=1, description="Short idea title")
    description: str = ""
    category: IdeaCategory
    status: IdeaStatus = IdeaStatus.RAW
    impact: IdeaLevel = IdeaLevel.MEDIUM
    effort: IdeaLevel = IdeaLevel.MEDIUM
    conversation_id: str | None = Field(
        default=None, description="Session the idea came out of"
    )
    source_prompt_id: str | None = None
    user_stories: list[str] | None = None
    notes: str | None = None


class UpdateIdeaInput(BaseModel):
    """Partial update for an idea; unset fields are left unchanged."""

    model_config = _camel_config

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: IdeaCategory | None = None
    status: IdeaStatus | None = None
    impact: IdeaLevel | None = None
    effort: IdeaLevel | None = None
    user_stories: list[str] | None = None
    notes: str | None = None
