"""
Event bus configuration settings.

Dependencies: pydantic_settings
System role: Subscriber queue sizing for the event bus
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EventBusSettings(BaseSettings):
    """Event bus delivery settings."""

    model_config = SettingsConfigDict(
        env_prefix="EVENT_BUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    subscriber_queue_size: int = Field(
        default=1000,
        gt=0,
        description="Events buffered per subscriber before new events are dropped",
    )
