"""
Shared settings for the ideation service.

Common fields every settings class inherits: deployment environment, debug
flag and the root log level handed to configure_logging at startup.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Common settings read from the environment or `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment name, attached to startup logs",
    )
    debug: bool = Field(
        default=False,
        description="Verbose mode; forces DEBUG logging",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for configure_logging",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def effective_log_level(self) -> str:
        """Log level actually applied: DEBUG in debug mode, else log_level."""
        return "DEBUG" if self.debug else self.log_level
