"""
Observability configuration settings.

Settings for Langfuse tracing and the prompt registry.

Dependencies: pydantic_settings
System role: Observability configuration for tracing and prompt versioning
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """Observability configuration for Langfuse."""

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    langfuse_public_key: str | None = Field(
        default=None,
        description="Langfuse public key for tracing",
    )
    langfuse_secret_key: str | None = Field(
        default=None,
        description="Langfuse secret key for tracing",
    )
    langfuse_host: str = Field(
        default="http://localhost:3000",
        description="Langfuse server host URL",
    )
    enable_tracing: bool = Field(
        default=True,
        validation_alias="LANGFUSE_ENABLE_TRACING",
        description="Enable Langfuse tracing",
    )
    use_prompt_registry: bool = Field(
        default=False,
        validation_alias="LANGFUSE_USE_PROMPT_REGISTRY",
        description="Fetch the ideation system prompt from Langfuse",
    )
    prompt_label: str | None = Field(
        default=None,
        validation_alias="LANGFUSE_PROMPT_LABEL",
        description="Label filter when fetching prompts from the registry",
    )
