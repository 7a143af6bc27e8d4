"""
LLM provider configuration settings.

Settings for model selection and provider credentials used by the
provider gateway.

Dependencies: pydantic_settings
System role: Model and provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Configuration for chat model providers."""

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_model: str = Field(
        default="sonnet",
        description="Model alias or prefixed id used when a turn does not name one",
    )
    aws_region: str = Field(
        default="ap-southeast-2",
        description="AWS region for Bedrock models",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for ideation turns",
    )
    max_tokens: int | None = Field(
        default=None,
        gt=0,
        description="Optional cap on response tokens",
    )
    google_api_key: str | None = Field(
        default=None,
        description="API key for Gemini models",
    )
