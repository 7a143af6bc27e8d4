"""
Pydantic models for prompt registry configuration.

Dependencies: pydantic
System role: Model parameters stored next to registered prompts
"""

from typing import Any

from pydantic import BaseModel, Field


class ModelConfig(BaseModel):
    """
    Model parameters recorded with a prompt version.

    Attributes:
        model: Model alias or provider-prefixed id (e.g. "sonnet")
        temperature: Sampling temperature
        max_tokens: Maximum tokens in response
        extra: Additional provider-specific parameters
    """

    model: str = Field(description="Model alias or provider-prefixed id")
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)
    extra: dict[str, Any] | None = None

    def to_langfuse_config(self) -> dict[str, Any]:
        """Flatten into the `config` payload Langfuse stores with a prompt."""
        config: dict[str, Any] = {"model": self.model}
        if self.temperature is not None:
            config["temperature"] = self.temperature
        if self.max_tokens is not None:
            config["max_tokens"] = self.max_tokens
        if self.extra:
            config.update(self.extra)
        return config
