"""
Langfuse tracing integration.

Singleton tracer that owns the Langfuse client and hands out LangChain
callback handlers for model calls. Inactive when tracing is disabled or keys
are missing, in which case no callbacks are attached.

Dependencies: langfuse, ideation.configs
System role: Tracing for streamed ideation turns
"""

import logging
from typing import Any

from langfuse import Langfuse

from ideation.configs import get_settings

logger = logging.getLogger(__name__)


class LangfuseTracer:
    """Langfuse tracer singleton."""

    _instance: "LangfuseTracer | None" = None
    _client: Langfuse | None = None
    _enabled: bool = False

    def __new__(cls) -> "LangfuseTracer":
        """Singleton pattern for tracer instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self) -> None:
        """Initialize Langfuse client with configuration."""
        obs_settings = get_settings().observability

        if not obs_settings.enable_tracing:
            logger.info("Langfuse tracing disabled")
            self._enabled = False
            return

        if not obs_settings.langfuse_public_key or not obs_settings.langfuse_secret_key:
            logger.warning("Langfuse keys not configured, tracing inactive")
            self._enabled = False
            return

        self._client = Langfuse(
            public_key=obs_settings.langfuse_public_key,
            secret_key=obs_settings.langfuse_secret_key,
            host=obs_settings.langfuse_host,
        )
        self._public_key = obs_settings.langfuse_public_key
        self._enabled = True
        logger.info("Langfuse tracer initialized: host=%s", obs_settings.langfuse_host)

    @property
    def is_enabled(self) -> bool:
        """Check if tracing is active."""
        return self._enabled

    def langchain_callbacks(self) -> list[Any]:
        """
        Callback handlers to attach to a LangChain model call.

        Returns:
            list: A Langfuse CallbackHandler when enabled, otherwise empty
        """
        if not self._enabled:
            return []

        from langfuse.langchain import CallbackHandler

        return [CallbackHandler(public_key=self._public_key)]

    def flush(self) -> None:
        """Send buffered traces."""
        if self._client is not None:
            self._client.flush()


def get_tracing_callbacks() -> list[Any]:
    """Callbacks for model calls from the process-wide tracer."""
    return LangfuseTracer().langchain_callbacks()
