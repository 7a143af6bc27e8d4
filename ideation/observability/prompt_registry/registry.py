"""
Langfuse prompt registry for versioned prompt management.

Singleton registry that pushes LangChain chat templates to Langfuse as new
prompt versions and pulls them back as ChatPromptTemplates.

Dependencies: langfuse, ideation.configs, ideation.observability.prompt_registry
System role: Prompt version control and retrieval
"""

import logging
from typing import TYPE_CHECKING

from langchain_core.prompts import ChatPromptTemplate
from langfuse import Langfuse

from ideation.configs import get_settings
from ideation.observability.prompt_registry.converter import convert_chat_template
from ideation.observability.prompt_registry.models import ModelConfig

if TYPE_CHECKING:
    from langfuse.model import ChatPromptClient

logger = logging.getLogger(__name__)


class PromptRegistry:
    """
    Singleton registry for Langfuse prompt management.

    Inactive unless tracing is enabled and Langfuse keys are configured; every
    method then returns None so callers fall back to their local template.

    Example:
        >>> registry = PromptRegistry()
        >>> registry.register_prompt(
        ...     name="ideation-system",
        ...     template=IDEATION_PROMPT,
        ...     config=ModelConfig(model="sonnet", temperature=0.7),
        ...     labels=["production"],
        ... )
    """

    _instance: "PromptRegistry | None" = None
    _client: Langfuse | None = None
    _enabled: bool = False

    def __new__(cls) -> "PromptRegistry":
        """Singleton pattern for registry instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self) -> None:
        obs_settings = get_settings().observability

        if not obs_settings.enable_tracing:
            logger.info("Langfuse tracing disabled, prompt registry inactive")
            self._enabled = False
            return

        if not obs_settings.langfuse_public_key or not obs_settings.langfuse_secret_key:
            logger.warning("Langfuse keys not configured, prompt registry inactive")
            self._enabled = False
            return

        self._client = Langfuse(
            public_key=obs_settings.langfuse_public_key,
            secret_key=obs_settings.langfuse_secret_key,
            host=obs_settings.langfuse_host,
        )
        self._enabled = True
        logger.info("Prompt registry initialized: host=%s", obs_settings.langfuse_host)

    @property
    def is_enabled(self) -> bool:
        """Check if registry is active."""
        return self._enabled

    def register_prompt(
        self,
        name: str,
        template: ChatPromptTemplate,
        config: ModelConfig,
        labels: list[str] | None = None,
    ) -> "ChatPromptClient | None":
        """
        Create a prompt, or a new version of it, in Langfuse.

        Args:
            name: Prompt name
            template: LangChain chat template
            config: Model parameters stored with the version
            labels: Optional labels (e.g. ["production"])

        Returns:
            ChatPromptClient: Created prompt, or None if disabled
        """
        if not self._enabled or self._client is None:
            logger.debug("Prompt registry disabled, skipping registration: name=%s", name)
            return None

        labels = labels or []
        prompt = self._client.create_prompt(
            name=name,
            type="chat",
            prompt=convert_chat_template(template),
            config=config.to_langfuse_config(),
            labels=labels,
        )
        logger.info(
            "Registered chat prompt: name=%s version=%s labels=%s",
            name, prompt.version, labels,
        )
        return prompt

    def get_langchain_prompt(
        self,
        name: str,
        label: str | None = None,
    ) -> ChatPromptTemplate | None:
        """
        Fetch a chat prompt and rebuild it as a ChatPromptTemplate.

        The Langfuse prompt object is attached as `langfuse_prompt` metadata so
        traced generations link back to the prompt version.

        Args:
            name: Prompt name
            label: Optional label filter

        Returns:
            ChatPromptTemplate: Template, or None if disabled
        """
        if not self._enabled or self._client is None:
            logger.debug("Prompt registry disabled, cannot fetch: name=%s", name)
            return None

        kwargs: dict = {"name": name, "type": "chat"}
        if label:
            kwargs["label"] = label
        prompt = self._client.get_prompt(**kwargs)
        logger.debug("Fetched prompt: name=%s version=%s", name, prompt.version)

        template = ChatPromptTemplate.from_messages(prompt.get_langchain_prompt())
        template.metadata = {"langfuse_prompt": prompt}
        return template
