"""
Provider gateway contract and LangChain implementation.

The orchestrator only knows the ProviderGateway protocol: given a request it
returns an async sequence of text fragments terminated by a result fragment,
raises on failure, and stops promptly when the request's cancellation token
fires. LangChainProviderGateway fulfils it with any LangChain chat model
selected through the model registry.

Dependencies: langchain_core, ideation.boundary.llm.model_registry
System role: Streaming access to LLM backends
"""

import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol, Union

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ideation.boundary.llm.model_registry import create_chat_model
from ideation.configs.llm import LLMSettings
from ideation.core.cancellation import CancellationToken
from ideation.core.exceptions import IdeationException, ProviderError
from ideation.models.session import MessageRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryTurn:
    """Prior transcript entry passed to the provider."""

    role: MessageRole
    content: str


@dataclass
class ProviderRequest:
    """
    One model call.

    Attributes:
        model: Provider-prefixed model id
        prompt: Current user text
        history: Earlier turns, oldest first
        system_prompt: Optional system instructions
        cancellation: Token for this turn
        cwd: Project directory the turn runs in
        session_id: Owning session, for tracing
    """

    model: str
    prompt: str
    cancellation: CancellationToken
    history: list[HistoryTurn] = field(default_factory=list)
    system_prompt: str | None = None
    cwd: str | None = None
    session_id: str | None = None


@dataclass(frozen=True)
class TextFragment:
    """Incremental piece of assistant text."""

    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True)
class ResultFragment:
    """Terminal fragment carrying the final answer or a provider-side error."""

    subtype: Literal["success", "error"] = "success"
    result: str | None = None
    error: str | None = None
    type: Literal["result"] = "result"


ProviderFragment = Union[TextFragment, ResultFragment]


class ProviderGateway(Protocol):
    """Streaming LLM access consumed by the orchestrator."""

    def execute_query(self, request: ProviderRequest) -> AsyncIterator[ProviderFragment]:
        """Stream fragments for a request."""
        ...


def chunk_text(content: Any) -> str:
    """
    Normalise LangChain chunk content to plain text.

    Bedrock and Gemini stream either strings or lists of content blocks.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict) and item.get("type", "text") == "text":
                parts.append(str(item.get("text", "")))
        return "".join(parts)
    return str(content) if content else ""


class LangChainProviderGateway:
    """ProviderGateway backed by LangChain chat models."""

    def __init__(
        self,
        settings: LLMSettings | None = None,
        model_factory: Callable[[str], BaseChatModel] | None = None,
        callbacks_factory: Callable[[], list[Any]] | None = None,
    ) -> None:
        """
        Initialize gateway.

        Args:
            settings: LLM settings used by the default model factory
            model_factory: Builds a chat model for a prefixed model id
            callbacks_factory: Supplies LangChain callbacks (tracing) per call
        """
        self._settings = settings or LLMSettings()
        self._model_factory = model_factory or (
            lambda model_id: create_chat_model(model_id, self._settings)
        )
        self._callbacks_factory = callbacks_factory
        self._models: dict[str, BaseChatModel] = {}

    def get_model(self, model_id: str) -> BaseChatModel:
        """Return the cached chat model for a model id, creating it on first use."""
        model = self._models.get(model_id)
        if model is None:
            model = self._model_factory(model_id)
            self._models[model_id] = model
        return model

    @staticmethod
    def build_messages(request: ProviderRequest) -> list[BaseMessage]:
        """Convert a request into LangChain messages."""
        messages: list[BaseMessage] = []
        if request.system_prompt:
            messages.append(SystemMessage(content=request.system_prompt))
        for turn in request.history:
            if turn.role == MessageRole.USER:
                messages.append(HumanMessage(content=turn.content))
            else:
                messages.append(AIMessage(content=turn.content))
        messages.append(HumanMessage(content=request.prompt))
        return messages

    async def execute_query(self, request: ProviderRequest) -> AsyncIterator[ProviderFragment]:
        """
        Stream fragments from the chat model.

        Args:
            request: Model call description

        Yields:
            TextFragment per non-empty chunk, then one success ResultFragment

        Raises:
            TurnCancelledError: If the token fires mid-stream
            ProviderError: If the model call fails
            ModelResolutionError: If the model id cannot be mapped to a provider
        """
        model = self.get_model(request.model)
        messages = self.build_messages(request)

        config: dict[str, Any] = {
            "run_name": "ideation-turn",
            "metadata": {"session_id": request.session_id, "model": request.model},
        }
        if self._callbacks_factory is not None:
            callbacks = self._callbacks_factory()
            if callbacks:
                config["callbacks"] = callbacks

        logger.info(
            f"{__name__}:execute_query - START model={request.model} "
            f"history={len(request.history)} session_id={request.session_id}"
        )

        full_text = ""
        chunk_count = 0
        try:
            async for chunk in model.astream(messages, config=config):
                request.cancellation.raise_if_cancelled(request.session_id)
                text = chunk_text(chunk.content)
                if not text:
                    continue
                full_text += text
                chunk_count += 1
                yield TextFragment(text=text)
        except IdeationException:
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:execute_query - FAILED model={request.model}: {type(e).__name__}: {e}"
            )
            raise ProviderError(f"{type(e).__name__}: {e}", model=request.model) from e

        logger.info(
            f"{__name__}:execute_query - END chunks={chunk_count} answer_len={len(full_text)}"
        )
        yield ResultFragment(subtype="success", result=full_text)

