"""
Test suite for LangChainProviderGateway.

Streams from langchain_core's GenericFakeChatModel and small recording
fakes instead of real providers.

System role: Verification of the provider gateway contract
"""

from collections.abc import AsyncIterator
from typing import Any

import pytest
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, AIMessageChunk, HumanMessage, SystemMessage

from ideation.boundary.llm.provider_gateway import (
    HistoryTurn,
    LangChainProviderGateway,
    ProviderRequest,
    ResultFragment,
    TextFragment,
    chunk_text,
)
from ideation.core.cancellation import CancellationToken
from ideation.core.exceptions import ProviderError, TurnCancelledError
from ideation.models.session import MessageRole


class RecordingModel:
    """Chat model stand-in that records its inputs and streams fixed chunks."""

    def __init__(self, chunks: list[Any], error: Exception | None = None) -> None:
        self.chunks = chunks
        self.error = error
        self.messages = None
        self.config = None

    async def astream(self, messages, config=None) -> AsyncIterator[AIMessageChunk]:
        self.messages = messages
        self.config = config
        for content in self.chunks:
            yield AIMessageChunk(content=content)
        if self.error is not None:
            raise self.error


def make_request(**overrides) -> ProviderRequest:
    values = {
        "model": "bedrock:test-model",
        "prompt": "hello",
        "cancellation": CancellationToken(),
        "session_id": "s1",
    }
    values.update(overrides)
    return ProviderRequest(**values)


async def collect(gateway: LangChainProviderGateway, request: ProviderRequest) -> list:
    return [fragment async for fragment in gateway.execute_query(request)]


class TestChunkText:
    def test_string(self) -> None:
        assert chunk_text("abc") == "abc"

    def test_content_blocks(self) -> None:
        blocks = [{"type": "text", "text": "a"}, {"type": "tool_use", "id": "x"}, "b"]
        assert chunk_text(blocks) == "ab"

    def test_empty(self) -> None:
        assert chunk_text(None) == ""
        assert chunk_text([]) == ""


class TestBuildMessages:
    def test_system_history_prompt_order(self) -> None:
        request = make_request(
            system_prompt="be useful",
            history=[
                HistoryTurn(role=MessageRole.USER, content="q1"),
                HistoryTurn(role=MessageRole.ASSISTANT, content="a1"),
            ],
        )

        messages = LangChainProviderGateway.build_messages(request)

        assert [type(m) for m in messages] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
        assert [m.content for m in messages] == ["be useful", "q1", "a1", "hello"]

    def test_without_system_prompt(self) -> None:
        messages = LangChainProviderGateway.build_messages(make_request())

        assert [type(m) for m in messages] == [HumanMessage]


class TestExecuteQuery:
    @pytest.mark.asyncio
    async def test_streams_fake_model_then_result(self) -> None:
        """Text fragments in order, then one success result with the full text."""
        fake = GenericFakeChatModel(messages=iter([AIMessage(content="hello brave world")]))
        gateway = LangChainProviderGateway(model_factory=lambda model_id: fake)

        fragments = await collect(gateway, make_request())

        texts = [f.text for f in fragments if isinstance(f, TextFragment)]
        assert "".join(texts) == "hello brave world"
        assert len(texts) > 1
        assert fragments[-1] == ResultFragment(subtype="success", result="hello brave world")

    @pytest.mark.asyncio
    async def test_skips_empty_chunks(self) -> None:
        model = RecordingModel(["a", "", [{"type": "text", "text": "b"}]])
        gateway = LangChainProviderGateway(model_factory=lambda model_id: model)

        fragments = await collect(gateway, make_request())

        assert fragments == [
            TextFragment(text="a"),
            TextFragment(text="b"),
            ResultFragment(subtype="success", result="ab"),
        ]

    @pytest.mark.asyncio
    async def test_passes_callbacks_and_metadata(self) -> None:
        model = RecordingModel(["x"])
        handler = object()
        gateway = LangChainProviderGateway(
            model_factory=lambda model_id: model,
            callbacks_factory=lambda: [handler],
        )

        await collect(gateway, make_request())

        assert model.config["callbacks"] == [handler]
        assert model.config["metadata"] == {"session_id": "s1", "model": "bedrock:test-model"}

    @pytest.mark.asyncio
    async def test_no_callbacks_when_tracing_inactive(self) -> None:
        model = RecordingModel(["x"])
        gateway = LangChainProviderGateway(
            model_factory=lambda model_id: model,
            callbacks_factory=lambda: [],
        )

        await collect(gateway, make_request())

        assert "callbacks" not in model.config

    @pytest.mark.asyncio
    async def test_model_errors_become_provider_errors(self) -> None:
        model = RecordingModel(["partial"], error=RuntimeError("ThrottlingException"))
        gateway = LangChainProviderGateway(model_factory=lambda model_id: model)

        with pytest.raises(ProviderError) as exc_info:
            await collect(gateway, make_request())

        assert "ThrottlingException" in exc_info.value.message
        assert exc_info.value.details["model"] == "bedrock:test-model"

    @pytest.mark.asyncio
    async def test_cancelled_token_stops_stream(self) -> None:
        model = RecordingModel(["a", "b"])
        gateway = LangChainProviderGateway(model_factory=lambda model_id: model)
        token = CancellationToken()
        token.cancel("stopped")

        with pytest.raises(TurnCancelledError):
            await collect(gateway, make_request(cancellation=token))

    def test_models_cached_per_id(self) -> None:
        created = []

        def factory(model_id: str):
            created.append(model_id)
            return RecordingModel([])

        gateway = LangChainProviderGateway(model_factory=factory)

        first = gateway.get_model("bedrock:a")
        second = gateway.get_model("bedrock:a")
        gateway.get_model("google:b")

        assert first is second
        assert created == ["bedrock:a", "google:b"]
