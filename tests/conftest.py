"""
Shared test fixtures and configuration for entire test suite.

Provides: project directories, storage settings, event bus recorder,
scripted provider gateway, orchestrator factory
Dependencies: pytest, pytest-asyncio
System role: Test infrastructure and fixture management
"""

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from ideation.application.services.session_orchestrator import SessionOrchestrator
from ideation.boundary.llm.provider_gateway import (
    ProviderFragment,
    ProviderRequest,
    ResultFragment,
    TextFragment,
)
from ideation.boundary.storage.session_store import SessionStore
from ideation.configs.storage import StorageSettings
from ideation.core.event_bus import EventBus
from ideation.models.events import SessionEvent


class ScriptedGateway:
    """
    Provider gateway that replays a fixed script.

    Args:
        chunks: Text fragments to yield, in order
        result: Final result text (None = no result text)
        fail_after: Raise after yielding this many chunks
        hang: Block forever after the chunks, until the turn is cancelled
        error_result: Finish with an error result fragment carrying this text
    """

    def __init__(
        self,
        chunks: tuple[str, ...] = ("Hel", "lo ", "there"),
        result: str | None = None,
        fail_after: int | None = None,
        hang: bool = False,
        error_result: str | None = None,
    ) -> None:
        self.chunks = chunks
        self.result = result
        self.fail_after = fail_after
        self.hang = hang
        self.error_result = error_result
        self.requests: list[ProviderRequest] = []
        self.streaming = asyncio.Event()
        self.closed = False

    async def execute_query(self, request: ProviderRequest) -> AsyncIterator[ProviderFragment]:
        self.requests.append(request)
        try:
            for index, chunk in enumerate(self.chunks):
                if self.fail_after is not None and index == self.fail_after:
                    raise RuntimeError("provider exploded")
                yield TextFragment(text=chunk)
                self.streaming.set()
            if self.hang:
                await asyncio.Event().wait()
            if self.error_result is not None:
                yield ResultFragment(subtype="error", error=self.error_result)
                return
            yield ResultFragment(subtype="success", result=self.result)
        finally:
            self.closed = True


class EventRecorder:
    """Bus listener collecting every emitted event."""

    def __init__(self) -> None:
        self.events: list[SessionEvent] = []

    def __call__(self, event: SessionEvent) -> None:
        self.events.append(event)

    def types(self, session_id: str | None = None) -> list[str]:
        return [
            e.type for e in self.events
            if session_id is None or e.session_id == session_id
        ]

    def of_type(self, event_type: str) -> list[SessionEvent]:
        return [e for e in self.events if e.type == event_type]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Existing project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def storage_settings() -> StorageSettings:
    """Default storage layout."""
    return StorageSettings(data_dir_name=".ideation", allowed_root=None)


@pytest.fixture
def session_store(storage_settings: StorageSettings) -> SessionStore:
    return SessionStore(storage_settings)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus(queue_size=100)


@pytest.fixture
def recorder(event_bus: EventBus) -> EventRecorder:
    """Recorder attached to the event bus."""
    recorder = EventRecorder()
    event_bus.add_listener(recorder)
    return recorder


@pytest.fixture
def gateway() -> ScriptedGateway:
    return ScriptedGateway()


@pytest.fixture
def make_orchestrator(event_bus: EventBus, session_store: SessionStore):
    """Factory building an orchestrator around a given gateway."""

    def _make(gateway, context_builder=None, store: SessionStore | None = None) -> SessionOrchestrator:
        return SessionOrchestrator(
            event_bus=event_bus,
            session_store=store or session_store,
            gateway=gateway,
            context_builder=context_builder,
        )

    return _make


@pytest.fixture
def orchestrator(make_orchestrator, gateway: ScriptedGateway) -> SessionOrchestrator:
    return make_orchestrator(gateway)


@pytest.fixture
def make_gateway() -> type[ScriptedGateway]:
    """ScriptedGateway class, for tests that need a custom script."""
    return ScriptedGateway
