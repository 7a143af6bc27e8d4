"""
Dependency injection container.

Builds the process-wide service graph once (event bus, stores, provider
gateway, orchestrator) and exposes FastAPI dependency factories for it.

Dependencies: ideation.configs, ideation.application, ideation.boundary, ideation.core
System role: DI container for service injection
"""

from functools import partial

from ideation.application.prompt_context import IdeationContextBuilder
from ideation.application.services import IdeaService, SessionOrchestrator
from ideation.boundary.llm import LangChainProviderGateway
from ideation.boundary.storage import IdeaStore, SessionStore, validate_project_path
from ideation.configs import Settings, get_settings
from ideation.core.event_bus import EventBus
from ideation.observability.langfuse_tracer import get_tracing_callbacks


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._event_bus: EventBus | None = None
        self._session_store: SessionStore | None = None
        self._idea_store: IdeaStore | None = None
        self._gateway: LangChainProviderGateway | None = None
        self._context_builder: IdeationContextBuilder | None = None
        self._orchestrator: SessionOrchestrator | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def event_bus(self) -> EventBus:
        """Get cached event bus."""
        if self._event_bus is None:
            self._event_bus = EventBus(
                queue_size=self.settings.events.subscriber_queue_size,
            )
        return self._event_bus

    @property
    def session_store(self) -> SessionStore:
        """Get cached session snapshot store."""
        if self._session_store is None:
            self._session_store = SessionStore(self.settings.storage)
        return self._session_store

    @property
    def idea_store(self) -> IdeaStore:
        """Get cached idea store."""
        if self._idea_store is None:
            self._idea_store = IdeaStore(self.settings.storage)
        return self._idea_store

    @property
    def gateway(self) -> LangChainProviderGateway:
        """Get cached provider gateway with Langfuse callbacks when tracing is on."""
        if self._gateway is None:
            self._gateway = LangChainProviderGateway(
                settings=self.settings.llm,
                callbacks_factory=get_tracing_callbacks,
            )
        return self._gateway

    @property
    def context_builder(self) -> IdeationContextBuilder:
        """Get cached system prompt builder."""
        if self._context_builder is None:
            self._context_builder = IdeationContextBuilder(
                idea_store=self.idea_store,
                settings=self.settings.storage,
                observability=self.settings.observability,
            )
        return self._context_builder

    @property
    def orchestrator(self) -> SessionOrchestrator:
        """Get the process-wide session orchestrator."""
        if self._orchestrator is None:
            self._orchestrator = SessionOrchestrator(
                event_bus=self.event_bus,
                session_store=self.session_store,
                gateway=self.gateway,
                context_builder=self.context_builder,
                project_validator=partial(
                    validate_project_path, settings=self.settings.storage
                ),
                default_model=self.settings.llm.default_model,
            )
        return self._orchestrator

    async def shutdown(self) -> None:
        """Cancel running turns and drop all instances."""
        if self._orchestrator is not None:
            await self._orchestrator.shutdown()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._event_bus = None
        self._session_store = None
        self._idea_store = None
        self._gateway = None
        self._context_builder = None
        self._orchestrator = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_event_bus() -> EventBus:
    """
    Get event bus instance.

    Returns:
        EventBus: Process-wide event bus
    """
    return _service_cache.event_bus


def get_orchestrator() -> SessionOrchestrator:
    """
    Get session orchestrator instance.

    Returns:
        SessionOrchestrator: Process-wide orchestrator
    """
    return _service_cache.orchestrator


def get_idea_service() -> IdeaService:
    """
    Get idea service instance.

    Returns:
        IdeaService: Idea service over the cached idea store
    """
    return IdeaService(idea_store=_service_cache.idea_store)
