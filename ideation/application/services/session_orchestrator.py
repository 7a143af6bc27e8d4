"""
Session orchestrator for streaming ideation conversations.

Owns the in-memory table of active sessions and is the only component that
changes their state. Each turn runs as its own asyncio task: the user message
is echoed, provider fragments are streamed to the event bus as cumulative
content, and the finalized transcript is checkpointed to disk. A per-session
running flag serialises turns; a fresh CancellationToken per turn lets
stop_session (or a caller-composed deadline) abort it.

Dependencies: asyncio, ideation.core, ideation.boundary, ideation.models
System role: Session lifecycle and turn orchestration
"""

import asyncio
import logging
from collections.abc import Callable
from contextlib import aclosing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from ideation.boundary.llm.model_registry import resolve_model_string
from ideation.boundary.llm.provider_gateway import (
    HistoryTurn,
    ProviderGateway,
    ProviderRequest,
    ResultFragment,
    TextFragment,
)
from ideation.boundary.storage.paths import validate_project_path
from ideation.boundary.storage.session_store import SessionStore
from ideation.core.cancellation import CancellationToken, iterate_until_cancelled
from ideation.core.event_bus import EventBus
from ideation.core.exceptions import (
    IdeationException,
    PersistenceError,
    ProviderError,
    SessionAlreadyRunningError,
    SessionNotFoundError,
    TurnCancelledError,
)
from ideation.models.events import (
    AbortedEvent,
    ErrorEvent,
    MessageCompleteEvent,
    MessageEvent,
    SessionEndedEvent,
    SessionStartedEvent,
    StreamChunkEvent,
)
from ideation.models.session import (
    IdeationMessage,
    IdeationSession,
    IdeationSessionWithMessages,
    MessageRole,
    SendMessageOptions,
    SessionStatus,
    StartSessionOptions,
)
from ideation.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    preview_text,
)

logger = logging.getLogger(__name__)


class ContextBuilder(Protocol):
    """Supplies the system prompt for a session's next turn."""

    async def build_system_prompt(self, session: IdeationSession) -> str | None:
        ...


@dataclass
class ActiveSession:
    """
    Resident session state.

    Attributes:
        session: Session record
        messages: Finalized transcript, append-only
        is_running: True while a turn is in flight
        token: Cancellation token of the in-flight turn
        task: Task running the in-flight turn
    """

    session: IdeationSession
    messages: list[IdeationMessage] = field(default_factory=list)
    is_running: bool = False
    token: CancellationToken | None = None
    task: asyncio.Task | None = None

    def view(self) -> IdeationSessionWithMessages:
        """Copy of the session with its transcript and run flag."""
        return IdeationSessionWithMessages(
            **self.session.model_dump(),
            messages=[m.model_copy() for m in self.messages],
            is_running=self.is_running,
        )


@dataclass
class TurnHandle:
    """
    In-flight turn returned by start_turn.

    Callers wanting a deadline compose it on the token:

        handle = orchestrator.start_turn(session_id, "hello")
        handle.token.cancel_after(60)
        await handle.wait()
    """

    session_id: str
    user_message: IdeationMessage
    token: CancellationToken
    task: asyncio.Task

    async def wait(self) -> None:
        """
        Wait until the turn has completed, aborted or failed.

        Cancelling the waiter (e.g. an asyncio.wait_for deadline) aborts the
        turn through its token and waits for it to settle before re-raising,
        so the turn still emits aborted and checkpoints the transcript.
        """
        try:
            await asyncio.shield(self.task)
        except asyncio.CancelledError:
            if not self.task.done():
                self.token.cancel("caller-cancelled")
                await asyncio.wait({self.task})
            raise

    def cancel(self, reason: str = "cancelled") -> None:
        """Trigger the turn's cancellation token."""
        self.token.cancel(reason)


def _same_project(stored: str, requested: str) -> bool:
    return Path(stored) == Path(requested).expanduser().resolve()


class SessionOrchestrator:
    """
    Session lifecycle and turn orchestration.

    One instance per process, constructed by the API service container and
    injected into routers.
    """

    def __init__(
        self,
        event_bus: EventBus,
        session_store: SessionStore,
        gateway: ProviderGateway,
        context_builder: ContextBuilder | None = None,
        project_validator: Callable[[str], Path] = validate_project_path,
        default_model: str = "sonnet",
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            event_bus: Bus receiving session events
            session_store: Snapshot persistence
            gateway: Streaming model access
            context_builder: Optional system prompt source
            project_validator: Validates and resolves project paths
            default_model: Model alias used when a turn names none
        """
        self._event_bus = event_bus
        self._store = session_store
        self._gateway = gateway
        self._context_builder = context_builder
        self._validate_project = project_validator
        self._default_model = default_model
        self._sessions: dict[str, ActiveSession] = {}

    @property
    def active_session_count(self) -> int:
        return len(self._sessions)

    async def start_session(
        self,
        project_path: str,
        options: StartSessionOptions | None = None,
    ) -> IdeationSession:
        """
        Create, register and checkpoint a new session.

        Args:
            project_path: Project directory owning the session
            options: Optional category, prompt id and initial message

        Returns:
            IdeationSession: The new session (status active)

        Raises:
            ValidationError: If the project path is invalid
        """
        options = options or StartSessionOptions()
        resolved = self._validate_project(project_path)

        session = IdeationSession(
            project_path=str(resolved),
            prompt_category=options.prompt_category,
            prompt_id=options.prompt_id,
        )
        active = ActiveSession(session=session)
        self._sessions[session.id] = active

        await self._checkpoint(active)

        self._event_bus.emit(
            SessionStartedEvent(session_id=session.id, project_path=session.project_path)
        )
        log_with_context(
            logger, logging.INFO, "Session started",
            session_id=session.id,
            project_path=session.project_path,
            prompt_category=options.prompt_category,
        )

        if options.initial_message:
            try:
                self.start_turn(session.id, options.initial_message)
            except IdeationException as e:
                log_exception_with_context(
                    logger, "Initial message could not be sent", e,
                    level=logging.WARNING,
                    session_id=session.id,
                )

        return session.model_copy()

    async def get_session(
        self,
        project_path: str,
        session_id: str,
    ) -> IdeationSessionWithMessages | None:
        """
        Return a session with its transcript, loading it from disk if needed.

        Args:
            project_path: Project directory the snapshot lives in
            session_id: Session identifier

        Returns:
            IdeationSessionWithMessages | None: Live view, or None if unknown or
                owned by another project

        Raises:
            ValidationError: If session_id is not a safe file name
        """
        active = self._sessions.get(session_id)
        if active is not None:
            if not _same_project(active.session.project_path, project_path):
                return None
            return active.view()

        snapshot = await self._store.load(project_path, session_id)
        if snapshot is None:
            return None

        # A concurrent load may have installed it while we were reading
        active = self._sessions.get(session_id)
        if active is None:
            active = ActiveSession(session=snapshot.session, messages=list(snapshot.messages))
            self._sessions[session_id] = active
            log_with_context(
                logger, logging.INFO, "Session loaded from disk",
                session_id=session_id,
                message_count=len(snapshot.messages),
            )
        return active.view()

    def start_turn(
        self,
        session_id: str,
        text: str,
        options: SendMessageOptions | None = None,
    ) -> TurnHandle:
        """
        Begin a turn and return without waiting for it.

        Runs the precondition checks and the guard transition synchronously,
        so a second caller observes the running flag immediately.

        Args:
            session_id: Resident session
            text: User message
            options: Per-turn options (model)

        Returns:
            TurnHandle: Token and task of the scheduled turn

        Raises:
            SessionNotFoundError: If the session is not resident
            SessionAlreadyRunningError: If a turn is already in flight
        """
        active = self._sessions.get(session_id)
        if active is None:
            raise SessionNotFoundError(session_id)
        if active.is_running:
            raise SessionAlreadyRunningError(session_id)

        active.is_running = True
        token = CancellationToken()
        active.token = token

        user_message = IdeationMessage(role=MessageRole.USER, content=text)
        active.messages.append(user_message)
        active.session.touch()
        self._event_bus.emit(MessageEvent(session_id=session_id, message=user_message))

        task = asyncio.create_task(
            self._run_turn(active, text, options or SendMessageOptions(), token),
            name=f"ideation-turn-{session_id}",
        )
        active.task = task
        return TurnHandle(
            session_id=session_id,
            user_message=user_message,
            token=token,
            task=task,
        )

    async def send_message(
        self,
        session_id: str,
        text: str,
        options: SendMessageOptions | None = None,
    ) -> None:
        """
        Run one turn to completion.

        Turn outcomes (complete, aborted, error) are reported as events;
        nothing is raised once the turn has started.

        Raises:
            SessionNotFoundError: If the session is not resident
            SessionAlreadyRunningError: If a turn is already in flight
        """
        handle = self.start_turn(session_id, text, options)
        await handle.wait()

    async def stop_session(self, session_id: str) -> None:
        """
        Cancel any in-flight turn and mark the session completed.

        No-op for unknown or already completed sessions.
        """
        active = self._sessions.get(session_id)
        if active is None or active.session.status == SessionStatus.COMPLETED:
            return

        active.session.status = SessionStatus.COMPLETED

        task = active.task
        if active.token is not None:
            active.token.cancel("stopped")
        if task is not None and not task.done():
            await asyncio.wait({task})

        active.session.touch()
        await self._checkpoint(active)
        self._event_bus.emit(SessionEndedEvent(session_id=session_id))
        log_with_context(
            logger, logging.INFO, "Session stopped",
            session_id=session_id,
            message_count=len(active.messages),
        )

    def is_session_running(self, session_id: str) -> bool:
        """Whether a turn is in flight; False for unknown sessions."""
        active = self._sessions.get(session_id)
        return active is not None and active.is_running

    async def shutdown(self) -> None:
        """Cancel every in-flight turn and wait for the tasks to settle."""
        tasks = []
        for active in self._sessions.values():
            if active.token is not None:
                active.token.cancel("shutdown")
            if active.task is not None and not active.task.done():
                tasks.append(active.task)
        if tasks:
            logger.info(f"{__name__}:shutdown - cancelling {len(tasks)} running turn(s)")
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _build_system_prompt(self, session: IdeationSession) -> str | None:
        if self._context_builder is None:
            return None
        return await self._context_builder.build_system_prompt(session)

    async def _run_turn(
        self,
        active: ActiveSession,
        text: str,
        options: SendMessageOptions,
        token: CancellationToken,
    ) -> None:
        session = active.session
        session_id = session.id
        # Everything before the user message just appended
        history = [HistoryTurn(role=m.role, content=m.content) for m in active.messages[:-1]]

        logger.info(
            f"{__name__}:_run_turn - START session_id={session_id} "
            f"history={len(history)} text={preview_text(text)!r}"
        )
        content = ""
        try:
            system_prompt = await self._build_system_prompt(session)
            model = resolve_model_string(options.model, self._default_model)
            request = ProviderRequest(
                model=model,
                prompt=text,
                history=history,
                system_prompt=system_prompt,
                cancellation=token,
                cwd=session.project_path,
                session_id=session_id,
            )

            fragments = iterate_until_cancelled(
                self._gateway.execute_query(request), token, session_id
            )
            async with aclosing(fragments):
                async for fragment in fragments:
                    if isinstance(fragment, TextFragment):
                        content += fragment.text
                        self._event_bus.emit(
                            StreamChunkEvent(session_id=session_id, content=content)
                        )
                    elif isinstance(fragment, ResultFragment):
                        if fragment.subtype == "error":
                            raise ProviderError(
                                fragment.error or "Model returned an error", model=model
                            )
                        if fragment.result:
                            content = fragment.result

            token.raise_if_cancelled(session_id)

            assistant_message = IdeationMessage(role=MessageRole.ASSISTANT, content=content)
            active.messages.append(assistant_message)
            session.touch()
            self._event_bus.emit(
                MessageCompleteEvent(
                    session_id=session_id,
                    message=assistant_message,
                    content=content,
                )
            )
            logger.info(
                f"{__name__}:_run_turn - COMPLETE session_id={session_id} answer_len={len(content)}"
            )
        except TurnCancelledError:
            logger.info(
                f"{__name__}:_run_turn - ABORTED session_id={session_id} "
                f"reason={token.reason} partial_len={len(content)}"
            )
            self._event_bus.emit(AbortedEvent(session_id=session_id))
        except asyncio.CancelledError:
            logger.info(f"{__name__}:_run_turn - task cancelled session_id={session_id}")
            self._event_bus.emit(AbortedEvent(session_id=session_id))
            raise
        except Exception as e:
            message = e.message if isinstance(e, IdeationException) else str(e) or type(e).__name__
            log_exception_with_context(
                logger, "Turn failed", e,
                session_id=session_id,
                model=options.model or self._default_model,
            )
            self._event_bus.emit(ErrorEvent(session_id=session_id, error=message))
        finally:
            # Saved before the guard drops so a next turn cannot overtake this write
            try:
                await self._checkpoint(active)
            finally:
                active.is_running = False
                active.token = None
                token.dispose()
                if active.task is asyncio.current_task():
                    active.task = None

    async def _checkpoint(self, active: ActiveSession) -> None:
        """Persist the finalized transcript; failures are logged, never raised."""
        try:
            await self._store.save(
                active.session.project_path,
                active.session,
                list(active.messages),
            )
        except PersistenceError as e:
            log_exception_with_context(
                logger, "Session snapshot not persisted", e,
                level=logging.WARNING,
                session_id=active.session.id,
                message_count=len(active.messages),
            )
