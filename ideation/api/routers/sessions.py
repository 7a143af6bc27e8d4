"""
Ideation session API endpoints.

Routes:
- POST /ideation/sessions - Start a session
- GET /ideation/sessions/{id} - Get session with transcript
- POST /ideation/sessions/{id}/messages - Start a turn (results stream over WS)
- POST /ideation/sessions/{id}/stop - Stop a session
- GET /ideation/sessions/{id}/running - Running flag

Dependencies: ideation.application.services.session_orchestrator, ideation.models
System role: Session management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ideation.api.deps import get_orchestrator
from ideation.application.services import SessionOrchestrator
from ideation.core.exceptions import (
    SessionAlreadyRunningError,
    SessionNotFoundError,
    ValidationError,
)
from ideation.models.session import (
    IdeationSession,
    IdeationSessionWithMessages,
    SendMessageOptions,
    SendMessageRequest,
    SessionRunningResponse,
    StartSessionRequest,
    TurnAcceptedResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ideation/sessions", tags=["ideation-sessions"])


@router.post("", response_model=IdeationSession, status_code=201)
async def start_session(
    request: StartSessionRequest,
    orchestrator: SessionOrchestrator = Depends(get_orchestrator),
) -> IdeationSession:
    """
    Start a new ideation session.

    Args:
        request: Project path, optional category and initial message
        orchestrator: Injected SessionOrchestrator

    Returns:
        IdeationSession: Created session

    Raises:
        HTTPException(400): Invalid project path
    """
    try:
        return await orchestrator.start_session(request.project_path, request.to_options())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/{session_id}", response_model=IdeationSessionWithMessages)
async def get_session(
    session_id: str,
    project_path: str = Query(..., min_length=1),
    orchestrator: SessionOrchestrator = Depends(get_orchestrator),
) -> IdeationSessionWithMessages:
    """
    Get a session and its transcript, loading it from disk if needed.

    Raises:
        HTTPException(400): Invalid session id
        HTTPException(404): Session not found
    """
    try:
        session = await orchestrator.get_session(project_path, session_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return session


@router.post(
    "/{session_id}/messages",
    response_model=TurnAcceptedResponse,
    status_code=202,
)
async def send_message(
    session_id: str,
    request: SendMessageRequest,
    orchestrator: SessionOrchestrator = Depends(get_orchestrator),
) -> TurnAcceptedResponse:
    """
    Start a turn. Streamed output is delivered over the events WebSocket.

    Args:
        session_id: Resident session
        request: Message text, optional model and timeout
        orchestrator: Injected SessionOrchestrator

    Returns:
        TurnAcceptedResponse: Session id and the id of the echoed user message

    Raises:
        HTTPException(404): Session not resident (load it with GET first)
        HTTPException(409): A turn is already in flight
    """
    try:
        handle = orchestrator.start_turn(
            session_id,
            request.message,
            SendMessageOptions(model=request.model),
        )
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except SessionAlreadyRunningError as e:
        raise HTTPException(status_code=409, detail=e.message)

    if request.timeout_seconds is not None:
        handle.token.cancel_after(request.timeout_seconds)

    return TurnAcceptedResponse(session_id=session_id, message_id=handle.user_message.id)


@router.post("/{session_id}/stop", status_code=204)
async def stop_session(
    session_id: str,
    orchestrator: SessionOrchestrator = Depends(get_orchestrator),
) -> None:
    """Stop a session. Unknown or already stopped sessions are ignored."""
    await orchestrator.stop_session(session_id)


@router.get("/{session_id}/running", response_model=SessionRunningResponse)
async def session_running(
    session_id: str,
    orchestrator: SessionOrchestrator = Depends(get_orchestrator),
) -> SessionRunningResponse:
    """Whether a turn is currently in flight for the session."""
    return SessionRunningResponse(
        session_id=session_id,
        is_running=orchestrator.is_session_running(session_id),
    )
