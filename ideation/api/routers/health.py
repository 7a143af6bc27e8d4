"""
Health check API endpoints.

Routes: GET /health

Dependencies: ideation.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ideation.api.deps import get_orchestrator
from ideation.application.services import SessionOrchestrator


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    active_sessions: int


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    orchestrator: SessionOrchestrator = Depends(get_orchestrator),
) -> HealthResponse:
    """Basic health check with the number of resident sessions."""
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        active_sessions=orchestrator.active_session_count,
    )
