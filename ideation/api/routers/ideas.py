"""
Idea API endpoints.

Routes (all scoped by the `project_path` query parameter):
- GET /ideation/ideas - List ideas, most recently updated first
- POST /ideation/ideas - Create idea
- GET /ideation/ideas/{id} - Get idea
- PATCH /ideation/ideas/{id} - Update idea
- POST /ideation/ideas/{id}/archive - Archive idea
- DELETE /ideation/ideas/{id} - Delete idea

Dependencies: ideation.application.services.idea_service, ideation.models.idea
System role: Idea management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ideation.api.deps import get_idea_service
from ideation.application.services import IdeaService
from ideation.core.exceptions import IdeaNotFoundError, PersistenceError, ValidationError
from ideation.models.idea import CreateIdeaInput, Idea, UpdateIdeaInput

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ideation/ideas", tags=["ideas"])

ProjectPath = Query(..., min_length=1, description="Project directory")


@router.get("", response_model=list[Idea])
async def list_ideas(
    project_path: str = ProjectPath,
    idea_service: IdeaService = Depends(get_idea_service),
) -> list[Idea]:
    """List ideas for a project."""
    return await idea_service.list_ideas(project_path)


@router.post("", response_model=Idea, status_code=201)
async def create_idea(
    request: CreateIdeaInput,
    project_path: str = ProjectPath,
    idea_service: IdeaService = Depends(get_idea_service),
) -> Idea:
    """
    Create an idea.

    Raises:
        HTTPException(500): Idea could not be written
    """
    try:
        return await idea_service.create_idea(project_path, request)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.get("/{idea_id}", response_model=Idea)
async def get_idea(
    idea_id: str,
    project_path: str = ProjectPath,
    idea_service: IdeaService = Depends(get_idea_service),
) -> Idea:
    """
    Get an idea.

    Raises:
        HTTPException(400): Invalid idea id
        HTTPException(404): Idea not found
    """
    try:
        idea = await idea_service.get_idea(project_path, idea_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    if idea is None:
        raise HTTPException(status_code=404, detail=f"Idea not found: {idea_id}")
    return idea


@router.patch("/{idea_id}", response_model=Idea)
async def update_idea(
    idea_id: str,
    request: UpdateIdeaInput,
    project_path: str = ProjectPath,
    idea_service: IdeaService = Depends(get_idea_service),
) -> Idea:
    """
    Update an idea.

    Raises:
        HTTPException(400): Invalid idea id
        HTTPException(404): Idea not found
        HTTPException(500): Idea could not be written
    """
    try:
        return await idea_service.update_idea(project_path, idea_id, request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except IdeaNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.post("/{idea_id}/archive", response_model=Idea)
async def archive_idea(
    idea_id: str,
    project_path: str = ProjectPath,
    idea_service: IdeaService = Depends(get_idea_service),
) -> Idea:
    """Archive an idea."""
    try:
        return await idea_service.archive_idea(project_path, idea_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except IdeaNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.delete("/{idea_id}", status_code=204)
async def delete_idea(
    idea_id: str,
    project_path: str = ProjectPath,
    idea_service: IdeaService = Depends(get_idea_service),
) -> None:
    """
    Delete an idea.

    Raises:
        HTTPException(400): Invalid idea id
        HTTPException(404): Idea not found
    """
    try:
        await idea_service.delete_idea(project_path, idea_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except IdeaNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=e.message)
