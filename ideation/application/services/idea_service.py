"""
Idea service.

CRUD over ideas captured during ideation, scoped to a project directory.

Dependencies: ideation.boundary.storage.idea_store, ideation.models.idea
System role: Idea management service layer
"""

import logging

from ideation.boundary.storage.idea_store import IdeaStore
from ideation.core.exceptions import IdeaNotFoundError
from ideation.models.idea import CreateIdeaInput, Idea, IdeaStatus, UpdateIdeaInput
from ideation.models.session import utc_now

logger = logging.getLogger(__name__)


class IdeaService:
    """Creates, lists, updates and archives ideas."""

    def __init__(self, idea_store: IdeaStore) -> None:
        """
        Initialize idea service.

        Args:
            idea_store: File-backed idea repository
        """
        self.idea_store = idea_store

    async def create_idea(self, project_path: str, data: CreateIdeaInput) -> Idea:
        """
        Create and persist a new idea.

        Args:
            project_path: Owning project directory
            data: Idea fields

        Returns:
            Idea: Stored idea with generated id and timestamps

        Raises:
            PersistenceError: If the idea could not be written
        """
        idea = Idea(**data.model_dump())
        await self.idea_store.save(project_path, idea)
        logger.info(
            "Idea created",
            extra={"idea_id": idea.id, "category": idea.category.value},
        )
        return idea

    async def list_ideas(self, project_path: str) -> list[Idea]:
        """All readable ideas, most recently updated first."""
        ideas = await self.idea_store.list_all(project_path)
        return sorted(ideas, key=lambda idea: idea.updated_at, reverse=True)

    async def get_idea(self, project_path: str, idea_id: str) -> Idea | None:
        return await self.idea_store.get(project_path, idea_id)

    async def update_idea(
        self,
        project_path: str,
        idea_id: str,
        updates: UpdateIdeaInput,
    ) -> Idea:
        """
        Apply a partial update.

        Args:
            project_path: Owning project directory
            idea_id: Idea to update
            updates: Fields to change; unset fields are kept

        Returns:
            Idea: Updated idea

        Raises:
            IdeaNotFoundError: If the idea does not exist
            PersistenceError: If the idea could not be written
        """
        idea = await self.idea_store.get(project_path, idea_id)
        if idea is None:
            raise IdeaNotFoundError(idea_id)

        changes = updates.model_dump(exclude_unset=True)
        updated = Idea.model_validate({**idea.model_dump(), **changes, "updated_at": utc_now()})
        await self.idea_store.save(project_path, updated)
        logger.info(
            "Idea updated",
            extra={"idea_id": idea_id, "fields": ",".join(sorted(changes))},
        )
        return updated

    async def archive_idea(self, project_path: str, idea_id: str) -> Idea:
        """Set an idea's status to archived."""
        return await self.update_idea(
            project_path, idea_id, UpdateIdeaInput(status=IdeaStatus.ARCHIVED)
        )

    async def delete_idea(self, project_path: str, idea_id: str) -> None:
        """
        Delete an idea.

        Raises:
            IdeaNotFoundError: If the idea does not exist
        """
        deleted = await self.idea_store.delete(project_path, idea_id)
        if not deleted:
            raise IdeaNotFoundError(idea_id)
        logger.info("Idea deleted", extra={"idea_id": idea_id})
