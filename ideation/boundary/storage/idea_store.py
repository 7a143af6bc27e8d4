"""
Idea persistence.

One JSON document per idea at `<project>/<data_dir>/ideas/<idea_id>/idea.json`.

Dependencies: fastapi.concurrency, pydantic, ideation.boundary.storage.json_files
System role: File-backed idea repository
"""

import json
import logging
import shutil

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError

from ideation.boundary.storage.json_files import read_json, write_json_atomic
from ideation.boundary.storage.paths import ProjectLayout
from ideation.configs.storage import StorageSettings
from ideation.core.exceptions import PersistenceError, ValidationError
from ideation.models.idea import Idea

logger = logging.getLogger(__name__)


class IdeaStore:
    """Reads and writes ideas inside project directories."""

    def __init__(self, settings: StorageSettings | None = None) -> None:
        self.layout = ProjectLayout(settings or StorageSettings())

    async def save(self, project_path: str, idea: Idea) -> None:
        """
        Write an idea, replacing any previous version.

        Raises:
            PersistenceError: If the file could not be written
        """
        path = self.layout.idea_path(project_path, idea.id)
        document = idea.model_dump(mode="json", by_alias=True)
        try:
            await run_in_threadpool(write_json_atomic, path, document)
        except OSError as e:
            raise PersistenceError(
                f"Failed to write idea: {e}",
                path=str(path),
                details={"idea_id": idea.id},
            ) from e

    async def get(self, project_path: str, idea_id: str) -> Idea | None:
        """
        Load one idea.

        Returns:
            Idea | None: The idea, or None if missing or unreadable
        """
        path = self.layout.idea_path(project_path, idea_id)
        try:
            document = await run_in_threadpool(read_json, path)
            return Idea.model_validate(document)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning(
                "Idea unreadable",
                extra={"idea_id": idea_id, "path": str(path), "error_msg": str(e)},
            )
            return None

    async def list_all(self, project_path: str) -> list[Idea]:
        """
        Load every readable idea in a project, unordered.

        Returns:
            list[Idea]: Ideas; unreadable entries are skipped with a warning
        """
        ideas_dir = self.layout.ideas_dir(project_path)
        entries = await run_in_threadpool(
            lambda: sorted(p.name for p in ideas_dir.iterdir() if p.is_dir())
            if ideas_dir.is_dir()
            else []
        )

        ideas: list[Idea] = []
        for idea_id in entries:
            try:
                idea = await self.get(project_path, idea_id)
            except ValidationError:
                logger.warning("Skipping idea folder with invalid name", extra={"idea_id": idea_id})
                continue
            if idea is not None:
                ideas.append(idea)
        return ideas

    async def delete(self, project_path: str, idea_id: str) -> bool:
        """
        Remove an idea folder.

        Returns:
            bool: True if something was deleted
        """
        idea_dir = self.layout.idea_dir(project_path, idea_id)
        if not idea_dir.is_dir():
            return False
        try:
            await run_in_threadpool(shutil.rmtree, idea_dir)
        except OSError as e:
            raise PersistenceError(
                f"Failed to delete idea: {e}",
                path=str(idea_dir),
                details={"idea_id": idea_id},
            ) from e
        return True
