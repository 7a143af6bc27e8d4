"""
Session snapshot persistence.

Stores one `{session, messages}` JSON document per session under
`<project>/<data_dir>/sessions/<session_id>.json`. Overwrite semantics,
atomic replace, no listing.

Dependencies: fastapi.concurrency, pydantic, ideation.boundary.storage.json_files
System role: Persistence adapter for the session orchestrator
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError

from ideation.boundary.storage.json_files import read_json, write_json_atomic
from ideation.boundary.storage.paths import ProjectLayout
from ideation.configs.storage import StorageSettings
from ideation.core.exceptions import PersistenceError
from ideation.models.session import IdeationMessage, IdeationSession, SessionSnapshot

logger = logging.getLogger(__name__)


class SessionStore:
    """Reads and writes session snapshots inside project directories."""

    def __init__(self, settings: StorageSettings | None = None) -> None:
        """
        Initialize session store.

        Args:
            settings: Storage layout settings (defaults from environment)
        """
        self.layout = ProjectLayout(settings or StorageSettings())

    def snapshot_path(self, project_path: str, session_id: str) -> Path:
        """
        Location of a session's snapshot.

        Raises:
            ValidationError: If session_id is not a safe file name
        """
        return self.layout.session_path(project_path, session_id)

    async def save(
        self,
        project_path: str,
        session: IdeationSession,
        messages: Sequence[IdeationMessage],
    ) -> None:
        """
        Overwrite the snapshot for a session.

        Args:
            project_path: Owning project directory
            session: Session metadata
            messages: Finalized transcript

        Raises:
            PersistenceError: If the snapshot could not be written
        """
        path = self.snapshot_path(project_path, session.id)
        snapshot = SessionSnapshot(session=session, messages=list(messages))
        document = snapshot.to_json_dict()

        try:
            await run_in_threadpool(write_json_atomic, path, document)
        except OSError as e:
            raise PersistenceError(
                f"Failed to write session snapshot: {e}",
                path=str(path),
                details={"session_id": session.id},
            ) from e

        logger.debug(
            "Session snapshot saved",
            extra={"session_id": session.id, "message_count": len(snapshot.messages)},
        )

    async def load(self, project_path: str, session_id: str) -> SessionSnapshot | None:
        """
        Load a session snapshot.

        Args:
            project_path: Owning project directory
            session_id: Session identifier

        Returns:
            SessionSnapshot | None: Snapshot, or None if missing or unreadable
        """
        path = self.snapshot_path(project_path, session_id)

        try:
            document = await run_in_threadpool(read_json, path)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(
                "Session snapshot unreadable",
                extra={"session_id": session_id, "path": str(path), "error_msg": str(e)},
            )
            return None

        try:
            return SessionSnapshot.model_validate(document)
        except PydanticValidationError as e:
            logger.warning(
                "Session snapshot invalid",
                extra={"session_id": session_id, "path": str(path), "error_msg": str(e)},
            )
            return None
