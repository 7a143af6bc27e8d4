"""
Project directory layout and validation.

Derives every on-disk location from the project path and the storage
settings, and validates project paths before sessions are created.

Dependencies: pathlib, ideation.configs
System role: Deterministic path derivation for snapshots and ideas
"""

import re
from pathlib import Path

from ideation.configs.storage import StorageSettings
from ideation.core.exceptions import ValidationError

_SAFE_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def ensure_safe_id(value: str, field: str) -> str:
    """
    Reject ids that could escape their directory.

    Args:
        value: Session or idea id used as a file or folder name
        field: Field name reported in the error

    Returns:
        str: The id, unchanged

    Raises:
        ValidationError: If the id is empty, contains separators or is a dot path
    """
    if not value or not _SAFE_ID.match(value) or ".." in value:
        raise ValidationError(f"Invalid {field}: {value!r}", field=field)
    return value


def validate_project_path(
    project_path: str,
    settings: StorageSettings | None = None,
) -> Path:
    """
    Check that a project path is an existing directory inside the allowed root.

    Args:
        project_path: Project directory supplied by the caller
        settings: Storage settings (allowed_root sandbox)

    Returns:
        Path: Resolved project directory

    Raises:
        ValidationError: If the path is empty, missing, not a directory or
            outside the allowed root
    """
    if not project_path or not project_path.strip():
        raise ValidationError("Project path is required", field="project_path")

    resolved = Path(project_path).expanduser().resolve()
    if not resolved.is_dir():
        raise ValidationError(
            f"Project path is not an accessible directory: {project_path}",
            field="project_path",
        )

    if settings is not None and settings.allowed_root:
        root = Path(settings.allowed_root).expanduser().resolve()
        if resolved != root and root not in resolved.parents:
            raise ValidationError(
                f"Project path is outside the allowed root: {project_path}",
                field="project_path",
                details={"allowed_root": str(root)},
            )

    return resolved


class ProjectLayout:
    """Resolves ideation data locations inside a project."""

    def __init__(self, settings: StorageSettings) -> None:
        self.settings = settings

    def data_dir(self, project_path: str) -> Path:
        return Path(project_path) / self.settings.data_dir_name

    def sessions_dir(self, project_path: str) -> Path:
        return self.data_dir(project_path) / self.settings.sessions_dir_name

    def session_path(self, project_path: str, session_id: str) -> Path:
        ensure_safe_id(session_id, "session_id")
        return self.sessions_dir(project_path) / f"{session_id}.json"

    def ideas_dir(self, project_path: str) -> Path:
        return self.data_dir(project_path) / self.settings.ideas_dir_name

    def idea_dir(self, project_path: str, idea_id: str) -> Path:
        ensure_safe_id(idea_id, "idea_id")
        return self.ideas_dir(project_path) / idea_id

    def idea_path(self, project_path: str, idea_id: str) -> Path:
        return self.idea_dir(project_path, idea_id) / "idea.json"

    def context_dir(self, project_path: str) -> Path:
        return self.data_dir(project_path) / self.settings.context_dir_name
