"""File-backed storage adapters for sessions and ideas."""

from ideation.boundary.storage.idea_store import IdeaStore
from ideation.boundary.storage.paths import ProjectLayout, validate_project_path
from ideation.boundary.storage.session_store import SessionStore

__all__ = ["IdeaStore", "ProjectLayout", "SessionStore", "validate_project_path"]
