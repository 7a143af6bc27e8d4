"""
Project-scoped storage configuration.

Controls where session snapshots, ideas and context files live inside a
project directory, and optionally sandboxes which projects may be used.

Dependencies: pydantic_settings
System role: Disk layout configuration for the persistence adapters
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage layout for per-project ideation data."""

    model_config = SettingsConfigDict(
        env_prefix="IDEATION_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir_name: str = Field(
        default=".ideation",
        description="Directory created inside each project for ideation data",
    )
    sessions_dir_name: str = Field(
        default="sessions",
        description="Subdirectory holding session snapshots",
    )
    ideas_dir_name: str = Field(
        default="ideas",
        description="Subdirectory holding one folder per idea",
    )
    context_dir_name: str = Field(
        default="context",
        description="Subdirectory scanned for project context files",
    )
    allowed_root: str | None = Field(
        default=None,
        description="If set, project paths must live under this directory",
    )
    max_context_chars: int = Field(
        default=20000,
        gt=0,
        description="Character budget for project context injected into prompts",
    )
