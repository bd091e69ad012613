"""
Tool Core - Project.

A project is a directory holding exactly one `<Name>.atomic`
JSON file next to its Resources, Cache and Build folders.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.constants import BUILD_DIR, CACHE_DIR, PROJECT_FILE_EXTENSION, RESOURCES_DIR
from core.exceptions import ProjectLoadError


logger = logging.getLogger(__name__)


# =======================
# PROJECT FILE SCHEMA
# =======================

class ProjectFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    version: int = 1
    name: str = Field(min_length=1)
    description: Optional[str] = None


# =======================
# PROJECT
# =======================

class Project:
    """A loaded project."""

    def __init__(self, path: Path, project_file: Path, settings: ProjectFile):
        self.path = path
        self.project_file = project_file
        self.settings = settings

    @property
    def name(self) -> str:
        return self.settings.name

    @property
    def resources_path(self) -> Path:
        return self.path / RESOURCES_DIR

    @property
    def cache_path(self) -> Path:
        return self.path / CACHE_DIR

    @property
    def build_path(self) -> Path:
        return self.path / BUILD_DIR

    @classmethod
    def load(cls, directory: Path) -> "Project":
        """
        Load the project in directory.

        Raises:
            ProjectLoadError: no project file, several project files,
                or an unreadable/invalid one
        """
        directory = Path(directory).resolve()
        if not directory.is_dir():
            raise ProjectLoadError(f"Project folder does not exist: {directory}", path=str(directory))

        candidates = sorted(directory.glob(f"*{PROJECT_FILE_EXTENSION}"))
        if not candidates:
            raise ProjectLoadError(f"No project file found in: {directory}", path=str(directory))
        if len(candidates) > 1:
            raise ProjectLoadError(
                f"Multiple project files found in: {directory}",
                path=str(directory),
                context={"candidates": [c.name for c in candidates]},
            )

        project_file = candidates[0]
        try:
            settings = ProjectFile.model_validate_json(project_file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise ProjectLoadError(
                f"Invalid project file: {project_file}",
                path=str(project_file),
                cause=e,
            ) from e

        logger.info(f"Loaded project | name={settings.name} | path={directory}")
        return cls(directory, project_file, settings)

    @classmethod
    def create(cls, directory: Path, name: Optional[str] = None) -> "Project":
        """Create a new empty project skeleton in directory."""
        directory = Path(directory).resolve()
        settings = ProjectFile(name=name or directory.name)
        project_file = directory / f"{settings.name}{PROJECT_FILE_EXTENSION}"

        (directory / RESOURCES_DIR).mkdir(parents=True, exist_ok=True)
        project_file.write_text(
            json.dumps(settings.model_dump(exclude_none=True), indent=2),
            encoding="utf-8",
        )

        logger.info(f"Created project | name={settings.name} | path={directory}")
        return cls(directory, project_file, settings)


__all__ = ["ProjectFile", "Project"]
