"""
Orchestrator - Environment Preparer.

============================================================
RESPONSIBILITY
============================================================
Gets the filesystem ready for a project command, in order:

1. load the project
2. register <project>/Resources then <project>/Cache as resource dirs
3. set <project>/Build as the build path
4. create <project>/Build if missing, then verify it exists

Commands that do not load a project are left untouched: no
filesystem operation at all.

============================================================
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from core.constants import BUILD_DIR, CACHE_DIR, RESOURCES_DIR
from core.exceptions import BuildFolderError, ProjectLoadError
from toolcore.build import BuildSystem
from toolcore.command import Command
from toolcore.filesystem import FileSystem
from toolcore.resources import ResourceCache


logger = logging.getLogger(__name__)


@dataclass
class PreparedEnvironment:
    """Result of a successful preparation."""

    project_path: Path
    build_path: Path
    resource_dirs: List[Path] = field(default_factory=list)
    build_folder_created: bool = False


class EnvironmentPreparer:
    """Runs project load and directory setup for one command."""

    def __init__(
        self,
        filesystem: FileSystem,
        resource_cache: ResourceCache,
        build_system: BuildSystem,
    ):
        self._filesystem = filesystem
        self._resource_cache = resource_cache
        self._build_system = build_system

    def prepare(self, command: Command) -> Optional[PreparedEnvironment]:
        """
        Prepare the environment for command.

        Returns:
            PreparedEnvironment, or None if the command needs no project

        Raises:
            ProjectLoadError: the project could not be loaded
            BuildFolderError: the build folder could not be created
        """
        if not command.requires_project_load():
            return None

        if not command.load_project():
            project_path = command.get_project_path()
            raise ProjectLoadError(f"Failed to load project: {project_path}", path=str(project_path))

        project_path = Path(command.get_project_path())

        resource_dirs = [project_path / RESOURCES_DIR, project_path / CACHE_DIR]
        for directory in resource_dirs:
            self._resource_cache.add_resource_dir(directory)

        build_folder = project_path / BUILD_DIR
        self._build_system.set_build_path(build_folder)

        created = False
        if not self._filesystem.dir_exists(build_folder):
            self._filesystem.create_dir(build_folder)

            if not self._filesystem.dir_exists(build_folder):
                raise BuildFolderError(f"Failed to create build folder: {build_folder}", path=str(build_folder))
            created = True
            logger.info(f"Created build folder | path={build_folder}")

        return PreparedEnvironment(
            project_path=project_path,
            build_path=build_folder,
            resource_dirs=resource_dirs,
            build_folder_created=created,
        )


__all__ = ["EnvironmentPreparer", "PreparedEnvironment"]
