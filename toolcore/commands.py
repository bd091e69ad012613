"""
Tool Core - Commands.

============================================================
COMMANDS
============================================================
new <folder> [name]         Create an empty project
build <folder> [platform]   Build a project into <folder>/Build
publish [folder] [platform] Build and archive a project (licensed)

============================================================
"""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import List, Optional

from core.exceptions import CommandError

from .command import Command
from .project import Project


logger = logging.getLogger(__name__)

DEFAULT_PLATFORM = "desktop"


class NewProjectCommand(Command):
    """Create a project skeleton."""

    name = "new"
    description = "Create a new project"

    def __init__(self, context):
        super().__init__(context)
        self._project_name: Optional[str] = None

    def parse(self, arguments: List[str]) -> Optional[str]:
        if not arguments:
            return "Usage: new <folder> [name]"
        self._project_path = Path(arguments[0])
        if len(arguments) > 1:
            self._project_name = arguments[1]
        return None

    def requires_project_load(self) -> bool:
        return False

    def run(self) -> None:
        folder = self._project_path
        if self._context.filesystem.scan_files(folder, ".atomic"):
            self.error(f"Project already exists: {folder}")
            return

        try:
            self._project = Project.create(folder, self._project_name)
        except OSError as e:
            self.error(f"Unable to create project in {folder}: {e}")
            return

        print(f"Created project {self._project.name} in {self._project.path}")
        self.finished()


class BuildCommand(Command):
    """Build a project for one platform."""

    name = "build"
    description = "Build a project"

    def __init__(self, context):
        super().__init__(context)
        self._platform = DEFAULT_PLATFORM

    def parse(self, arguments: List[str]) -> Optional[str]:
        if not arguments:
            return "Usage: build <folder> [platform]"
        self._project_path = Path(arguments[0])
        if len(arguments) > 1:
            self._platform = arguments[1].lower()
        return None

    def run(self) -> None:
        self.spawn(self._build())

    async def _build(self) -> None:
        try:
            await self._context.build_system.build(self._project, self._platform)
        except CommandError as e:
            self.error(e.message)
            return
        self.finished()


class PublishCommand(BuildCommand):
    """Build a project and archive the build output."""

    name = "publish"
    description = "Build and package a project"

    def parse(self, arguments: List[str]) -> Optional[str]:
        # Folder is optional here, defaults to the working directory
        if not arguments:
            return None
        return super().parse(arguments)

    def requires_license_validation(self) -> bool:
        return True

    async def _build(self) -> None:
        build_system = self._context.build_system
        try:
            await build_system.build(self._project, self._platform)
            archive = await asyncio.to_thread(
                shutil.make_archive,
                str(build_system.build_path / f"{self._project.name}-{self._platform}"),
                "zip",
                str(build_system.build_path / self._platform),
            )
        except CommandError as e:
            self.error(e.message)
            return
        except OSError as e:
            self.error(f"Unable to archive build: {e}")
            return

        logger.info(f"Published | archive={archive}")
        print(f"Published {archive}")
        self.finished()


COMMANDS = {
    command.name: command
    for command in (NewProjectCommand, BuildCommand, PublishCommand)
}


__all__ = [
    "NewProjectCommand",
    "BuildCommand",
    "PublishCommand",
    "COMMANDS",
]
