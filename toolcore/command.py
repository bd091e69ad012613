"""
Tool Core - Command.

============================================================
RESPONSIBILITY
============================================================
Capability surface every command exposes to the orchestrator.

- requires_project_load() / requires_license_validation()
- load_project() / get_project_path()
- run(), which completes by posting COMMAND_FINISHED or
  COMMAND_ERROR on the event bus

The orchestrator never looks past this surface.

============================================================
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Coroutine, List, Optional, Set

from core.exceptions import ProjectLoadError

from .context import ToolContext
from .events import EventKind
from .project import Project


logger = logging.getLogger(__name__)


class Command(ABC):
    """Base class for all commands."""

    name: str = ""
    """Command word on the command line."""

    description: str = ""

    def __init__(self, context: ToolContext):
        self._context = context
        self._project_path = Path(".")
        self._project: Optional[Project] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def context(self) -> ToolContext:
        return self._context

    @property
    def project(self) -> Optional[Project]:
        return self._project

    # --------------------------------------------------------
    # Parsing
    # --------------------------------------------------------

    @abstractmethod
    def parse(self, arguments: List[str]) -> Optional[str]:
        """
        Consume this command's positional arguments.

        Returns:
            An error message, or None on success
        """

    # --------------------------------------------------------
    # Capabilities
    # --------------------------------------------------------

    def requires_project_load(self) -> bool:
        return True

    def requires_license_validation(self) -> bool:
        return False

    def get_project_path(self) -> Path:
        return self._project_path

    def load_project(self) -> bool:
        try:
            self._project = Project.load(self._project_path)
        except ProjectLoadError as e:
            logger.error(e.to_log_format())
            return False
        self._project_path = self._project.path
        return True

    @abstractmethod
    def run(self) -> None:
        """Start the command. Completion is signalled through events."""

    # --------------------------------------------------------
    # Completion
    # --------------------------------------------------------

    def finished(self) -> None:
        self._context.bus.post(EventKind.COMMAND_FINISHED, command=self.name)

    def error(self, message: str) -> None:
        logger.error(f"Command failed | command={self.name} | error={message}")
        self._context.bus.post(EventKind.COMMAND_ERROR, command=self.name, message=message)

    def spawn(self, coro: Coroutine) -> asyncio.Task:
        """
        Run coro on the event loop, keeping a reference until it completes.

        A task that raises is reported as COMMAND_ERROR.
        """
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled() or task.exception() is None:
            return
        error = task.exception()
        self.error(f"{type(error).__name__}: {error}")


__all__ = ["Command"]
