"""
Orchestrator - Command Runner.

============================================================
PURPOSE
============================================================
Runs the selected command exactly once and waits for its
outcome.

STATE MACHINE:

    PENDING ──► RUNNING ──► FINISHED   (COMMAND_FINISHED)
       │           └──────► FAILED     (COMMAND_ERROR)
       └──────────────────► FAILED     (run() raised)

============================================================
"""

import logging
from enum import Enum
from typing import Dict, Optional, Set

from core.constants import MSG_COMMAND_ERROR
from core.exceptions import StateTransitionError, ToolException
from toolcore.command import Command
from toolcore.events import Event, EventKind

from .models import Step, TerminalAction


logger = logging.getLogger(__name__)


class RunState(Enum):
    """Command runner states."""

    PENDING = "pending"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"


VALID_TRANSITIONS: Dict[RunState, Set[RunState]] = {
    RunState.PENDING: {RunState.RUNNING, RunState.FAILED},
    RunState.RUNNING: {RunState.FINISHED, RunState.FAILED},
    RunState.FINISHED: set(),
    RunState.FAILED: set(),
}


def dispatch(state: RunState, event: Event) -> Step:
    """Compute the runner's reaction to one event."""
    if state == RunState.RUNNING:
        if event.kind == EventKind.COMMAND_FINISHED:
            return Step(RunState.FINISHED, TerminalAction.success())
        if event.kind == EventKind.COMMAND_ERROR:
            return Step(RunState.FAILED, TerminalAction.failure(event.message or MSG_COMMAND_ERROR))
    return Step(state)


class CommandRunner:
    """Invokes Command.run() and tracks its outcome."""

    def __init__(self):
        self._state = RunState.PENDING
        self._command: Optional[Command] = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def command(self) -> Optional[Command]:
        return self._command

    @property
    def active(self) -> bool:
        return self._state == RunState.RUNNING

    def start(self, command: Command) -> Optional[Step]:
        """
        Run command.

        Returns:
            A terminal Step if run() failed synchronously, else None

        Raises:
            StateTransitionError: a command was already started
        """
        if self._state != RunState.PENDING:
            raise StateTransitionError(
                message="Command already started",
                from_state=self._state.value,
                to_state=RunState.RUNNING.value,
            )

        self._command = command
        self._transition(RunState.RUNNING, "run")
        logger.info(f"Running command | command={command.name or type(command).__name__}")

        try:
            command.run()
        except ToolException as e:
            logger.error(e.to_log_format())
            self._transition(RunState.FAILED, "run raised")
            return Step(RunState.FAILED, TerminalAction.failure(e.message or MSG_COMMAND_ERROR))

        return None

    def handle(self, event: Event) -> Step:
        step = dispatch(self._state, event)
        if step.state == self._state:
            logger.debug(f"Command runner ignored event | state={self._state.value} | event={event.kind.value}")
            return step

        self._transition(step.state, event.kind.value)
        return step

    def _transition(self, target: RunState, reason: str) -> None:
        if target not in VALID_TRANSITIONS[self._state]:
            raise StateTransitionError(
                message=f"Invalid runner transition: {self._state.value} -> {target.value}",
                from_state=self._state.value,
                to_state=target.value,
                reason=reason,
            )
        self._state = target


__all__ = ["RunState", "CommandRunner", "VALID_TRANSITIONS", "dispatch"]
