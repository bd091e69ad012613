"""
Orchestrator - Core.

============================================================
RESPONSIBILITY
============================================================
Main orchestrator class - lifecycle of one tool invocation.

- setup: flags, tool environment, command selection, engine
- start: branch decision (activation / deactivation / command),
  environment preparation, license gate or direct run
- run:   single event loop, every event dispatched to the
  phase that is waiting for it
- stop:  exit code from the exit controller

============================================================
ARCHITECTURAL POSITION
============================================================
- This orchestrator has NO command logic
- Subsystems come from an explicit ToolContext
- Every failure path ends in the ExitController
- The first terminal action wins; later events are ignored

============================================================
"""

import json
import logging
import sys
from typing import Callable, List, Optional

from core.constants import MSG_ENVIRONMENT_INIT_FAILED
from core.exceptions import (
    CommandParseError,
    EnvironmentPreparationError,
    ToolException,
)
from core.state_manager import StateManager, ToolState
from toolcore.context import ToolContext, create_context
from toolcore.events import Event
from toolcore.parser import CommandParser

from .arguments import ArgumentInterpreter
from .diagnostics import StartupDiagnostics
from .environment import EnvironmentPreparer
from .exit_controller import ExitController
from .license_gate import LicenseGate
from .models import Invocation, InvocationFlow, TerminalAction
from .runner import CommandRunner


logger = logging.getLogger(__name__)


# ============================================================
# LOGGING SETUP
# ============================================================

def setup_logging(level: str = "INFO", log_format: str = "text") -> logging.Logger:
    """
    Set up logging on stderr.

    Args:
        level: Log level
        log_format: Output format (json or text)

    Returns:
        Configured logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if log_format == "json":
        formatter = logging.Formatter(
            json.dumps({
                "timestamp": "%(asctime)s",
                "level": "%(levelname)s",
                "logger": "%(name)s",
                "message": "%(message)s",
            })
        )
    else:
        formatter = logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    return logging.getLogger("orchestrator")


# ============================================================
# ORCHESTRATOR
# ============================================================

ParserFactory = Callable[[ToolContext], CommandParser]


class ToolOrchestrator:
    """
    Lifecycle orchestrator of one invocation.

    execute() is the only public way to run it; it returns the
    process exit code.
    """

    def __init__(
        self,
        arguments: List[str],
        context: Optional[ToolContext] = None,
        parser_factory: ParserFactory = CommandParser,
        platform: Optional[str] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            arguments: Raw process arguments (without program name)
            context: Subsystems (default: create_context())
            parser_factory: Builds the command parser
            platform: Platform name for exit reporting (default: sys.platform)
        """
        self._arguments = list(arguments)
        self._context = context or create_context()

        self._state_manager = StateManager()
        self._diagnostics = StartupDiagnostics()
        self._exit = ExitController(self._context.engine, self._diagnostics, platform=platform)

        self._interpreter = ArgumentInterpreter(parser_factory(self._context), self._context.environment)
        self._preparer = EnvironmentPreparer(
            self._context.filesystem,
            self._context.resource_cache,
            self._context.build_system,
        )
        self._gate = LicenseGate(self._context.license_system)
        self._runner = CommandRunner()

        self._invocation: Optional[Invocation] = None
        self._flow = InvocationFlow.NONE

    # --------------------------------------------------------
    # Properties
    # --------------------------------------------------------

    @property
    def context(self) -> ToolContext:
        return self._context

    @property
    def state(self) -> ToolState:
        return self._state_manager.state

    @property
    def invocation(self) -> Optional[Invocation]:
        return self._invocation

    @property
    def flow(self) -> InvocationFlow:
        return self._flow

    @property
    def license_gate(self) -> LicenseGate:
        return self._gate

    @property
    def runner(self) -> CommandRunner:
        return self._runner

    @property
    def exit_controller(self) -> ExitController:
        return self._exit

    @property
    def diagnostics(self) -> StartupDiagnostics:
        return self._diagnostics

    # --------------------------------------------------------
    # Lifecycle
    # --------------------------------------------------------

    async def execute(self) -> int:
        """Run setup, start, the event loop and stop. Returns the exit code."""
        self._diagnostics.attach()
        try:
            if self.setup():
                self.start()
                await self._run_event_loop()
        except ToolException as e:
            logger.error(e.to_log_format(), exc_info=True)
            self._diagnostics.record(e.message)
            self._finish(TerminalAction.failure())
        except Exception as e:
            logger.error(f"Unexpected error: {e}", exc_info=True)
            self._diagnostics.record(f"{type(e).__name__}: {e}")
            self._finish(TerminalAction.failure())
        finally:
            self._diagnostics.detach()

        return self.stop()

    def setup(self) -> bool:
        """
        Interpret arguments and initialize the engine.

        Returns:
            False if the invocation already ended
        """
        self._state_manager.transition_to(ToolState.SETTING_UP, reason="setup")

        invocation = self._interpreter.scan_flags(self._arguments)
        self._invocation = invocation

        environment = self._context.environment
        if invocation.bootstrap:
            environment.set_bootstrapping()

        if not environment.initialize(cli=True):
            self._finish(TerminalAction.failure(MSG_ENVIRONMENT_INIT_FAILED))
            return False

        try:
            self._interpreter.select_command(invocation)
        except CommandParseError as e:
            logger.debug(e.to_log_format())
            self._finish(TerminalAction.failure(e.message))
            return False

        self._context.engine.initialize(invocation.engine_parameters)
        return True

    def start(self) -> None:
        """Take the branch decision and hand control to the first waiting phase."""
        self._state_manager.transition_to(ToolState.STARTING, reason="start")
        invocation = self._invocation

        if invocation.activation_key:
            self._flow = InvocationFlow.ACTIVATION
            self._gate.begin_activation(invocation.activation_key)
        elif invocation.deactivate:
            self._flow = InvocationFlow.DEACTIVATION
            self._gate.begin_deactivation()
        else:
            command = invocation.command
            try:
                self._preparer.prepare(command)
            except EnvironmentPreparationError as e:
                logger.debug(e.to_log_format())
                self._finish(TerminalAction.failure(e.message))
                return

            if command.requires_license_validation():
                self._flow = InvocationFlow.LICENSED_COMMAND
                self._gate.begin_validation()
            else:
                self._flow = InvocationFlow.COMMAND
                self._run_command()

        if not self._exit.terminated:
            self._state_manager.transition_to(ToolState.RUNNING, reason=f"flow={self._flow.value}")

    def stop(self) -> int:
        """Close the lifecycle and return the exit code."""
        if not self._state_manager.is_stopping:
            self._state_manager.transition_to(ToolState.STOPPING, reason="stop")
        if self._state_manager.state == ToolState.STOPPING:
            self._state_manager.transition_to(ToolState.STOPPED, reason=f"exit_code={self._exit.exit_code}")
        return self._exit.exit_code

    # --------------------------------------------------------
    # Events
    # --------------------------------------------------------

    def dispatch(self, event: Event) -> None:
        """Route one event to the phase waiting for it."""
        if self._exit.terminated:
            logger.debug(f"Event after termination ignored | event={event.kind.value}")
            return

        logger.debug(f"Dispatch | {event.to_dict()}")

        if self._gate.active:
            step = self._gate.handle(event)
            if step.action is not None:
                self._finish(step.action)
            elif self._gate.released:
                self._run_command()
        elif self._runner.active:
            step = self._runner.handle(event)
            if step.action is not None:
                self._finish(step.action)
        else:
            logger.debug(f"No phase waiting for event | event={event.kind.value}")

    async def _run_event_loop(self) -> None:
        self._diagnostics.seal()
        bus = self._context.bus
        while not self._exit.terminated:
            event = await bus.next_event()
            self.dispatch(event)

    # --------------------------------------------------------
    # Helpers
    # --------------------------------------------------------

    def _run_command(self) -> None:
        command = self._invocation.command if self._invocation else None
        if command is None:
            self._finish(TerminalAction.success())
            return

        step = self._runner.start(command)
        if step is not None and step.action is not None:
            self._finish(step.action)

    def _finish(self, action: TerminalAction) -> None:
        if not self._exit.terminated and not self._state_manager.is_stopping:
            self._state_manager.transition_to(
                ToolState.STOPPING,
                reason="success" if action.is_success else "failure",
            )
        self._exit.apply(action)


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    "ToolOrchestrator",
    "setup_logging",
]
