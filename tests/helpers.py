"""
Test doubles shared by the orchestrator tests.
"""

from pathlib import Path
from typing import List, Optional

from toolcore.command import Command
from toolcore.config import ToolConfig
from toolcore.context import ToolContext, create_context
from toolcore.events import EventBus, EventKind


# ============================================================
# COMMAND
# ============================================================

class FakeCommand(Command):
    """Command with configurable capabilities and outcome."""

    name = "fake"

    def __init__(
        self,
        context: ToolContext,
        requires_project: bool = False,
        requires_license: bool = False,
        project_path: Optional[Path] = None,
        load_ok: bool = True,
        outcome: Optional[str] = "finished",
        message: str = "",
        raises: Optional[Exception] = None,
    ):
        super().__init__(context)
        self._requires_project = requires_project
        self._requires_license = requires_license
        if project_path is not None:
            self._project_path = Path(project_path)
        self._load_ok = load_ok
        self._outcome = outcome
        self._message = message
        self._raises = raises

        self.run_calls = 0
        self.load_calls = 0

    def parse(self, arguments: List[str]) -> Optional[str]:
        return None

    def requires_project_load(self) -> bool:
        return self._requires_project

    def requires_license_validation(self) -> bool:
        return self._requires_license

    def load_project(self) -> bool:
        self.load_calls += 1
        return self._load_ok

    def run(self) -> None:
        self.run_calls += 1
        if self._raises is not None:
            raise self._raises
        if self._outcome == "finished":
            self.finished()
        elif self._outcome == "error":
            self.error(self._message)
        elif self._outcome == "finished_then_error":
            self.finished()
            self.error("late error")
        elif self._outcome == "task_raises":
            self.spawn(self._fail())

    async def _fail(self) -> None:
        raise RuntimeError(self._message or "task failure")


# ============================================================
# PARSER
# ============================================================

class FakeParser:
    """Returns a fixed command, records what it was given."""

    def __init__(self, command: Optional[Command] = None, error_message: str = ""):
        self._command = command
        self._error_message = error_message
        self.parsed_arguments: Optional[List[str]] = None

    @property
    def error_message(self) -> str:
        return self._error_message

    def parse(self, arguments: List[str]) -> Optional[Command]:
        self.parsed_arguments = list(arguments)
        return self._command


# ============================================================
# LICENSE SYSTEM
# ============================================================

class FakeLicenseSystem:
    """Answers every request immediately with a configured event."""

    def __init__(
        self,
        bus: EventBus,
        validation: EventKind = EventKind.LICENSE_SUCCESS,
        activation: EventKind = EventKind.LICENSE_ACTIVATION_SUCCESS,
        deactivation: EventKind = EventKind.LICENSE_DEACTIVATION_SUCCESS,
        message: str = "",
    ):
        self._bus = bus
        self._validation = validation
        self._activation = activation
        self._deactivation = deactivation
        self._message = message
        self.calls: List[object] = []

    def initialize(self) -> None:
        self.calls.append("initialize")
        self._bus.post(self._validation)

    def license_agreement_confirmed(self) -> None:
        self.calls.append("agreement_confirmed")

    def request_activation(self, key: str) -> None:
        self.calls.append(("activate", key))
        self._bus.post(self._activation, message=self._message)

    def request_deactivation(self) -> None:
        self.calls.append("deactivate")
        self._bus.post(self._deactivation, message=self._message)


# ============================================================
# CONTEXT
# ============================================================

def make_context(tmp_path: Path, config: Optional[ToolConfig] = None, **overrides) -> ToolContext:
    """Context whose license file lives under tmp_path."""
    config = config or ToolConfig(license_path=tmp_path / "license.json")
    return create_context(config, **overrides)


def make_licensed_context(tmp_path: Path, **license_options) -> ToolContext:
    """Context with a FakeLicenseSystem."""
    bus = EventBus()
    return make_context(
        tmp_path,
        bus=bus,
        license_system=FakeLicenseSystem(bus, **license_options),
    )
