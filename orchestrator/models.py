"""
Orchestrator - Models.

============================================================
RESPONSIBILITY
============================================================
Defines data models for the tool orchestrator.

- Invocation: what the argument interpreter produced
- InvocationFlow: which branch start() took
- TerminalAction: exit code + message handed to the exit controller
- Step: result of dispatching one event to a phase state machine

============================================================
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.constants import EXIT_FAILURE, EXIT_SUCCESS
from toolcore.command import Command


# ============================================================
# INVOCATION FLOW
# ============================================================

class InvocationFlow(Enum):
    """Branch taken by the start phase."""

    NONE = "none"
    """Start has not run."""

    COMMAND = "command"
    """Command runs directly."""

    LICENSED_COMMAND = "licensed_command"
    """Command runs after license validation."""

    ACTIVATION = "activation"
    """Only the activation sub-flow runs."""

    DEACTIVATION = "deactivation"
    """Only the deactivation sub-flow runs."""


# ============================================================
# TERMINAL ACTION
# ============================================================

@dataclass(frozen=True)
class TerminalAction:
    """How the invocation ends."""

    exit_code: int
    message: str = ""
    """Diagnostic message for failures."""

    output: str = ""
    """Raw text printed on success."""

    @classmethod
    def success(cls, output: str = "") -> "TerminalAction":
        return cls(exit_code=EXIT_SUCCESS, output=output)

    @classmethod
    def failure(cls, message: str = "") -> "TerminalAction":
        return cls(exit_code=EXIT_FAILURE, message=message)

    @property
    def is_success(self) -> bool:
        return self.exit_code == EXIT_SUCCESS


# ============================================================
# STEP
# ============================================================

@dataclass(frozen=True)
class Step:
    """Next state of a phase state machine plus an optional terminal action."""

    state: Enum
    action: Optional[TerminalAction] = None

    @property
    def is_terminal(self) -> bool:
        return self.action is not None


# ============================================================
# INVOCATION
# ============================================================

@dataclass
class Invocation:
    """Everything the argument interpreter extracted from the arguments."""

    arguments: List[str]
    """Full argument list as received."""

    engine_parameters: Dict[str, Any] = field(default_factory=dict)
    """Configuration map handed to the engine."""

    command: Optional[Command] = None
    """Selected command (may be absent for license-only invocations)."""

    bootstrap: bool = False
    """-toolbootstrap was given."""

    activation_key: Optional[str] = None
    """-activate <key> was given."""

    deactivate: bool = False
    """-deactivate was given."""

    @property
    def license_request(self) -> bool:
        """Activation or deactivation was requested."""
        return bool(self.activation_key) or self.deactivate

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "arguments": list(self.arguments),
            "engine_parameters": dict(self.engine_parameters),
            "command": self.command.name if self.command else None,
            "bootstrap": self.bootstrap,
            "activation_requested": bool(self.activation_key),
            "deactivate": self.deactivate,
        }


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    "InvocationFlow",
    "TerminalAction",
    "Step",
    "Invocation",
]
