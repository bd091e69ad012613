"""
Core Module - Exceptions.

============================================================
RESPONSIBILITY
============================================================
Defines all custom exceptions for the tool front-end.

- Provides clear exception hierarchy
- Carries the user-facing message handed to the exit controller
- Includes context for debugging

============================================================
EXCEPTION HIERARCHY
============================================================
ToolException (base)
├── CommandParseError
├── EnvironmentPreparationError
│   ├── ProjectLoadError
│   └── BuildFolderError
├── LicenseError
├── CommandError
└── OrchestrationError
    └── StateTransitionError

============================================================
"""

from enum import Enum
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# ============================================================
# SEVERITY LEVELS
# ============================================================

class Severity(Enum):
    """Exception severity levels."""

    MEDIUM = "medium"
    """Moderate issue, requires attention."""

    HIGH = "high"
    """Serious issue, aborts the invocation."""

    CRITICAL = "critical"
    """Internal invariant broken."""


# ============================================================
# BASE EXCEPTION
# ============================================================

class ToolException(Exception):
    """
    Base exception for all tool errors.

    Every failure in this tool is fatal to the invocation, so
    the message is what the user ends up seeing.

    All exceptions carry:
    - severity: for log routing
    - context: for debugging
    - timestamp: when the error occurred
    """

    default_severity: Severity = Severity.HIGH

    def __init__(
        self,
        message: str,
        severity: Optional[Severity] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.severity = severity or self.default_severity
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

        if cause:
            self.context["cause_type"] = type(cause).__name__
            self.context["cause_message"] = str(cause)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
        }

    def to_log_format(self) -> str:
        """Format exception for structured logging."""
        ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        line = f"[{self.severity.value.upper()}] {type(self).__name__}: {self.message.strip()}"
        if ctx_str:
            line += f" | {ctx_str}"
        return line


# ============================================================
# PARSE ERRORS
# ============================================================

class CommandParseError(ToolException):
    """No command could be selected from the arguments."""

    def __init__(
        self,
        message: str,
        arguments: Optional[list] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if arguments is not None:
            context["arguments"] = " ".join(arguments)

        super().__init__(message, context=context, **kwargs)


# ============================================================
# ENVIRONMENT ERRORS
# ============================================================

class EnvironmentPreparationError(ToolException):
    """Base class for project/filesystem preparation failures."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if path:
            context["path"] = path

        super().__init__(message, context=context, **kwargs)


class ProjectLoadError(EnvironmentPreparationError):
    """The selected command could not load its project."""
    pass


class BuildFolderError(EnvironmentPreparationError):
    """The build output folder is missing and could not be created."""
    pass


# ============================================================
# LICENSE & COMMAND ERRORS
# ============================================================

class LicenseError(ToolException):
    """License record could not be read or written."""

    default_severity = Severity.MEDIUM


class CommandError(ToolException):
    """A command failed while running."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if command:
            context["command"] = command

        super().__init__(message, context=context, **kwargs)


# ============================================================
# ORCHESTRATION ERRORS
# ============================================================

class OrchestrationError(ToolException):
    """Base class for orchestration-related errors."""

    default_severity = Severity.CRITICAL


class StateTransitionError(OrchestrationError):
    """Invalid state transition."""

    def __init__(
        self,
        message: str,
        from_state: Optional[str] = None,
        to_state: Optional[str] = None,
        reason: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if from_state:
            context["from_state"] = from_state
        if to_state:
            context["to_state"] = to_state
        if reason:
            context["reason"] = reason

        super().__init__(message, context=context, **kwargs)


__all__ = [
    "Severity",
    "ToolException",
    "CommandParseError",
    "EnvironmentPreparationError",
    "ProjectLoadError",
    "BuildFolderError",
    "LicenseError",
    "CommandError",
    "OrchestrationError",
    "StateTransitionError",
]
