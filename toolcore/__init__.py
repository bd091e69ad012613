"""
Tool Core Package - Subsystems of the tool front-end.

============================================================
PACKAGE OVERVIEW
============================================================
Everything the orchestrator talks to, but does not own the
logic of:

    EventBus        | named events, single consumer
    Engine          | runtime host, engine parameters
    ToolEnvironment | source tree / bootstrap state
    FileSystem      | directory primitives
    ResourceCache   | resource search list
    BuildSystem     | build output
    LicenseSystem   | validation, activation, deactivation
    CommandParser   | argument list -> Command

============================================================
"""

from .events import Event, EventBus, EventKind
from .config import ToolConfig
from .context import ToolContext, create_context
from .command import Command
from .parser import CommandParser

__all__ = [
    "Event",
    "EventBus",
    "EventKind",
    "ToolConfig",
    "ToolContext",
    "create_context",
    "Command",
    "CommandParser",
]
