"""
Core Module Package.

This package contains the infrastructure components
that every other package depends on.

Components:
- state_manager: Invocation lifecycle state
- exceptions: Custom exception hierarchy
- constants: Tool-wide constants
"""

from .exceptions import ToolException, StateTransitionError
from .state_manager import StateManager, ToolState

__all__ = [
    "ToolException",
    "StateTransitionError",
    "StateManager",
    "ToolState",
]
