"""
Core Module - State Manager.

============================================================
RESPONSIBILITY
============================================================
Tracks the lifecycle of one tool invocation.

- Tracks lifecycle state (setup, start, run, stop)
- Manages state transitions with validation
- Keeps a bounded transition history

============================================================
STATE MACHINE
============================================================
    INITIALIZING -> SETTING_UP -> STARTING -> RUNNING -> STOPPING -> STOPPED

Any non-terminal state may jump straight to STOPPING: every
failure short-circuits to the exit controller.

============================================================
"""

from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set
import logging

from .exceptions import StateTransitionError


# ============================================================
# TOOL STATE
# ============================================================

class ToolState(Enum):
    """Lifecycle state of the orchestrator."""

    INITIALIZING = "initializing"
    """Nothing has run yet."""

    SETTING_UP = "setting_up"
    """Arguments are being interpreted."""

    STARTING = "starting"
    """Branch decision and environment preparation."""

    RUNNING = "running"
    """Waiting for a terminal event from a subsystem."""

    STOPPING = "stopping"
    """Exit controller has been invoked."""

    STOPPED = "stopped"
    """Invocation complete."""

    @property
    def is_terminal(self) -> bool:
        """Check if state is terminal."""
        return self == ToolState.STOPPED


# ============================================================
# STATE TRANSITIONS
# ============================================================

VALID_TRANSITIONS: Dict[ToolState, Set[ToolState]] = {
    ToolState.INITIALIZING: {
        ToolState.SETTING_UP,
        ToolState.STOPPING,
    },
    ToolState.SETTING_UP: {
        ToolState.STARTING,
        ToolState.STOPPING,
    },
    ToolState.STARTING: {
        ToolState.RUNNING,
        ToolState.STOPPING,
    },
    ToolState.RUNNING: {
        ToolState.STOPPING,
    },
    ToolState.STOPPING: {
        ToolState.STOPPED,
    },
    ToolState.STOPPED: set(),
}


@dataclass
class StateTransition:
    """Record of a state transition."""

    transition_id: str
    from_state: ToolState
    to_state: ToolState
    reason: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "transition_id": self.transition_id,
            "from_state": self.from_state.value,
            "to_state": self.to_state.value,
            "reason": self.reason,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
        }


# ============================================================
# STATE MANAGER
# ============================================================

class StateManager:
    """
    Manages lifecycle state with validation.

    Transitions run on the event loop thread only, so no
    locking is done here.
    """

    def __init__(self, initial_state: ToolState = ToolState.INITIALIZING):
        self._state = initial_state
        self._reason = "Tool initialization"
        self._transition_count = 0
        self._history: List[StateTransition] = []
        self._max_history = 50
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> ToolState:
        """Get current lifecycle state."""
        return self._state

    @property
    def reason(self) -> str:
        """Get reason for current state."""
        return self._reason

    @property
    def is_stopping(self) -> bool:
        """Check if the invocation is shutting down."""
        return self._state in (ToolState.STOPPING, ToolState.STOPPED)

    def get_history(self, limit: int = 10) -> List[StateTransition]:
        """Get transition history."""
        return self._history[-limit:]

    def can_transition_to(self, target_state: ToolState) -> bool:
        """Check if transition to target state is valid."""
        return target_state in VALID_TRANSITIONS.get(self._state, set())

    def transition_to(
        self,
        target_state: ToolState,
        reason: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> StateTransition:
        """
        Transition to a new state.

        Args:
            target_state: Target state
            reason: Reason for transition
            context: Additional context

        Returns:
            StateTransition record

        Raises:
            StateTransitionError: If transition is invalid
        """
        if not self.can_transition_to(target_state):
            raise StateTransitionError(
                message=f"Invalid state transition: {self._state.value} -> {target_state.value}",
                from_state=self._state.value,
                to_state=target_state.value,
                reason=reason,
            )

        self._transition_count += 1
        transition = StateTransition(
            transition_id=f"transition_{self._transition_count}",
            from_state=self._state,
            to_state=target_state,
            reason=reason,
            context=context or {},
        )

        old_state = self._state
        self._state = target_state
        self._reason = reason

        self._history.append(transition)
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

        self._logger.debug(
            f"State transition: {old_state.value} -> {target_state.value} | reason={reason}"
        )

        return transition


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    "ToolState",
    "StateTransition",
    "StateManager",
    "VALID_TRANSITIONS",
]
