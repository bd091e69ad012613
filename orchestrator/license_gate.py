"""
Orchestrator - License Gate.

============================================================
PURPOSE
============================================================
Gates command execution behind the license subsystem.

STATE MACHINE:

    IDLE ──► VALIDATING ──► SUCCESS            (command released)
                 ├────────► EULA_REQUIRED       (failure)
                 ├────────► ACTIVATION_REQUIRED (failure)
                 └────────► ERROR               (failure)

    IDLE ──► ACTIVATION_REQUESTED ──► ACTIVATING ──► ACTIVATION_SUCCESS
                                          └────────► ACTIVATION_ERROR

    IDLE ──► DEACTIVATION_REQUESTED ──► DEACTIVATING ──► DEACTIVATION_SUCCESS
                                            └──────────► DEACTIVATION_ERROR

INVARIANTS:
- Only one entry point is ever taken per invocation
- Terminal states are final
- Events that do not apply to the current state change nothing

============================================================
"""

import logging
from enum import Enum
from typing import Dict, List, Set

from core.constants import (
    MSG_ACTIVATION_REQUIRED,
    MSG_ACTIVATION_SUCCESS,
    MSG_DEACTIVATION_SUCCESS,
)
from core.exceptions import StateTransitionError
from toolcore.events import Event, EventKind
from toolcore.license import LicenseSystem

from .models import Step, TerminalAction


logger = logging.getLogger(__name__)


# ============================================================
# LICENSE STATE
# ============================================================

class LicenseState(Enum):
    """License gate states."""

    IDLE = "idle"
    VALIDATING = "validating"
    SUCCESS = "success"
    EULA_REQUIRED = "eula_required"
    ACTIVATION_REQUIRED = "activation_required"
    ERROR = "error"

    ACTIVATION_REQUESTED = "activation_requested"
    ACTIVATING = "activating"
    ACTIVATION_SUCCESS = "activation_success"
    ACTIVATION_ERROR = "activation_error"

    DEACTIVATION_REQUESTED = "deactivation_requested"
    DEACTIVATING = "deactivating"
    DEACTIVATION_SUCCESS = "deactivation_success"
    DEACTIVATION_ERROR = "deactivation_error"

    @property
    def is_waiting(self) -> bool:
        """Check if the gate is waiting for a license event."""
        return self in (
            LicenseState.VALIDATING,
            LicenseState.ACTIVATING,
            LicenseState.DEACTIVATING,
        )

    @property
    def is_terminal(self) -> bool:
        return not VALID_TRANSITIONS[self]


VALID_TRANSITIONS: Dict[LicenseState, Set[LicenseState]] = {
    LicenseState.IDLE: {
        LicenseState.VALIDATING,
        LicenseState.ACTIVATION_REQUESTED,
        LicenseState.DEACTIVATION_REQUESTED,
    },
    LicenseState.VALIDATING: {
        LicenseState.SUCCESS,
        LicenseState.EULA_REQUIRED,
        LicenseState.ACTIVATION_REQUIRED,
        LicenseState.ERROR,
    },
    LicenseState.ACTIVATION_REQUESTED: {LicenseState.ACTIVATING},
    LicenseState.ACTIVATING: {
        LicenseState.ACTIVATION_SUCCESS,
        LicenseState.ACTIVATION_ERROR,
    },
    LicenseState.DEACTIVATION_REQUESTED: {LicenseState.DEACTIVATING},
    LicenseState.DEACTIVATING: {
        LicenseState.DEACTIVATION_SUCCESS,
        LicenseState.DEACTIVATION_ERROR,
    },
    # Terminal states - no transitions out
    LicenseState.SUCCESS: set(),
    LicenseState.EULA_REQUIRED: set(),
    LicenseState.ACTIVATION_REQUIRED: set(),
    LicenseState.ERROR: set(),
    LicenseState.ACTIVATION_SUCCESS: set(),
    LicenseState.ACTIVATION_ERROR: set(),
    LicenseState.DEACTIVATION_SUCCESS: set(),
    LicenseState.DEACTIVATION_ERROR: set(),
}


# ============================================================
# DISPATCH
# ============================================================

_VALIDATION_OUTCOMES = {
    EventKind.LICENSE_SUCCESS: LicenseState.SUCCESS,
    EventKind.LICENSE_EULA_REQUIRED: LicenseState.EULA_REQUIRED,
    EventKind.LICENSE_ACTIVATION_REQUIRED: LicenseState.ACTIVATION_REQUIRED,
    EventKind.LICENSE_ERROR: LicenseState.ERROR,
}


def dispatch(state: LicenseState, event: Event) -> Step:
    """
    Compute the gate's reaction to one event.

    SUCCESS carries no action: it releases the command instead.
    """
    kind = event.kind

    if state == LicenseState.VALIDATING and kind in _VALIDATION_OUTCOMES:
        outcome = _VALIDATION_OUTCOMES[kind]
        if outcome == LicenseState.SUCCESS:
            return Step(outcome)
        return Step(outcome, TerminalAction.failure(MSG_ACTIVATION_REQUIRED))

    if state == LicenseState.ACTIVATING:
        if kind == EventKind.LICENSE_ACTIVATION_SUCCESS:
            return Step(LicenseState.ACTIVATION_SUCCESS, TerminalAction.success(MSG_ACTIVATION_SUCCESS))
        if kind == EventKind.LICENSE_ACTIVATION_ERROR:
            return Step(LicenseState.ACTIVATION_ERROR, TerminalAction.failure(event.message))

    if state == LicenseState.DEACTIVATING:
        if kind == EventKind.LICENSE_DEACTIVATION_SUCCESS:
            return Step(LicenseState.DEACTIVATION_SUCCESS, TerminalAction.success(MSG_DEACTIVATION_SUCCESS))
        if kind == EventKind.LICENSE_DEACTIVATION_ERROR:
            return Step(LicenseState.DEACTIVATION_ERROR, TerminalAction.failure(event.message))

    return Step(state)


# ============================================================
# LICENSE GATE
# ============================================================

class LicenseGate:
    """
    Stateful wrapper around dispatch().

    Drives the license subsystem on entry and validates every
    transition against VALID_TRANSITIONS.
    """

    def __init__(self, license_system: LicenseSystem):
        self._license_system = license_system
        self._state = LicenseState.IDLE
        self._history: List[LicenseState] = [LicenseState.IDLE]

    @property
    def state(self) -> LicenseState:
        return self._state

    @property
    def history(self) -> List[LicenseState]:
        return list(self._history)

    @property
    def active(self) -> bool:
        """Waiting for a license event."""
        return self._state.is_waiting

    @property
    def released(self) -> bool:
        """Validation succeeded, the command may run."""
        return self._state == LicenseState.SUCCESS

    # --------------------------------------------------------
    # Entry points
    # --------------------------------------------------------

    def begin_validation(self) -> None:
        self._transition(LicenseState.VALIDATING, "validation requested")
        self._license_system.initialize()

    def begin_activation(self, activation_key: str) -> None:
        self._transition(LicenseState.ACTIVATION_REQUESTED, "activation key supplied")
        self._license_system.license_agreement_confirmed()
        self._transition(LicenseState.ACTIVATING, "license agreement confirmed")
        self._license_system.request_activation(activation_key)

    def begin_deactivation(self) -> None:
        self._transition(LicenseState.DEACTIVATION_REQUESTED, "deactivate flag supplied")
        self._transition(LicenseState.DEACTIVATING, "deactivation requested")
        self._license_system.request_deactivation()

    # --------------------------------------------------------
    # Events
    # --------------------------------------------------------

    def handle(self, event: Event) -> Step:
        step = dispatch(self._state, event)
        if step.state == self._state:
            logger.debug(f"License gate ignored event | state={self._state.value} | event={event.kind.value}")
            return step

        self._transition(step.state, event.kind.value)
        return step

    def _transition(self, target: LicenseState, reason: str) -> None:
        if target not in VALID_TRANSITIONS[self._state]:
            raise StateTransitionError(
                message=f"Invalid license transition: {self._state.value} -> {target.value}",
                from_state=self._state.value,
                to_state=target.value,
                reason=reason,
            )

        logger.debug(f"License gate: {self._state.value} -> {target.value} | reason={reason}")
        self._state = target
        self._history.append(target)


__all__ = [
    "LicenseState",
    "LicenseGate",
    "VALID_TRANSITIONS",
    "dispatch",
]
