"""
Tests for the LicenseGate state machine.

============================================================
TEST PRINCIPLES:
- dispatch() is pure: state + event -> Step
- Only the event expected in the current state has any effect
- Terminal states are final
============================================================
"""

from unittest.mock import MagicMock

import pytest

from core.constants import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    MSG_ACTIVATION_REQUIRED,
    MSG_ACTIVATION_SUCCESS,
    MSG_DEACTIVATION_SUCCESS,
)
from core.exceptions import StateTransitionError
from orchestrator.license_gate import LicenseGate, LicenseState, VALID_TRANSITIONS, dispatch
from toolcore.events import Event, EventKind
from toolcore.license import LicenseSystem


def event(kind: EventKind, **data) -> Event:
    return Event(kind=kind, data=data)


@pytest.fixture
def license_system():
    return MagicMock(spec=LicenseSystem)


# ============================================================
# PURE DISPATCH
# ============================================================

class TestDispatch:
    """Tests for the pure dispatch function."""

    def test_validation_success_releases(self):
        step = dispatch(LicenseState.VALIDATING, event(EventKind.LICENSE_SUCCESS))

        assert step.state == LicenseState.SUCCESS
        assert step.action is None

    @pytest.mark.parametrize("kind,state", [
        (EventKind.LICENSE_EULA_REQUIRED, LicenseState.EULA_REQUIRED),
        (EventKind.LICENSE_ACTIVATION_REQUIRED, LicenseState.ACTIVATION_REQUIRED),
        (EventKind.LICENSE_ERROR, LicenseState.ERROR),
    ])
    def test_validation_failures(self, kind, state):
        step = dispatch(LicenseState.VALIDATING, event(kind, message="detail"))

        assert step.state == state
        assert step.action.exit_code == EXIT_FAILURE
        assert step.action.message == MSG_ACTIVATION_REQUIRED

    def test_activation_success(self):
        step = dispatch(LicenseState.ACTIVATING, event(EventKind.LICENSE_ACTIVATION_SUCCESS))

        assert step.state == LicenseState.ACTIVATION_SUCCESS
        assert step.action.exit_code == EXIT_SUCCESS
        assert step.action.output == MSG_ACTIVATION_SUCCESS

    def test_activation_error_carries_message(self):
        step = dispatch(LicenseState.ACTIVATING, event(EventKind.LICENSE_ACTIVATION_ERROR, message="Invalid key"))

        assert step.state == LicenseState.ACTIVATION_ERROR
        assert step.action.exit_code == EXIT_FAILURE
        assert step.action.message == "Invalid key"

    def test_deactivation_success(self):
        step = dispatch(LicenseState.DEACTIVATING, event(EventKind.LICENSE_DEACTIVATION_SUCCESS))

        assert step.state == LicenseState.DEACTIVATION_SUCCESS
        assert step.action.output == MSG_DEACTIVATION_SUCCESS

    def test_deactivation_error_carries_message(self):
        step = dispatch(LicenseState.DEACTIVATING, event(EventKind.LICENSE_DEACTIVATION_ERROR, message="nope"))

        assert step.state == LicenseState.DEACTIVATION_ERROR
        assert step.action.message == "nope"

    @pytest.mark.parametrize("state,kind", [
        (LicenseState.IDLE, EventKind.LICENSE_SUCCESS),
        (LicenseState.VALIDATING, EventKind.LICENSE_ACTIVATION_SUCCESS),
        (LicenseState.VALIDATING, EventKind.COMMAND_FINISHED),
        (LicenseState.ACTIVATING, EventKind.LICENSE_SUCCESS),
        (LicenseState.DEACTIVATING, EventKind.LICENSE_ACTIVATION_ERROR),
        (LicenseState.SUCCESS, EventKind.LICENSE_ERROR),
        (LicenseState.ACTIVATION_SUCCESS, EventKind.LICENSE_ACTIVATION_ERROR),
    ])
    def test_unrelated_events_change_nothing(self, state, kind):
        step = dispatch(state, event(kind))

        assert step.state == state
        assert step.action is None

    def test_terminal_states(self):
        terminal = {state for state in LicenseState if state.is_terminal}

        assert terminal == {state for state, targets in VALID_TRANSITIONS.items() if not targets}
        assert LicenseState.SUCCESS in terminal
        assert LicenseState.VALIDATING not in terminal


# ============================================================
# GATE
# ============================================================

class TestLicenseGate:
    """Tests for the stateful gate."""

    def test_validation_entry(self, license_system):
        gate = LicenseGate(license_system)

        gate.begin_validation()

        assert gate.state == LicenseState.VALIDATING
        assert gate.active
        license_system.initialize.assert_called_once_with()

    def test_validation_release(self, license_system):
        gate = LicenseGate(license_system)
        gate.begin_validation()

        step = gate.handle(event(EventKind.LICENSE_SUCCESS))

        assert step.action is None
        assert gate.released
        assert not gate.active

    def test_activation_entry(self, license_system):
        gate = LicenseGate(license_system)

        gate.begin_activation("ATOMIC-AB12-CD34-EF56-GH78")

        assert gate.state == LicenseState.ACTIVATING
        assert gate.history == [
            LicenseState.IDLE,
            LicenseState.ACTIVATION_REQUESTED,
            LicenseState.ACTIVATING,
        ]
        license_system.license_agreement_confirmed.assert_called_once_with()
        license_system.request_activation.assert_called_once_with("ATOMIC-AB12-CD34-EF56-GH78")

    def test_agreement_confirmed_before_activation(self, license_system):
        calls = []
        license_system.license_agreement_confirmed.side_effect = lambda: calls.append("confirmed")
        license_system.request_activation.side_effect = lambda key: calls.append("activate")
        gate = LicenseGate(license_system)

        gate.begin_activation("KEY")

        assert calls == ["confirmed", "activate"]

    def test_deactivation_entry(self, license_system):
        gate = LicenseGate(license_system)

        gate.begin_deactivation()

        assert gate.state == LicenseState.DEACTIVATING
        license_system.request_deactivation.assert_called_once_with()
        license_system.initialize.assert_not_called()

    def test_terminal_state_ignores_further_events(self, license_system):
        gate = LicenseGate(license_system)
        gate.begin_activation("KEY")
        gate.handle(event(EventKind.LICENSE_ACTIVATION_ERROR, message="bad"))

        step = gate.handle(event(EventKind.LICENSE_ACTIVATION_SUCCESS))

        assert gate.state == LicenseState.ACTIVATION_ERROR
        assert step.action is None

    def test_second_entry_point_rejected(self, license_system):
        gate = LicenseGate(license_system)
        gate.begin_validation()

        with pytest.raises(StateTransitionError):
            gate.begin_activation("KEY")

        license_system.request_activation.assert_not_called()
