"""
Tests for the lifecycle StateManager.
"""

import pytest

from core.exceptions import StateTransitionError, ToolException
from core.state_manager import StateManager, ToolState, VALID_TRANSITIONS


class TestToolState:
    """Tests for ToolState."""

    def test_only_stopped_is_terminal(self):
        assert ToolState.STOPPED.is_terminal
        assert not ToolState.STOPPING.is_terminal
        assert not ToolState.RUNNING.is_terminal

    def test_every_live_state_can_stop(self):
        for state in (ToolState.INITIALIZING, ToolState.SETTING_UP, ToolState.STARTING, ToolState.RUNNING):
            assert ToolState.STOPPING in VALID_TRANSITIONS[state]

    def test_stopped_has_no_transitions(self):
        assert VALID_TRANSITIONS[ToolState.STOPPED] == set()


class TestStateManager:
    """Tests for StateManager transitions."""

    def test_full_lifecycle(self):
        manager = StateManager()

        for state in (
            ToolState.SETTING_UP,
            ToolState.STARTING,
            ToolState.RUNNING,
            ToolState.STOPPING,
            ToolState.STOPPED,
        ):
            manager.transition_to(state, reason="test")

        assert manager.state == ToolState.STOPPED
        assert manager.is_stopping
        assert len(manager.get_history()) == 5

    def test_invalid_transition_raises(self):
        manager = StateManager()

        with pytest.raises(StateTransitionError) as exc_info:
            manager.transition_to(ToolState.RUNNING, reason="skip setup")

        assert isinstance(exc_info.value, ToolException)
        assert exc_info.value.context["from_state"] == "initializing"
        assert exc_info.value.context["to_state"] == "running"
        assert manager.state == ToolState.INITIALIZING

    def test_short_circuit_to_stopping(self):
        manager = StateManager()
        manager.transition_to(ToolState.SETTING_UP, reason="setup")

        manager.transition_to(ToolState.STOPPING, reason="failure")

        assert manager.is_stopping
        assert not manager.can_transition_to(ToolState.RUNNING)

    def test_history_records_reason(self):
        manager = StateManager()
        transition = manager.transition_to(ToolState.SETTING_UP, reason="setup", context={"a": 1})

        assert manager.reason == "setup"
        record = transition.to_dict()
        assert record["from_state"] == "initializing"
        assert record["to_state"] == "setting_up"
        assert record["context"] == {"a": 1}

