"""Tests for connection state machine."""

import pytest
from unittest.mock import Mock

from redis_singleton.infrastructure.state_machines.connection_state_machine import (
    ConnectionStateMachine,
    ConnectionState,
    ConnectionEvent,
    resolve_state,
)


class TestResolveState:
    """Test state derivation from manager slots."""

    @pytest.mark.parametrize(
        "has_open_handle,has_error,has_pending,expected",
        [
            (False, False, False, ConnectionState.DISCONNECTED),
            (False, False, True, ConnectionState.CONNECTING),
            (False, True, False, ConnectionState.FAILED),
            (False, True, True, ConnectionState.FAILED),
            (True, False, False, ConnectionState.CONNECTED),
            (True, True, False, ConnectionState.CONNECTED),
        ],
    )
    def test_priority(self, has_open_handle, has_error, has_pending, expected):
        """Test open handle beats error beats pending attempt."""
        assert resolve_state(has_open_handle, has_error, has_pending) == expected


class TestConnectionStateMachine:
    """Test connection state machine."""

    def test_initial_state_is_disconnected(self):
        """Test state machine starts in DISCONNECTED."""
        sm = ConnectionStateMachine()
        assert sm.state == ConnectionState.DISCONNECTED

    def test_advance_to_connecting(self):
        """Test DISCONNECTED -> CONNECTING."""
        sm = ConnectionStateMachine()
        assert sm.advance(ConnectionState.CONNECTING, ConnectionEvent.CONNECT)
        assert sm.state == ConnectionState.CONNECTING

    def test_advance_to_connected(self):
        """Test CONNECTING -> CONNECTED."""
        sm = ConnectionStateMachine()
        sm.advance(ConnectionState.CONNECTING, ConnectionEvent.CONNECT)
        assert sm.advance(ConnectionState.CONNECTED, ConnectionEvent.CONNECT_SUCCESS)
        assert sm.state == ConnectionState.CONNECTED

    def test_advance_to_failed(self):
        """Test CONNECTING -> FAILED."""
        sm = ConnectionStateMachine()
        sm.advance(ConnectionState.CONNECTING, ConnectionEvent.CONNECT)
        assert sm.advance(ConnectionState.FAILED, ConnectionEvent.CONNECT_FAILED)
        assert sm.state == ConnectionState.FAILED

    def test_same_state_returns_false(self):
        """Test re-reporting the current state is not a transition."""
        sm = ConnectionStateMachine()
        assert not sm.advance(ConnectionState.DISCONNECTED, ConnectionEvent.DISCONNECT)
        assert sm.state == ConnectionState.DISCONNECTED

    def test_state_callbacks(self):
        """Test state entry callbacks are invoked."""
        sm = ConnectionStateMachine()
        callback = Mock()
        sm.on_state(ConnectionState.CONNECTED, callback)

        sm.advance(ConnectionState.CONNECTING, ConnectionEvent.CONNECT)
        sm.advance(ConnectionState.CONNECTED, ConnectionEvent.CONNECT_SUCCESS)

        callback.assert_called_once()

    def test_callback_not_invoked_without_change(self):
        """Test callbacks only run on entry."""
        sm = ConnectionStateMachine()
        callback = Mock()
        sm.on_state(ConnectionState.DISCONNECTED, callback)

        sm.advance(ConnectionState.DISCONNECTED, ConnectionEvent.DISCONNECT)

        callback.assert_not_called()

    def test_callback_error_does_not_propagate(self):
        """Test a failing callback is logged and the transition kept."""
        sm = ConnectionStateMachine()
        sm.on_state(ConnectionState.FAILED, Mock(side_effect=RuntimeError("boom")))

        assert sm.advance(ConnectionState.FAILED, ConnectionEvent.CLIENT_ERROR)
        assert sm.state == ConnectionState.FAILED

    def test_string_representation(self):
        """Test str and repr."""
        sm = ConnectionStateMachine()
        assert str(sm) == "ConnectionStateMachine(state=DISCONNECTED)"
        sm.on_state(ConnectionState.FAILED, Mock())
        assert "callbacks=['FAILED']" in repr(sm)
