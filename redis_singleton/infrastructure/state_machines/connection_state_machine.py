"""Connection state machine for explicit state management."""

import logging
from enum import Enum, auto
from typing import Callable, Dict

_LOGGER = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection states."""

    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    FAILED = auto()


class ConnectionEvent(Enum):
    """Events that trigger state transitions."""

    CONNECT = auto()
    CONNECT_SUCCESS = auto()
    CONNECT_FAILED = auto()
    ATTEMPT_SETTLED = auto()
    CLIENT_ERROR = auto()
    CONNECTION_LOST = auto()
    DISCONNECT = auto()
    DISCONNECT_FAILED = auto()


def resolve_state(
    has_open_handle: bool, has_error: bool, has_pending: bool
) -> ConnectionState:
    """Derive the state from the manager's slots.

    Priority matches get_client(): an open handle wins, then a recorded
    error, then an in-flight attempt.

    Example:
        >>> resolve_state(False, True, True)
        <ConnectionState.FAILED: 4>
    """
    if has_open_handle:
        return ConnectionState.CONNECTED
    if has_error:
        return ConnectionState.FAILED
    if has_pending:
        return ConnectionState.CONNECTING
    return ConnectionState.DISCONNECTED


class ConnectionStateMachine:
    """State machine for connection lifecycle management.

    The manager's slots (handle, pending attempt, last error) are the
    source of truth; after every mutation the manager reports the derived
    state together with the event that caused it. The machine records the
    transition, logs it and runs the state-entry callback.

    Typical transitions:
        DISCONNECTED -> CONNECTING (on CONNECT)
        CONNECTING -> CONNECTED (on CONNECT_SUCCESS)
        CONNECTING -> FAILED (on CONNECT_FAILED)
        CONNECTED -> FAILED (on CLIENT_ERROR or CONNECTION_LOST)
        CONNECTED -> DISCONNECTED (on DISCONNECT)
        FAILED -> CONNECTING (on CONNECT)
        FAILED -> DISCONNECTED (on DISCONNECT)

    Example:
        >>> sm = ConnectionStateMachine()
        >>> sm.advance(ConnectionState.CONNECTING, ConnectionEvent.CONNECT)
        True
        >>> sm.state
        <ConnectionState.CONNECTING: 2>
        >>> sm.advance(ConnectionState.CONNECTING, ConnectionEvent.CONNECT)
        False
    """

    def __init__(self):
        """Initialize state machine in DISCONNECTED state."""
        self._state = ConnectionState.DISCONNECTED

        # Callbacks for state entry
        self._on_state_change: Dict[ConnectionState, Callable] = {}

    @property
    def state(self) -> ConnectionState:
        """Get current state."""
        return self._state

    def advance(self, new_state: ConnectionState, event: ConnectionEvent) -> bool:
        """Move to ``new_state`` if it differs from the current state.

        Args:
            new_state: State derived from the manager's slots
            event: Event that triggered the re-evaluation

        Returns:
            True if the state changed, False if it was already current

        Example:
            >>> sm = ConnectionStateMachine()
            >>> sm.advance(ConnectionState.DISCONNECTED, ConnectionEvent.DISCONNECT)
            False
        """
        if new_state == self._state:
            _LOGGER.debug(
                "Connection state unchanged: %s (event: %s)",
                self._state.name,
                event.name,
            )
            return False

        self._change_state(new_state, event)
        return True

    def _change_state(self, new_state: ConnectionState, event: ConnectionEvent):
        """Change to new state and invoke callbacks.

        Args:
            new_state: State to transition to
            event: Event that triggered transition
        """
        previous = self._state
        self._state = new_state

        _LOGGER.debug(
            "Connection state: %s -> %s (event: %s)",
            previous.name,
            new_state.name,
            event.name,
        )

        # Invoke state change callback
        if new_state in self._on_state_change:
            try:
                self._on_state_change[new_state]()
            except Exception as err:
                _LOGGER.error("Error in state change callback: %s", err)

    def on_state(self, state: ConnectionState, callback: Callable):
        """Register callback for state entry.

        Args:
            state: State to watch
            callback: Function to call on state entry (no args)

        Example:
            >>> sm = ConnectionStateMachine()
            >>> sm.on_state(ConnectionState.CONNECTED, lambda: print("Connected!"))
        """
        self._on_state_change[state] = callback

    def __str__(self) -> str:
        """String representation."""
        return f"ConnectionStateMachine(state={self._state.name})"

    def __repr__(self) -> str:
        """Developer representation."""
        return f"ConnectionStateMachine(state={self._state!r}, callbacks={sorted(s.name for s in self._on_state_change)!r})"
