"""State machines for managing complex state transitions."""

from .connection_state_machine import (
    ConnectionStateMachine,
    ConnectionState,
    ConnectionEvent,
    resolve_state,
)

__all__ = [
    "ConnectionStateMachine",
    "ConnectionState",
    "ConnectionEvent",
    "resolve_state",
]
