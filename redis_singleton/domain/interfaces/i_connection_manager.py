"""IConnectionManager interface for connection lifecycle management."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union


class IConnectionManager(ABC):
    """Interface for single-connection lifecycle management.

    A manager owns at most one active connection, at most one in-flight
    connection attempt and at most one last-known error. It is not a pool
    and it does not retry; reconnection internals belong to the client.

    Example:
        >>> manager = RedisConnectionManager()
        >>> await manager.connect("redis://localhost:6379/0")
        >>> client = manager.get_client()
        >>> await client.set_json("user:1", {"name": "Alice"})
        >>> await manager.disconnect()
    """

    @abstractmethod
    async def connect(
        self, options: Optional[Union[Mapping[str, Any], str]] = None
    ) -> None:
        """Establish the connection, or join the attempt already in flight.

        Args:
            options: Connection parameters, a connection URL, or None for
                client defaults

        Raises:
            ConnectFailureError: If the handshake fails
            InvalidOptionsError: If the options fail validation
        """

    @abstractmethod
    def get_client(self) -> Any:
        """Return the connected client without performing any I/O.

        Raises:
            NotConnectedError: No connection has been attempted
            StillConnectingError: An attempt is in flight
            ConnectionUnavailableError: The last attempt failed or the
                connection was lost
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection; a no-op when nothing is connected.

        Raises:
            DisconnectFailureError: If the graceful shutdown fails
        """

    @property
    @abstractmethod
    def connection_state(self) -> str:
        """Get current connection state.

        Returns:
            One of "disconnected", "connecting", "connected", "failed"
        """
