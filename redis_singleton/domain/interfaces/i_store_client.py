"""IStoreClient interface for the underlying key-value client."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Optional


class ClientEvent(Enum):
    """Lifecycle notifications emitted by a store client."""

    ERROR = "error"
    CONNECT = "connect"
    READY = "ready"
    END = "end"


class IStoreClient(ABC):
    """Interface for a single connection to the key-value store.

    The connection manager treats implementations as an opaque capability
    set: a connect/quit lifecycle, an "is open" query, GET/SET and event
    notifications. Any other command is reached through attribute access.

    Connection lifecycle:
        1. on(event, callback) -> observers registered before the handshake
        2. connect() -> handshake; emits CONNECT then READY
        3. get()/set()/... -> commands
        4. quit() -> graceful shutdown; emits END

    Example:
        >>> client = RedisAdapter({"url": "redis://localhost:6379/0"})
        >>> client.on(ClientEvent.END, lambda error=None: print("closed"))
        >>> await client.connect()
        >>> await client.set("greeting", "hello")
        >>> await client.quit()
    """

    @abstractmethod
    def on(self, event: ClientEvent, callback: Callable[..., None]) -> None:
        """Register an observer for a lifecycle event.

        ERROR observers receive the error as ``error=``; the other events
        pass no arguments.

        Args:
            event: Event to observe
            callback: Function to call when the event fires
        """

    @abstractmethod
    async def connect(self) -> None:
        """Perform the connection handshake.

        Raises:
            Exception: Whatever the underlying library raises on failure
        """

    @abstractmethod
    async def quit(self) -> None:
        """Close the connection gracefully.

        After quit, is_open must return False and END must have fired.
        """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Read the raw value stored at ``key`` (None when absent)."""

    @abstractmethod
    async def set(self, key: str, value: Any, **options: Any) -> Any:
        """Write ``value`` at ``key`` with passthrough SET options."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Check if the connection is currently open."""
