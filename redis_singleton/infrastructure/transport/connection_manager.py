"""Connection manager for the single Redis connection lifecycle.

This module implements connection lifecycle management with:
- Attempt coalescing (concurrent connect() calls share one handshake)
- Event-driven state updates from the underlying client
- Deterministic errors for every non-ready state
- Graceful disconnect

State only changes between suspension points. Identity checks guard the
shared slots against stale attempts and clients.
"""

import asyncio
import logging
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, Union

from ...config import normalize_options
from ...const import (
    MSG_CLIENT_ERROR,
    MSG_CONNECT_FAILED,
    MSG_CONNECTION_CLOSED,
    MSG_DISCONNECT_FAILED,
    MSG_NOT_CONNECTED,
    MSG_STILL_CONNECTING,
    MSG_UNAVAILABLE,
)
from ...domain.exceptions import (
    ConnectFailureError,
    ConnectionClosedError,
    ConnectionLostError,
    ConnectionUnavailableError,
    DisconnectFailureError,
    ErrorKind,
    NotConnectedError,
    RedisSingletonError,
    StillConnectingError,
)
from ...domain.interfaces import ClientEvent, IConnectionManager, IStoreClient
from ...domain.strategies import ValueCodecStrategy
from ..state_machines import (
    ConnectionEvent,
    ConnectionState,
    ConnectionStateMachine,
    resolve_state,
)
from .enhanced_client import EnhancedRedisClient
from .redis_adapter import RedisAdapter

_LOGGER = logging.getLogger(__name__)

ClientFactory = Callable[[Dict[str, Any]], IStoreClient]


class RedisConnectionManager(IConnectionManager):
    """Manages one Redis connection per instance.

    This implementation:
    - Holds at most one active handle, one pending attempt and one
      last-known error
    - Shares a single in-flight attempt between concurrent callers
    - Reacts to ERROR and END notifications from the client
    - Never retries; reconnection policy belongs to the client library

    Attributes:
        _client_factory: Builds one store client per connection attempt
        _codec: Codec given to each published handle
        _handle: Active handle, or None
        _pending: In-flight attempt, or None
        _last_error: Last error not superseded by a successful connect
        _closing: Store client being shut down by disconnect()

    Example:
        >>> manager = RedisConnectionManager()
        >>> await manager.connect({"host": "localhost", "db": 0})
        >>> client = manager.get_client()
        >>> await client.set_json("user:1", {"name": "Alice", "age": 30})
        >>> await manager.disconnect()
    """

    def __init__(
        self,
        client_factory: ClientFactory = RedisAdapter,
        codec: Optional[ValueCodecStrategy] = None,
    ):
        """Initialize connection manager.

        Args:
            client_factory: Callable building a store client from options
            codec: Codec for set_json/get_json (default: JSON)
        """
        self._client_factory = client_factory
        self._codec = codec
        self._handle: Optional[EnhancedRedisClient] = None
        self._pending: Optional[asyncio.Task] = None
        self._last_error: Optional[RedisSingletonError] = None
        self._closing: Optional[IStoreClient] = None
        self._state_machine = ConnectionStateMachine()

        # Failures are logged where they are recorded
        self._state_machine.on_state(ConnectionState.CONNECTED, self._on_connected)

    def _on_connected(self):
        """Callback when connection established."""
        _LOGGER.info("Redis connection established")

    async def connect(
        self, options: Optional[Union[Mapping[str, Any], str]] = None
    ) -> None:
        """Connect, or join the attempt already in flight.

        1. Open handle -> return immediately (no I/O)
        2. Attempt in flight -> wait for that same attempt
        3. Otherwise start a new attempt and wait for it

        Every caller waiting on one attempt sees the same outcome. A caller
        that is cancelled stops waiting but does not cancel the attempt.

        Args:
            options: Connection parameters, a connection URL, or None for
                client defaults. Ignored when joining an existing attempt.

        Raises:
            ConnectFailureError: If the handshake fails
            InvalidOptionsError: If the options fail validation

        Example:
            >>> await asyncio.gather(manager.connect(url), manager.connect(url))
            >>> # One handshake was performed
        """
        if self._handle is not None and self._handle.is_open:
            return

        if self._pending is None:
            self._pending = self._begin_attempt(options)
            self._refresh_state(ConnectionEvent.CONNECT)

        await asyncio.shield(self._pending)

    def _begin_attempt(
        self, options: Optional[Union[Mapping[str, Any], str]]
    ) -> asyncio.Task:
        """Create a client, wire its observers and schedule the handshake.

        Nothing here suspends, so the observers and the finalizer are in
        place before the handshake task first runs.
        """
        client_options = normalize_options(options)

        self._last_error = None
        client = self._client_factory(client_options)
        attempt = asyncio.get_running_loop().create_task(self._handshake(client))

        for event in ClientEvent:
            client.on(event, partial(self._on_client_event, client, attempt, event))

        attempt.add_done_callback(self._release_attempt)

        _LOGGER.debug("Started Redis connection attempt")
        return attempt

    async def _handshake(self, client: IStoreClient) -> None:
        """Run the handshake and publish the outcome."""
        attempt = asyncio.current_task()

        try:
            await client.connect()
        except Exception as err:
            failure = ConnectFailureError(MSG_CONNECT_FAILED.format(cause=err), cause=err)
            _LOGGER.error("%s", failure)
            self._last_error = failure
            if self._pending is attempt:
                self._pending = None
            self._refresh_state(ConnectionEvent.CONNECT_FAILED)
            raise failure from err

        if self._pending is not attempt and (self._pending is not None or self.is_connected):
            # Abandoned by disconnect(); a newer attempt or handle owns the slot
            await self._close_superseded(client)
            return

        self._handle = EnhancedRedisClient(client, self._codec)
        self._last_error = None
        if self._pending is attempt:
            self._pending = None
        self._refresh_state(ConnectionEvent.CONNECT_SUCCESS)

    async def _close_superseded(self, client: IStoreClient) -> None:
        """Close the client of an abandoned attempt that finished late."""
        _LOGGER.info("Closing Redis client of an abandoned connection attempt")
        try:
            await client.quit()
        except Exception as err:
            # The published connection is unaffected
            _LOGGER.warning("Error closing abandoned Redis client: %s", err)

    def _release_attempt(self, attempt: asyncio.Task) -> None:
        """Finalizer: clear the pending slot if it still holds this attempt."""
        if self._pending is attempt:
            self._pending = None
            self._refresh_state(ConnectionEvent.ATTEMPT_SETTLED)

        # Attempts abandoned by disconnect() are never awaited
        if not attempt.cancelled():
            attempt.exception()

    def _on_client_event(
        self,
        client: IStoreClient,
        attempt: asyncio.Task,
        event: ClientEvent,
        error: Optional[BaseException] = None,
    ) -> None:
        """React to a lifecycle notification from a store client.

        All event-driven transitions happen here.

        Args:
            client: Client that emitted the event
            attempt: Attempt that created the client
            event: Event kind
            error: Error payload for ERROR events
        """
        owns_handle = self._handle is not None and self._handle.raw_client is client

        if event is ClientEvent.ERROR:
            if not owns_handle and self._pending is not attempt:
                _LOGGER.debug("Ignoring error from stale Redis client: %s", error)
                return

            _LOGGER.error("Redis client error: %s", error)
            kind = ErrorKind.DISCONNECTION if client is self._closing else None
            self._last_error = ConnectionLostError(
                MSG_CLIENT_ERROR.format(cause=error), cause=error, kind=kind
            )
            if owns_handle:
                self._handle = None
            self._refresh_state(ConnectionEvent.CLIENT_ERROR)

        elif event in (ClientEvent.CONNECT, ClientEvent.READY):
            _LOGGER.debug("Redis client %s", event.value)

        elif event is ClientEvent.END:
            if owns_handle:
                self._handle = None
            if self._pending is attempt:
                self._pending = None

            if client is self._closing:
                _LOGGER.debug("Redis connection ended by disconnect()")
            elif owns_handle and self._last_error is None:
                _LOGGER.warning("Redis connection closed unexpectedly")
                self._last_error = ConnectionClosedError(MSG_CONNECTION_CLOSED)

            self._refresh_state(ConnectionEvent.CONNECTION_LOST)

    def get_client(self) -> EnhancedRedisClient:
        """Return the connected handle.

        Synchronous and side-effect free; it never starts a connection.

        Returns:
            Handle exposing Redis commands plus set_json/get_json

        Raises:
            ConnectionUnavailableError: The last attempt failed or the
                connection was lost (wraps the recorded error)
            StillConnectingError: An attempt is in flight
            NotConnectedError: connect() has not been called
        """
        if self._handle is not None and self._handle.is_open:
            return self._handle

        if self._last_error is not None:
            raise ConnectionUnavailableError(
                MSG_UNAVAILABLE.format(cause=self._last_error),
                cause=self._last_error,
            )

        if self._pending is not None:
            raise StillConnectingError(MSG_STILL_CONNECTING)

        raise NotConnectedError(MSG_NOT_CONNECTED)

    async def disconnect(self) -> None:
        """Close the connection gracefully.

        Any pending attempt is abandoned. If it later succeeds its handle
        is published, unless a newer attempt or handle exists, in which
        case its client is closed. Disconnecting while disconnected is a no-op.

        Raises:
            DisconnectFailureError: If the graceful shutdown fails; the
                error is also recorded for get_client()
        """
        handle = self._handle
        self._pending = None

        if handle is None or not handle.is_open:
            self._handle = None
            self._last_error = None
            self._refresh_state(ConnectionEvent.DISCONNECT)
            return

        self._closing = handle.raw_client
        try:
            await handle.quit()
        except Exception as err:
            failure = DisconnectFailureError(
                MSG_DISCONNECT_FAILED.format(cause=err), cause=err
            )
            _LOGGER.error("%s", failure)
            if self._handle is handle:
                self._handle = None
            self._last_error = failure
            self._refresh_state(ConnectionEvent.DISCONNECT_FAILED)
            raise failure from err
        finally:
            self._closing = None

        if self._handle is handle:
            self._handle = None
        # Keep errors raised by this disconnection; clear anything older
        if self._last_error is None or self._last_error.kind is not ErrorKind.DISCONNECTION:
            self._last_error = None
        _LOGGER.info("Redis connection closed")
        self._refresh_state(ConnectionEvent.DISCONNECT)

    def _refresh_state(self, event: ConnectionEvent) -> None:
        """Report the state derived from the slots to the state machine."""
        self._state_machine.advance(
            resolve_state(
                self._handle is not None and self._handle.is_open,
                self._last_error is not None,
                self._pending is not None,
            ),
            event,
        )

    def on_state(self, state: ConnectionState, callback: Callable[[], None]) -> None:
        """Register a callback run when the manager enters ``state``.

        Replaces the built-in logging callback for CONNECTED.
        """
        self._state_machine.on_state(state, callback)

    @property
    def connection_state(self) -> str:
        """Get current connection state.

        Returns:
            State: "disconnected", "connecting", "connected", "failed"

        Example:
            >>> state = manager.connection_state
            >>> assert state in ["disconnected", "connecting", "connected", "failed"]
        """
        return self._state_machine.state.name.lower()

    @property
    def is_connected(self) -> bool:
        """Check if a handle is published and open."""
        return self._handle is not None and self._handle.is_open

    @property
    def is_connecting(self) -> bool:
        """Check if an attempt is in flight."""
        return self._pending is not None

    @property
    def last_error(self) -> Optional[RedisSingletonError]:
        """Get the recorded error, if any."""
        return self._last_error

    def get_connection_info(self) -> dict:
        """Get current connection diagnostics.

        Returns:
            Dictionary with state and error details

        Example:
            >>> info = manager.get_connection_info()
            >>> print(f"State: {info['state']}")
        """
        return {
            "state": self.connection_state,
            "connected": self.is_connected,
            "connecting": self.is_connecting,
            "last_error": str(self._last_error) if self._last_error else None,
            "last_error_kind": self._last_error.kind.name if self._last_error else None,
        }
