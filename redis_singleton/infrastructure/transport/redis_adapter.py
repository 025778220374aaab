"""Adapter for redis.asyncio.Redis with lifecycle events.

redis-py connects lazily and has no event API. This adapter gives the
connection manager the capability set it expects: an explicit handshake,
an "is open" flag, a graceful quit, and ERROR/CONNECT/READY/END
notifications. In tests a fake client is injected instead.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from ...const import MSG_CLIENT_CLOSED
from ...domain.exceptions import ClientClosedError
from ...domain.interfaces import ClientEvent, IStoreClient

_LOGGER = logging.getLogger(__name__)

# Client methods that build objects synchronously rather than run a command
_SYNC_FACTORIES = frozenset(
    {"pipeline", "pubsub", "lock", "register_script", "monitor", "get_encoder"}
)


class RedisAdapter(IStoreClient):
    """Adapter for redis.asyncio.Redis.

    This wrapper allows us to:
    1. Replace the Redis client with a fake in tests
    2. Emit lifecycle events the manager reacts to
    3. Refuse commands once the connection has been closed

    Any Redis command not defined here is forwarded to the underlying
    client, e.g. ``await adapter.exists("key")``.

    Attributes:
        client: Underlying redis.asyncio.Redis instance

    Example:
        >>> adapter = RedisAdapter({"url": "redis://localhost:6379/0"})
        >>> await adapter.connect()
        >>> await adapter.set("key", "value", ex=60)
        >>> await adapter.quit()
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """Initialize adapter with connection options.

        Args:
            options: Keyword arguments for redis.asyncio.Redis; a ``url``
                key is passed to Redis.from_url() with the rest as overrides
        """
        options = dict(options or {})
        url = options.pop("url", None)

        if url:
            self._client = Redis.from_url(url, **options)
        else:
            self._client = Redis(**options)

        self._open = False
        self._observers: Dict[ClientEvent, List[Callable[..., None]]] = {
            event: [] for event in ClientEvent
        }

    @property
    def client(self) -> Redis:
        """Get the underlying Redis client."""
        return self._client

    @property
    def is_open(self) -> bool:
        """Check if the connection is open."""
        return self._open

    def on(self, event: ClientEvent, callback: Callable[..., None]) -> None:
        """Register an observer for a lifecycle event."""
        self._observers[event].append(callback)

    async def connect(self) -> None:
        """Perform the handshake by sending PING.

        Raises:
            RedisError: If the server cannot be reached or rejects the
                handshake (authentication, database selection)
        """
        if self._open:
            return

        try:
            await self._client.ping()
        except Exception:
            await self._release()
            raise

        self._open = True
        self._emit(ClientEvent.CONNECT)
        self._emit(ClientEvent.READY)

    async def quit(self) -> None:
        """Close the connection and its pool.

        The adapter is closed afterwards even if closing raised.
        """
        try:
            await self._client.aclose()
        finally:
            was_open = self._open
            self._open = False
            if was_open:
                self._emit(ClientEvent.END)

    async def get(self, key: str) -> Optional[Any]:
        """Run GET."""
        return await self._run("get", self._client.get, key)

    async def set(self, key: str, value: Any, **options: Any) -> Any:
        """Run SET with passthrough options (ex, px, nx, xx, keepttl, get)."""
        return await self._run("set", self._client.set, key, value, **options)

    def __getattr__(self, name: str) -> Any:
        """Forward any other command to the Redis client."""
        if name.startswith("_"):
            raise AttributeError(name)

        attr = getattr(self._client, name)
        if name in _SYNC_FACTORIES or not callable(attr):
            return attr

        async def command(*args, **kwargs):
            return await self._run(name, attr, *args, **kwargs)

        command.__name__ = name
        return command

    async def _run(self, name: str, method: Callable, *args, **kwargs) -> Any:
        """Run a command, reporting connection errors as ERROR events."""
        if not self._open:
            raise ClientClosedError(MSG_CLIENT_CLOSED.format(command=name.upper()))

        try:
            return await method(*args, **kwargs)
        except RedisConnectionError as err:
            _LOGGER.warning("Redis %s failed with connection error: %s", name.upper(), err)
            self._emit(ClientEvent.ERROR, error=err)
            raise

    async def _release(self) -> None:
        """Close the pool after a failed handshake."""
        try:
            await self._client.aclose()
        except Exception as err:
            _LOGGER.debug("Error closing Redis client after failed handshake: %s", err)

    def _emit(self, event: ClientEvent, **payload: Any) -> None:
        """Notify observers; observer errors are logged, not propagated."""
        for callback in list(self._observers[event]):
            try:
                callback(**payload)
            except Exception as err:
                _LOGGER.error("Error in %s observer: %s", event.value, err, exc_info=True)

    def __repr__(self) -> str:
        """Developer representation."""
        return f"RedisAdapter(open={self._open}, client={self._client!r})"
