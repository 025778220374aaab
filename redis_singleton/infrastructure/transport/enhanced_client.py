"""Connected client handle with JSON convenience operations."""

import logging
from typing import Any, Optional

from ...domain.exceptions import StoredValueDecodeError
from ...domain.interfaces import IStoreClient
from ...domain.strategies import JsonCodec, ValueCodecStrategy
from ..decorators import handle_store_errors, require_open

_LOGGER = logging.getLogger(__name__)


class EnhancedRedisClient:
    """Handle returned by get_client().

    Holds the store client of one successful connection and adds
    set_json()/get_json(). Every other attribute (GET, SET, EXISTS,
    DEL, ...) is forwarded to the held client.

    Example:
        >>> client = manager.get_client()
        >>> await client.set_json("user:1", {"name": "Alice", "age": 30})
        True
        >>> await client.get_json("user:1")
        {'name': 'Alice', 'age': 30}
        >>> await client.exists("user:1")
        1
    """

    def __init__(self, client: IStoreClient, codec: Optional[ValueCodecStrategy] = None):
        """Initialize handle.

        Args:
            client: Connected store client
            codec: Codec for structured values (default: JSON)
        """
        self._client = client
        self._codec = codec or JsonCodec()

    @property
    def raw_client(self) -> IStoreClient:
        """Get the held store client."""
        return self._client

    @property
    def is_open(self) -> bool:
        """Check if the held connection is open."""
        return self._client.is_open

    async def quit(self) -> None:
        """Close the held connection."""
        await self._client.quit()

    @require_open("SET JSON")
    @handle_store_errors("Set JSON")
    async def set_json(self, key: str, value: Any, **options: Any) -> Any:
        """Store a value as JSON text.

        Args:
            key: Redis key
            value: JSON-serializable value
            **options: SET options, e.g. ``ex=3600`` or ``nx=True``

        Returns:
            Result of the underlying SET (True/"OK", or None when a
            conditional SET did not write)

        Raises:
            TypeError: If the value is not JSON-serializable
            ValueError: If the value contains NaN or infinity
            RedisError: If the write fails
        """
        payload = self._codec.encode(value)
        return await self._client.set(key, payload, **options)

    @require_open("GET JSON")
    async def get_json(self, key: str) -> Any:
        """Read and decode a JSON value.

        A key holding text that is not valid JSON is logged and reported
        as None. A stored JSON ``null`` also decodes to None; use
        ``exists()`` to tell the two apart from a missing key.

        Args:
            key: Redis key

        Returns:
            Decoded value, or None if the key is absent or unparsable

        Raises:
            RedisError: If the read fails
        """
        raw = await self._client.get(key)
        if raw is None:
            return None

        try:
            return self._codec.decode(raw)
        except StoredValueDecodeError as err:
            _LOGGER.error(
                'Error parsing JSON for key "%s": invalid JSON data stored in Redis: %s',
                key,
                err,
            )
            return None

    def __getattr__(self, name: str) -> Any:
        """Forward raw commands to the held client."""
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._client, name)

    def __repr__(self) -> str:
        """Developer representation."""
        return f"EnhancedRedisClient(open={self.is_open}, client={self._client!r})"
