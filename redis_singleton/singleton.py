"""Process-wide default connection.

Module-level connect/get_client/disconnect operate on one lazily created
RedisConnectionManager. Applications that need isolated connections (or
tests) construct their own manager instead.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .infrastructure.transport import EnhancedRedisClient, RedisConnectionManager

_LOGGER = logging.getLogger(__name__)

# Global manager instance (created on first use)
_default_manager: Optional[RedisConnectionManager] = None


def get_default_manager() -> RedisConnectionManager:
    """Get the process-wide connection manager, creating it if needed."""
    global _default_manager
    if _default_manager is None:
        _LOGGER.debug("Creating default Redis connection manager")
        _default_manager = RedisConnectionManager()
    return _default_manager


def reset_default_manager() -> None:
    """Drop the process-wide manager.

    Does not close its connection; call disconnect() first.
    """
    global _default_manager
    _default_manager = None


async def connect(options: Mapping[str, Any] | str | None = None) -> None:
    """Connect the default manager.

    Args:
        options: Connection parameters, a connection URL, or None

    Example:
        >>> await connect("redis://localhost:6379/0")
    """
    await get_default_manager().connect(options)


def get_client() -> EnhancedRedisClient:
    """Get the default manager's connected handle.

    Raises:
        NotConnectedError, StillConnectingError, ConnectionUnavailableError
    """
    return get_default_manager().get_client()


async def disconnect() -> None:
    """Disconnect the default manager."""
    await get_default_manager().disconnect()
