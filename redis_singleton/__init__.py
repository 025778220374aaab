"""Singleton connector for redis.asyncio.

Manages one shared Redis connection with a lifecycle-aware accessor and
JSON convenience operations:

    >>> import redis_singleton
    >>> await redis_singleton.connect({"url": "redis://localhost:6379/0"})
    >>> client = redis_singleton.get_client()
    >>> await client.set_json("user:1", {"name": "Alice", "age": 30})
    >>> await client.get_json("user:1")
    {'name': 'Alice', 'age': 30}
    >>> await redis_singleton.disconnect()
"""

from .config_loader import load_connection_options
from .domain.exceptions import (
    ClientClosedError,
    ConnectFailureError,
    ConnectionClosedError,
    ConnectionLostError,
    ConnectionUnavailableError,
    DisconnectFailureError,
    ErrorKind,
    InvalidOptionsError,
    NotConnectedError,
    RedisSingletonError,
    StillConnectingError,
    StoredValueDecodeError,
)
from .infrastructure.state_machines import ConnectionState
from .infrastructure.transport import (
    EnhancedRedisClient,
    RedisAdapter,
    RedisConnectionManager,
)
from .singleton import (
    connect,
    disconnect,
    get_client,
    get_default_manager,
    reset_default_manager,
)

__all__ = [
    "connect",
    "disconnect",
    "get_client",
    "get_default_manager",
    "reset_default_manager",
    "load_connection_options",
    "ConnectionState",
    "EnhancedRedisClient",
    "RedisAdapter",
    "RedisConnectionManager",
    "ClientClosedError",
    "ConnectFailureError",
    "ConnectionClosedError",
    "ConnectionLostError",
    "ConnectionUnavailableError",
    "DisconnectFailureError",
    "ErrorKind",
    "InvalidOptionsError",
    "NotConnectedError",
    "RedisSingletonError",
    "StillConnectingError",
    "StoredValueDecodeError",
]
