"""Redis transport implementations.

This module contains the redis-backed store client, the handle returned
to callers, and the connection lifecycle manager.
"""

from .redis_adapter import RedisAdapter
from .enhanced_client import EnhancedRedisClient
from .connection_manager import RedisConnectionManager

__all__ = [
    "RedisAdapter",
    "EnhancedRedisClient",
    "RedisConnectionManager",
]
