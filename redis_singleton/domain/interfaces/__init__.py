"""Domain interfaces for the Redis singleton connector.

Infrastructure implementations fulfil these contracts, which lets tests
swap the redis-backed client for an in-memory fake.
"""

from .i_store_client import ClientEvent, IStoreClient
from .i_connection_manager import IConnectionManager

__all__ = [
    "ClientEvent",
    "IStoreClient",
    "IConnectionManager",
]
