"""Constants for the Redis singleton connector.

This file contains only the defaults and user-visible messages shared
across modules.
"""

from __future__ import annotations

# Connection URL schemes accepted by redis-py's from_url()
URL_SCHEMES = ("redis://", "rediss://", "unix://")

# Section of a YAML config file holding connection options
DEFAULT_CONFIG_SECTION = "redis"

# Port range for TCP connections
MIN_PORT = 1
MAX_PORT = 65535

# Messages (phase first, cause appended where one exists)
MSG_NOT_CONNECTED = "Redis client is not connected. Call connect() first."
MSG_STILL_CONNECTING = (
    "Redis client is currently connecting. Use `await connect()` or ensure "
    "the connection attempt completes before calling get_client()."
)
MSG_UNAVAILABLE = "Redis connection unavailable: {cause}"
MSG_CONNECT_FAILED = "Redis connection failed: {cause}"
MSG_CONNECTION_CLOSED = "Redis connection closed."
MSG_CLIENT_ERROR = "Redis client error: {cause}"
MSG_DISCONNECT_FAILED = "Error during Redis disconnection: {cause}"
MSG_CLIENT_CLOSED = "Cannot run {command}: Redis connection is closed"
