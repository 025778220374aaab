"""Custom exceptions for the Redis singleton connector.

Every error the connector raises or records derives from
RedisSingletonError and carries an ErrorKind tag. State transitions
inspect the tag, never the message text.
"""

from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    """Origin of a recorded or raised error."""

    NOT_CONNECTED = auto()
    STILL_CONNECTING = auto()
    UNAVAILABLE = auto()
    CONNECT = auto()
    CLIENT_ERROR = auto()
    CONNECTION_CLOSED = auto()
    DISCONNECTION = auto()
    CLIENT_CLOSED = auto()
    INVALID_OPTIONS = auto()
    DECODE = auto()


class RedisSingletonError(Exception):
    """Base class for connector errors.

    Attributes:
        kind: ErrorKind tag describing where the error originated
        cause: Underlying exception, if any

    Example:
        >>> err = ConnectFailureError("Redis connection failed: refused")
        >>> err.kind
        <ErrorKind.CONNECT: 4>
    """

    kind = ErrorKind.CLIENT_ERROR

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        kind: Optional[ErrorKind] = None,
    ):
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
        if kind is not None:
            self.kind = kind


class NotConnectedError(RedisSingletonError):
    """get_client() called before any connect() and with none in flight."""

    kind = ErrorKind.NOT_CONNECTED


class StillConnectingError(RedisSingletonError):
    """get_client() called while a connection attempt is outstanding."""

    kind = ErrorKind.STILL_CONNECTING


class ConnectionUnavailableError(RedisSingletonError):
    """get_client() called after a failed attempt or a lost connection.

    The recorded error is available as ``cause``.
    """

    kind = ErrorKind.UNAVAILABLE


class ConnectFailureError(RedisSingletonError):
    """The connection handshake failed."""

    kind = ErrorKind.CONNECT


class ConnectionLostError(RedisSingletonError):
    """The underlying client reported a low-level error."""

    kind = ErrorKind.CLIENT_ERROR


class ConnectionClosedError(RedisSingletonError):
    """An established connection ended without disconnect() being called."""

    kind = ErrorKind.CONNECTION_CLOSED


class DisconnectFailureError(RedisSingletonError):
    """The graceful shutdown command failed."""

    kind = ErrorKind.DISCONNECTION


class ClientClosedError(RedisSingletonError):
    """A command was issued on a client whose connection is closed."""

    kind = ErrorKind.CLIENT_CLOSED


class InvalidOptionsError(RedisSingletonError, ValueError):
    """Connection options failed validation."""

    kind = ErrorKind.INVALID_OPTIONS


class StoredValueDecodeError(RedisSingletonError, ValueError):
    """A stored value is not valid JSON.

    get_json() converts this into a ``None`` result after logging it; it
    reflects corrupt historical data rather than a failed request.
    """

    kind = ErrorKind.DECODE
