"""Connection guard decorators."""

import logging
from functools import wraps
from typing import Callable

from ...const import MSG_CLIENT_CLOSED
from ...domain.exceptions import ClientClosedError

_LOGGER = logging.getLogger(__name__)


def require_open(command_name: str = None):
    """Decorator to fail fast when the connection is closed.

    The decorated method's owner must expose an ``is_open`` property.

    Args:
        command_name: Name used in the error message (defaults to the
            method name)

    Example:
        @require_open("GET JSON")
        async def get_json(self, key: str) -> Any:
            # Connection is known to be open - just do work
            pass
    """

    def decorator(func: Callable):
        name = command_name or func.__name__

        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            if not self.is_open:
                _LOGGER.debug("Rejected %s on closed connection", name)
                raise ClientClosedError(MSG_CLIENT_CLOSED.format(command=name))
            return await func(self, *args, **kwargs)

        return wrapper

    return decorator
