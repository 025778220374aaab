"""Logging decorator for keyed store writes."""

import asyncio
import logging
from functools import wraps
from typing import Any, Callable

from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from ...domain.exceptions import RedisSingletonError


def handle_store_errors(operation_name: str):
    """Log a failed keyed write by phase, then re-raise it unchanged.

    The decorated coroutine takes the key as its first argument after
    ``self``. Encoding failures (TypeError/ValueError from the codec) are
    reported separately from failures of the write itself.

    Args:
        operation_name: Human-readable operation name for logging

    Example:
        @handle_store_errors("Set JSON")
        async def set_json(self, key: str, value: Any) -> Any:
            return await self._client.set(key, self._codec.encode(value))
    """

    def decorator(func: Callable):
        log = logging.getLogger(func.__module__)

        @wraps(func)
        async def wrapper(self, key: str, *args: Any, **kwargs: Any) -> Any:
            try:
                return await func(self, key, *args, **kwargs)
            except RedisSingletonError as err:
                log.error('%s for key "%s" failed: %s', operation_name, key, err)
                raise
            except (asyncio.TimeoutError, RedisTimeoutError) as err:
                log.warning('%s for key "%s" timed out: %s', operation_name, key, err)
                raise
            except RedisError as err:
                log.error(
                    '%s for key "%s": write rejected by Redis: %s',
                    operation_name,
                    key,
                    err,
                )
                raise
            except (TypeError, ValueError) as err:
                log.error(
                    '%s for key "%s": value could not be encoded: %s',
                    operation_name,
                    key,
                    err,
                )
                raise

        return wrapper

    return decorator
