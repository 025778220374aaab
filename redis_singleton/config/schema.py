"""Connection option schema and normalization."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import voluptuous as vol

from ..const import MAX_PORT, MIN_PORT, URL_SCHEMES
from ..domain.exceptions import InvalidOptionsError

_LOGGER = logging.getLogger(__name__)

CONF_URL = "url"
CONF_HOST = "host"
CONF_PORT = "port"
CONF_DB = "db"
CONF_USERNAME = "username"
CONF_PASSWORD = "password"
CONF_SOCKET_TIMEOUT = "socket_timeout"
CONF_SOCKET_CONNECT_TIMEOUT = "socket_connect_timeout"
CONF_DECODE_RESPONSES = "decode_responses"
CONF_CLIENT_NAME = "client_name"
CONF_SSL = "ssl"


def _connection_url(value: Any) -> str:
    """Validate a Redis connection URL."""
    url = vol.Coerce(str)(value).strip()
    if not url.startswith(URL_SCHEMES):
        raise vol.Invalid(
            f"URL must start with one of {', '.join(URL_SCHEMES)}: {url!r}"
        )
    return url


_TIMEOUT = vol.Any(None, vol.All(vol.Coerce(float), vol.Range(min=0)))
_OPTIONAL_STR = vol.Any(None, str)

# Keys not listed here pass through to redis-py unchanged
CONNECTION_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_URL): _connection_url,
        vol.Optional(CONF_HOST): str,
        vol.Optional(CONF_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=MIN_PORT, max=MAX_PORT)
        ),
        vol.Optional(CONF_DB): vol.All(vol.Coerce(int), vol.Range(min=0)),
        vol.Optional(CONF_USERNAME): _OPTIONAL_STR,
        vol.Optional(CONF_PASSWORD): _OPTIONAL_STR,
        vol.Optional(CONF_SOCKET_TIMEOUT): _TIMEOUT,
        vol.Optional(CONF_SOCKET_CONNECT_TIMEOUT): _TIMEOUT,
        vol.Optional(CONF_DECODE_RESPONSES): vol.Boolean(),
        vol.Optional(CONF_CLIENT_NAME): _OPTIONAL_STR,
        vol.Optional(CONF_SSL): vol.Boolean(),
    },
    extra=vol.ALLOW_EXTRA,
)


def normalize_options(options: Mapping[str, Any] | str | None) -> dict[str, Any]:
    """Turn connect() options into validated keyword arguments for the client.

    A bare string is treated as a connection URL. None means "client
    defaults" and yields an empty dict.

    Args:
        options: Mapping of connection parameters, a URL string, or None

    Returns:
        New dict of validated options

    Raises:
        InvalidOptionsError: If the options are not a mapping/string or fail
            validation

    Example:
        >>> normalize_options("redis://localhost:6379/0")
        {'url': 'redis://localhost:6379/0'}
        >>> normalize_options({"host": "cache", "port": "6380"})
        {'host': 'cache', 'port': 6380}
    """
    if options is None:
        return {}

    if isinstance(options, str):
        options = {CONF_URL: options}
    elif not isinstance(options, Mapping):
        raise InvalidOptionsError(
            "Connection options must be a mapping or a URL string, "
            f"got {type(options).__name__}"
        )

    try:
        validated = CONNECTION_SCHEMA(dict(options))
    except vol.Invalid as err:
        raise InvalidOptionsError(
            f"Invalid Redis connection options: {err}", cause=err
        ) from err

    _LOGGER.debug("Normalized connection options: %s", _redact(validated))
    return validated


def _redact(options: dict[str, Any]) -> dict[str, Any]:
    """Copy of options safe to log."""
    redacted = dict(options)
    if redacted.get(CONF_PASSWORD):
        redacted[CONF_PASSWORD] = "***"
    if CONF_URL in redacted and "@" in redacted[CONF_URL]:
        scheme, _, rest = redacted[CONF_URL].partition("://")
        redacted[CONF_URL] = f"{scheme}://***@{rest.rsplit('@', 1)[1]}"
    return redacted
