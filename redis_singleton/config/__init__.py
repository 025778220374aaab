"""Connection option validation."""

from .schema import CONNECTION_SCHEMA, normalize_options

__all__ = [
    "CONNECTION_SCHEMA",
    "normalize_options",
]
