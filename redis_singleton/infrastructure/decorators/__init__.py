"""Infrastructure layer decorators."""

from .error_handler import handle_store_errors
from .connection_decorator import require_open

__all__ = [
    "handle_store_errors",
    "require_open",
]
