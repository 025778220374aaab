"""Value encoding/decoding strategies using Strategy pattern."""

import json
from abc import ABC, abstractmethod
from typing import Any, Union

from ..exceptions import StoredValueDecodeError


class ValueCodecStrategy(ABC):
    """Abstract strategy for turning structured values into stored text."""

    @abstractmethod
    def encode(self, value: Any) -> str:
        """Encode a structured value to text.

        Args:
            value: Value to serialize

        Returns:
            Text to store

        Raises:
            TypeError: If the value cannot be represented
            ValueError: If the value cannot be represented
        """

    @abstractmethod
    def decode(self, raw: Union[str, bytes]) -> Any:
        """Decode stored text back into a structured value.

        Args:
            raw: Text (or UTF-8 bytes) read from the store

        Returns:
            Decoded value

        Raises:
            StoredValueDecodeError: If the stored text is malformed
        """


class JsonCodec(ValueCodecStrategy):
    """Codec for JSON text.

    Objects, arrays, strings, numbers, booleans and null all decode to
    distinct values; a stored ``null`` decodes to None.

    Example:
        >>> codec = JsonCodec()
        >>> codec.encode({"name": "Alice", "age": 30})
        '{"name": "Alice", "age": 30}'
        >>> codec.decode(b'[1, 2, 3]')
        [1, 2, 3]
    """

    def encode(self, value: Any) -> str:
        """Encode to JSON; NaN and infinities are rejected."""
        return json.dumps(value, allow_nan=False)

    def decode(self, raw: Union[str, bytes]) -> Any:
        """Decode JSON text or UTF-8 bytes."""
        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as err:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep
            # nesting exhausts the decoder stack
            raise StoredValueDecodeError(
                f"Invalid JSON data: {err}", cause=err
            ) from err
