"""Value codec strategies."""

from .value_codec_strategy import JsonCodec, ValueCodecStrategy

__all__ = [
    "JsonCodec",
    "ValueCodecStrategy",
]
