"""Session token encoding and decoding."""

from .codec import TokenCodec, decode, encode
from .types import TokenPayload

__all__ = ["TokenCodec", "TokenPayload", "encode", "decode"]
