"""Encoding and decoding of session tokens to their compact JSON wire form."""

from __future__ import annotations

import json
from typing import Any, Optional

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..errors import DecodeMalformed, EmptyClassId, InvalidClassId
from ..utils.text import normalize_class_id
from .types import TokenPayload


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class TokenCodec:
    """Build tokens for display and parse scanned text back into tokens.

    Decoding only checks structure; whether a token is still fresh is decided
    by :class:`~attendease.validation.ValidationEngine`.
    """

    def __init__(self, config: Optional[ProtocolConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def encode(self, class_id: str, now_ms: int) -> TokenPayload:
        canonical = normalize_class_id(class_id or "")
        if not canonical.strip():
            raise EmptyClassId()
        if len(canonical) > self.config.max_class_id_length:
            raise InvalidClassId(f"Course code must be at most {self.config.max_class_id_length} characters")
        return TokenPayload(
            class_id=canonical,
            issued_at=int(now_ms),
            expires_at=int(now_ms) + self.config.expiry_horizon_ms,
        )

    @staticmethod
    def dumps(payload: TokenPayload) -> str:
        return json.dumps(payload.to_wire(), separators=(",", ":"), sort_keys=True)

    def decode(self, raw: str) -> TokenPayload:
        try:
            data = json.loads(raw)
        except Exception as exc:
            raise DecodeMalformed() from exc

        if not isinstance(data, dict):
            raise DecodeMalformed()

        class_id = data.get("classId")
        issued_at = data.get("issuedAt")
        expires_at = data.get("expiresAt")
        if not isinstance(class_id, str) or not class_id.strip():
            raise DecodeMalformed()
        if not _is_int(issued_at):
            raise DecodeMalformed()
        if expires_at is None:
            expires_at = issued_at + self.config.expiry_horizon_ms
        elif not _is_int(expires_at):
            raise DecodeMalformed()

        return TokenPayload(class_id=normalize_class_id(class_id), issued_at=issued_at, expires_at=expires_at)


_DEFAULT_CODEC = TokenCodec()


def encode(class_id: str, now_ms: int) -> TokenPayload:
    """Encode with the default protocol constants."""
    return _DEFAULT_CODEC.encode(class_id, now_ms)


def decode(raw: str) -> TokenPayload:
    """Decode with the default protocol constants."""
    return _DEFAULT_CODEC.decode(raw)
