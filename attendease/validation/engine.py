"""Stateless freshness check for scanned tokens."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..errors import DecodeMalformed, RejectionReason
from ..token.codec import TokenCodec
from ..token.types import TokenPayload
from .types import Accepted, Rejected, Verdict

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Accept a token iff its age is within ``validity_window_ms`` (inclusive).

    The window is measured from ``issued_at``; the informational ``expires_at``
    carried by the token is ignored. There is no replay memory: the same token
    is accepted for every scan inside the window.
    """

    def __init__(self, config: Optional[ProtocolConfig] = None, *, codec: Optional[TokenCodec] = None) -> None:
        self.config = config or (codec.config if codec is not None else DEFAULT_CONFIG)
        self.codec = codec or TokenCodec(self.config)

    def validate(self, payload: Optional[TokenPayload], now_ms: int) -> Verdict:
        if payload is None:
            return Rejected(RejectionReason.MALFORMED)
        if now_ms - payload.issued_at > self.config.validity_window_ms:
            return Rejected(RejectionReason.EXPIRED)
        return Accepted(class_id=payload.class_id, at=now_ms)

    def check(self, raw: str, now_ms: int) -> Verdict:
        """Decode scanned text and validate it in one step."""
        try:
            payload: Optional[TokenPayload] = self.codec.decode(raw)
        except DecodeMalformed:
            payload = None
        verdict = self.validate(payload, now_ms)
        if isinstance(verdict, Rejected):
            logger.info("Rejected scanned token: %s", verdict.reason.value)
        else:
            logger.info("Accepted scanned token for %s", verdict.class_id)
        return verdict
