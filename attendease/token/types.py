"""Session token datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class TokenPayload:
    """Proof-of-presence token bound to a class and an issuance time (epoch ms)."""

    class_id: str
    issued_at: int
    expires_at: int

    def to_wire(self) -> Dict[str, Any]:
        return {"classId": self.class_id, "issuedAt": self.issued_at, "expiresAt": self.expires_at}
