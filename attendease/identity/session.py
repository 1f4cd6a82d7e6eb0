"""Authenticated session identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..errors import ClassificationUnknown, RoleNotPermitted
from .roles import Role, classify


@dataclass(frozen=True)
class SessionIdentity:
    identifier: str
    role: Role

    @classmethod
    def from_identifier(cls, identifier: str) -> "SessionIdentity":
        return cls(identifier=identifier, role=classify(identifier))

    def to_dict(self) -> Dict[str, Any]:
        return {"identifier": self.identifier, "role": self.role.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionIdentity":
        """Rebuild a stored identity; the role is re-derived from the identifier."""
        return cls.from_identifier(str(data["identifier"]))


def ensure_can_issue(identity: SessionIdentity) -> None:
    """Block issuance for anyone who is not classified as faculty."""
    if identity.role is Role.UNKNOWN:
        raise ClassificationUnknown()
    if identity.role is not Role.FACULTY:
        raise RoleNotPermitted()
