"""Scan verdict datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..errors import RejectionReason


@dataclass(frozen=True)
class Accepted:
    class_id: str
    at: int

    accepted = True


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason

    accepted = False

    @property
    def message(self) -> str:
        return self.reason.user_message


Verdict = Union[Accepted, Rejected]
