"""Role classification from the shape of an institutional identifier."""

from __future__ import annotations

import re
from enum import Enum

from ..errors import ClassificationUnknown, IdentifierRequired
from ..utils.text import normalize_identifier

FACULTY_SUFFIX = "@iiitp.ac.in"
STUDENT_RE = re.compile(r"^[0-9]{9}@(cse|ece)\.iiitp\.ac\.in$")


class Role(str, Enum):
    """Account role derived from an identifier."""

    FACULTY = "FACULTY"
    STUDENT = "STUDENT"
    UNKNOWN = "UNKNOWN"


def classify(identifier: str) -> Role:
    """Map an identifier to a role; never raises."""
    value = normalize_identifier(identifier or "")
    if not value:
        return Role.UNKNOWN
    if value.endswith(FACULTY_SUFFIX):
        return Role.FACULTY
    if STUDENT_RE.match(value):
        return Role.STUDENT
    return Role.UNKNOWN


def validate_identifier(identifier: str) -> Role:
    """Classify ``identifier`` and raise when it is blank or unrecognised."""
    if not normalize_identifier(identifier or ""):
        raise IdentifierRequired()
    role = classify(identifier)
    if role is Role.UNKNOWN:
        raise ClassificationUnknown()
    return role
