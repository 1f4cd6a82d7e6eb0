"""Error taxonomy for identity, issuance and scanning."""

from __future__ import annotations

from enum import Enum

ACCEPTED_IDENTIFIER_SHAPES = "faculty@iiitp.ac.in or 123456789@cse.iiitp.ac.in"


class AttendanceError(Exception):
    """Base class for every recoverable attendease error."""

    message = "Attendance error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class IdentifierRequired(AttendanceError):
    message = "Email is required"


class ClassificationUnknown(AttendanceError):
    message = f"Invalid email format. Use {ACCEPTED_IDENTIFIER_SHAPES}"


class CredentialTooShort(AttendanceError):
    def __init__(self, minimum: int) -> None:
        super().__init__(f"Password must be at least {minimum} characters")
        self.minimum = minimum


class RoleNotPermitted(AttendanceError):
    message = "Only faculty accounts can issue attendance sessions"


class InvalidClassId(AttendanceError):
    message = "Invalid course code"


class EmptyClassId(InvalidClassId):
    message = "Please enter a course code"


class DecodeMalformed(AttendanceError):
    message = "Invalid QR code format"


class CaptureDeviceError(AttendanceError):
    """Failure reported by the capture device; never changes scan state."""

    message = "Capture device error"


class RejectionReason(str, Enum):
    """Why a scanned token was rejected."""

    MALFORMED = "MALFORMED"
    EXPIRED = "EXPIRED"

    @property
    def user_message(self) -> str:
        return _REJECTION_MESSAGES[self]


_REJECTION_MESSAGES = {
    RejectionReason.MALFORMED: DecodeMalformed.message,
    RejectionReason.EXPIRED: "This QR code has expired",
}
