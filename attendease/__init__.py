"""attendease package.

Short-lived, time-windowed proof-of-presence tokens for classroom attendance:
issuance with a blur/reveal display timer, and a scanner-side validation flow.
"""

from .config import ProtocolConfig
from .identity import AuthService, Role, SessionIdentity, classify
from .portal import FacultyConsole, open_faculty_console, open_scan_session
from .scan import ScanPhase, ScanSession, ScanState
from .timing import IssuanceTimer, RevealPhase, RevealState, VirtualScheduler
from .token import TokenCodec, TokenPayload
from .validation import Accepted, Rejected, ValidationEngine

__all__ = [
    "ProtocolConfig",
    "AuthService",
    "Role",
    "SessionIdentity",
    "classify",
    "FacultyConsole",
    "open_faculty_console",
    "open_scan_session",
    "ScanPhase",
    "ScanSession",
    "ScanState",
    "IssuanceTimer",
    "RevealPhase",
    "RevealState",
    "VirtualScheduler",
    "TokenCodec",
    "TokenPayload",
    "Accepted",
    "Rejected",
    "ValidationEngine",
]
