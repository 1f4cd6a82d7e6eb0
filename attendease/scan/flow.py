"""Pure state machine for the verifying party's scan flow.

``transition(state, event, engine)`` returns the next state and never touches
timers, devices or rendering; :class:`~attendease.scan.session.ScanSession`
feeds it events from those collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from ..errors import RejectionReason
from ..validation.engine import ValidationEngine
from ..validation.types import Accepted, Rejected


class ScanPhase(str, Enum):
    AWAITING_IDENTITY_CHECK = "AWAITING_IDENTITY_CHECK"
    IDENTITY_CHECKING = "IDENTITY_CHECKING"
    CAPTURING = "CAPTURING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


TERMINAL_PHASES = frozenset({ScanPhase.ACCEPTED, ScanPhase.REJECTED})


@dataclass(frozen=True)
class ScanState:
    phase: ScanPhase = ScanPhase.AWAITING_IDENTITY_CHECK
    capture_active: bool = False
    outcome: Optional[Accepted] = None
    reason: Optional[RejectionReason] = None

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def accepts_captures(self) -> bool:
        return self.phase is ScanPhase.CAPTURING and self.capture_active


INITIAL_STATE = ScanState()


@dataclass(frozen=True)
class BeginIdentityCheck:
    pass


@dataclass(frozen=True)
class IdentityConfirmed:
    pass


@dataclass(frozen=True)
class StartCapture:
    pass


@dataclass(frozen=True)
class StopCapture:
    pass


@dataclass(frozen=True)
class Captured:
    raw: str
    at: int


@dataclass(frozen=True)
class CaptureFailed:
    error: BaseException


@dataclass(frozen=True)
class Reset:
    pass


ScanEvent = Union[BeginIdentityCheck, IdentityConfirmed, StartCapture, StopCapture, Captured, CaptureFailed, Reset]


def transition(state: ScanState, event: ScanEvent, engine: ValidationEngine) -> ScanState:
    """Return the state after ``event``; events that do not apply leave it unchanged."""
    if isinstance(event, Reset):
        return INITIAL_STATE

    if isinstance(event, BeginIdentityCheck):
        if state.phase is ScanPhase.AWAITING_IDENTITY_CHECK:
            return ScanState(phase=ScanPhase.IDENTITY_CHECKING)
        return state

    if isinstance(event, IdentityConfirmed):
        if state.phase is ScanPhase.IDENTITY_CHECKING:
            return ScanState(phase=ScanPhase.CAPTURING, capture_active=True)
        return state

    if isinstance(event, (StartCapture, StopCapture)):
        if state.phase is ScanPhase.CAPTURING:
            return replace(state, capture_active=isinstance(event, StartCapture))
        return state

    if isinstance(event, Captured):
        if not state.accepts_captures:
            return state
        verdict = engine.check(event.raw, event.at)
        if isinstance(verdict, Rejected):
            return ScanState(phase=ScanPhase.REJECTED, reason=verdict.reason)
        return ScanState(phase=ScanPhase.ACCEPTED, outcome=verdict)

    # CaptureFailed is advisory only.
    return state
