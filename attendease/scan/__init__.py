"""Verifying-party scan flow."""

from .flow import (
    INITIAL_STATE,
    BeginIdentityCheck,
    CaptureFailed,
    Captured,
    IdentityConfirmed,
    Reset,
    ScanEvent,
    ScanPhase,
    ScanState,
    StartCapture,
    StopCapture,
    transition,
)
from .session import ScanSession

__all__ = [
    "INITIAL_STATE",
    "BeginIdentityCheck",
    "CaptureFailed",
    "Captured",
    "IdentityConfirmed",
    "Reset",
    "ScanEvent",
    "ScanPhase",
    "ScanState",
    "StartCapture",
    "StopCapture",
    "transition",
    "ScanSession",
]
