"""Render-agnostic view models projected from timer and scan state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..scan.flow import ScanPhase, ScanState
from ..timing.issuance import RevealPhase, RevealState
from ..utils.time import from_ms


@dataclass(frozen=True)
class IssuerView:
    """What the issuer screen shows for the current token."""

    show_code: bool
    blurred: bool
    seconds_left: int
    progress: float
    can_reveal: bool
    urgent: bool
    hint: Optional[str] = None


@dataclass(frozen=True)
class ScanView:
    """What the scanner screen shows for the current flow state."""

    title: str
    message: str
    capture_active: bool = False
    class_id: Optional[str] = None
    marked_at: Optional[str] = None


def issuer_view(state: RevealState, config: Optional[ProtocolConfig] = None) -> IssuerView:
    cfg = config or DEFAULT_CONFIG
    if state.phase is RevealPhase.IDLE:
        return IssuerView(show_code=False, blurred=False, seconds_left=0, progress=0.0, can_reveal=False, urgent=False)

    total = cfg.reveal_ticks if state.phase is RevealPhase.REVEALED else cfg.display_ticks
    blurred = state.phase is RevealPhase.BLURRED
    return IssuerView(
        show_code=True,
        blurred=blurred,
        seconds_left=state.remaining,
        progress=state.remaining / total if total else 0.0,
        can_reveal=blurred,
        urgent=state.remaining <= cfg.reveal_ticks,
        hint="QR code is blurred for security. Click reveal to show temporarily." if blurred else None,
    )


def scan_view(state: ScanState) -> ScanView:
    if state.phase is ScanPhase.AWAITING_IDENTITY_CHECK:
        return ScanView("Identity Verification", "Tap the fingerprint icon to verify your identity")
    if state.phase is ScanPhase.IDENTITY_CHECKING:
        return ScanView("Verifying...", "Scanning fingerprint...")
    if state.phase is ScanPhase.CAPTURING:
        return ScanView(
            "Scan QR Code",
            "Point your camera at the QR code displayed by faculty",
            capture_active=state.capture_active,
        )
    if state.phase is ScanPhase.ACCEPTED and state.outcome is not None:
        return ScanView(
            "Attendance Marked!",
            f"Successfully marked for {state.outcome.class_id}",
            class_id=state.outcome.class_id,
            marked_at=from_ms(state.outcome.at).isoformat(),
        )
    reason = state.reason.user_message if state.reason is not None else ""
    return ScanView("Scan Failed", reason)
