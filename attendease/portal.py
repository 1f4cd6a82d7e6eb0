"""High-level entry points for the faculty and student sides."""

from __future__ import annotations

from typing import Callable, Optional

from .config import DEFAULT_CONFIG, ProtocolConfig
from .identity.roles import Role
from .identity.session import SessionIdentity, ensure_can_issue
from .scan.flow import ScanState
from .scan.session import ScanSession
from .timing.issuance import IssuanceTimer, RevealState
from .timing.scheduler import Scheduler
from .token.codec import TokenCodec
from .token.types import TokenPayload
from .utils.time import Clock, now_ms
from .validation.engine import ValidationEngine


class FacultyConsole:
    """Issuing surface for one signed-in faculty member."""

    def __init__(self, identity: SessionIdentity, timer: IssuanceTimer) -> None:
        ensure_can_issue(identity)
        self.identity = identity
        self.timer = timer

    def generate(self, class_id: str) -> TokenPayload:
        return self.timer.generate(class_id)

    def regenerate(self, class_id: Optional[str] = None) -> TokenPayload:
        return self.timer.regenerate(class_id)

    def reveal(self) -> bool:
        return self.timer.reveal()

    def close(self) -> None:
        self.timer.close()


def open_faculty_console(
    identity: SessionIdentity,
    *,
    scheduler: Optional[Scheduler] = None,
    config: Optional[ProtocolConfig] = None,
    clock: Clock = now_ms,
    on_change: Optional[Callable[[RevealState], None]] = None,
) -> FacultyConsole:
    """Create a console; raises unless ``identity`` is a faculty account."""
    cfg = config or DEFAULT_CONFIG
    timer = IssuanceTimer(TokenCodec(cfg), config=cfg, clock=clock, scheduler=scheduler, on_change=on_change)
    return FacultyConsole(identity, timer)


def open_scan_session(
    scheduler: Scheduler,
    *,
    config: Optional[ProtocolConfig] = None,
    clock: Clock = now_ms,
    on_change: Optional[Callable[[ScanState], None]] = None,
) -> ScanSession:
    cfg = config or DEFAULT_CONFIG
    engine = ValidationEngine(cfg, codec=TokenCodec(cfg))
    return ScanSession(scheduler, engine=engine, config=cfg, clock=clock, on_change=on_change)


def home_for(identity: Optional[SessionIdentity]) -> str:
    """Name the screen a session lands on: ``faculty``, ``student`` or ``auth``."""
    if identity is None or identity.role is Role.UNKNOWN:
        return "auth"
    return "faculty" if identity.role is Role.FACULTY else "student"
