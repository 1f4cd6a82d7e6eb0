"""Scan flow driver wiring timers and the capture device to the state machine."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..errors import CaptureDeviceError
from ..timing.scheduler import Scheduler, TimerHandle
from ..utils.time import Clock, now_ms
from ..validation.engine import ValidationEngine
from .flow import (
    INITIAL_STATE,
    BeginIdentityCheck,
    CaptureFailed,
    Captured,
    IdentityConfirmed,
    Reset,
    ScanEvent,
    ScanState,
    StartCapture,
    StopCapture,
    transition,
)

logger = logging.getLogger(__name__)


class ScanSession:
    """Run one verifying party through identity check, capture and outcome.

    The identity check always succeeds after ``identity_check_delay_s``.
    Captured text is validated the moment it arrives; anything delivered
    outside an active capture is dropped.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        engine: Optional[ValidationEngine] = None,
        config: Optional[ProtocolConfig] = None,
        clock: Clock = now_ms,
        on_change: Optional[Callable[[ScanState], None]] = None,
    ) -> None:
        self.scheduler = scheduler
        self.config = config or (engine.config if engine is not None else DEFAULT_CONFIG)
        self.engine = engine or ValidationEngine(self.config)
        self.clock = clock
        self.on_change = on_change
        self._state = INITIAL_STATE
        self._identity_timer: Optional[TimerHandle] = None
        self._closed = False

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def begin_identity_check(self) -> ScanState:
        if self._dispatch(BeginIdentityCheck()):
            self._identity_timer = self.scheduler.call_later(self.config.identity_check_delay_s, self._identity_confirmed)
        return self._state

    def start_capture(self) -> ScanState:
        self._dispatch(StartCapture())
        return self._state

    def stop_capture(self) -> ScanState:
        self._dispatch(StopCapture())
        return self._state

    def deliver(self, raw: str) -> ScanState:
        """Push one captured value; dropped unless capture is active."""
        if not self._state.accepts_captures:
            logger.debug("Dropping captured value in %s", self._state.phase.value)
            return self._state
        self._dispatch(Captured(raw=raw, at=self.clock()))
        return self._state

    def capture_error(self, error: BaseException) -> ScanState:
        """Record a capture device failure; the flow stays where it is."""
        if not isinstance(error, CaptureDeviceError):
            error = CaptureDeviceError(str(error) or type(error).__name__)
        logger.warning("Capture device error: %s", error)
        self._dispatch(CaptureFailed(error))
        return self._state

    def reset(self) -> ScanState:
        self._cancel_identity_timer()
        self._dispatch(Reset())
        return self._state

    def close(self) -> None:
        """Cancel pending timers; later events are ignored."""
        self._cancel_identity_timer()
        self._closed = True

    def _identity_confirmed(self) -> None:
        self._identity_timer = None
        self._dispatch(IdentityConfirmed())

    def _cancel_identity_timer(self) -> None:
        if self._identity_timer is not None:
            self._identity_timer.cancel()
            self._identity_timer = None

    def _dispatch(self, event: ScanEvent) -> bool:
        """Apply ``event``; return True when the state changed."""
        if self._closed:
            return False
        before = self._state
        after = transition(before, event, self.engine)
        if after == before:
            return False
        logger.debug("Scan %s -> %s on %s", before.phase.value, after.phase.value, type(event).__name__)
        self._state = after
        if self.on_change is not None:
            self.on_change(after)
        return True
