"""Issuer-side display countdown with blur and short re-reveal windows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..token.codec import TokenCodec
from ..token.types import TokenPayload
from ..utils.time import Clock, now_ms
from .countdown import Countdown
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class RevealPhase(str, Enum):
    IDLE = "IDLE"
    VISIBLE = "VISIBLE"
    BLURRED = "BLURRED"
    REVEALED = "REVEALED"


@dataclass(frozen=True)
class RevealState:
    """Visibility of the current token; ``remaining`` is the active countdown."""

    phase: RevealPhase
    remaining: int = 0


IDLE_STATE = RevealState(RevealPhase.IDLE)


class IssuanceTimer:
    """Own the issuer's single live token and its visibility countdowns.

    ``generate`` shows a fresh token for ``display_ticks`` ticks, after which it
    is blurred. While blurred, ``reveal`` shows it again for ``reveal_ticks``
    ticks, as many times as requested. With a scheduler attached the timer ticks
    itself every ``tick_interval_s`` seconds; without one, callers drive
    :meth:`tick` directly.
    """

    def __init__(
        self,
        codec: Optional[TokenCodec] = None,
        *,
        config: Optional[ProtocolConfig] = None,
        clock: Clock = now_ms,
        scheduler: Optional[Scheduler] = None,
        on_change: Optional[Callable[[RevealState], None]] = None,
    ) -> None:
        self.config = config or (codec.config if codec is not None else DEFAULT_CONFIG)
        self.codec = codec or TokenCodec(self.config)
        self.clock = clock
        self.scheduler = scheduler
        self.on_change = on_change
        self._countdown = Countdown(on_elapsed=self._blur)
        self._ticker: Optional[TimerHandle] = None
        self._state = IDLE_STATE
        self._payload: Optional[TokenPayload] = None

    @property
    def state(self) -> RevealState:
        return self._state

    @property
    def phase(self) -> RevealPhase:
        return self._state.phase

    @property
    def remaining(self) -> int:
        return self._state.remaining

    @property
    def displayed_remaining(self) -> int:
        """Seconds to show: the reveal countdown while revealed, else the main one."""
        return self._state.remaining

    @property
    def payload(self) -> Optional[TokenPayload]:
        return self._payload

    @property
    def wire(self) -> Optional[str]:
        return self.codec.dumps(self._payload) if self._payload is not None else None

    @property
    def is_obscured(self) -> bool:
        return self._state.phase is RevealPhase.BLURRED

    def generate(self, class_id: str) -> TokenPayload:
        """Issue a brand-new token and show it for the full display window."""
        payload = self.codec.encode(class_id, self.clock())
        self._stop_ticking()
        self._countdown.cancel()
        self._payload = payload
        self._countdown.start(self.config.display_ticks)
        self._set_state(RevealState(RevealPhase.VISIBLE, self.config.display_ticks))
        self._start_ticking()
        logger.info("Issued token for %s at %d", payload.class_id, payload.issued_at)
        return payload

    def regenerate(self, class_id: Optional[str] = None) -> TokenPayload:
        """Replace the current token; reuses the current class id when none is given."""
        if class_id is None:
            if self._payload is None:
                raise RuntimeError("No token has been generated yet.")
            class_id = self._payload.class_id
        return self.generate(class_id)

    def tick(self) -> None:
        """Consume one unit of whichever countdown is active."""
        if not self._countdown.tick():
            return
        if self._countdown.running:
            self._set_state(RevealState(self._state.phase, self._countdown.remaining))

    def reveal(self) -> bool:
        """Show a blurred token for the short reveal window; False if not blurred."""
        if self._state.phase is not RevealPhase.BLURRED:
            logger.debug("Ignoring reveal while %s", self._state.phase.value)
            return False
        self._countdown.start(self.config.reveal_ticks)
        self._set_state(RevealState(RevealPhase.REVEALED, self.config.reveal_ticks))
        self._start_ticking()
        return True

    def close(self) -> None:
        """Cancel every pending tick; the current state is kept."""
        self._stop_ticking()
        self._countdown.cancel()

    def _blur(self) -> None:
        self._stop_ticking()
        self._set_state(RevealState(RevealPhase.BLURRED, 0))

    def _set_state(self, state: RevealState) -> None:
        if state != self._state:
            logger.debug("Reveal state %s -> %s", self._state, state)
        self._state = state
        if self.on_change is not None:
            self.on_change(state)

    def _start_ticking(self) -> None:
        self._stop_ticking()
        if self.scheduler is None:
            return
        epoch = self._countdown.epoch

        def scheduled_tick() -> None:
            # A tick scheduled for a superseded countdown must never land.
            if epoch == self._countdown.epoch:
                self.tick()

        self._ticker = self.scheduler.call_every(self.config.tick_interval_s, scheduled_tick)

    def _stop_ticking(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
