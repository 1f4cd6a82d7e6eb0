"""Tick-driven countdown."""

from __future__ import annotations

from typing import Callable, Optional


class Countdown:
    """Integer countdown advanced one unit per :meth:`tick`.

    ``epoch`` changes on every start and cancel so callers can recognise ticks
    that were scheduled for a countdown that has since been superseded.
    """

    def __init__(self, on_elapsed: Optional[Callable[[], None]] = None) -> None:
        self.on_elapsed = on_elapsed
        self.remaining = 0
        self.running = False
        self.epoch = 0

    def start(self, duration: int) -> None:
        if duration <= 0:
            raise ValueError("duration must be positive")
        self.epoch += 1
        self.remaining = duration
        self.running = True

    def cancel(self) -> None:
        self.epoch += 1
        self.remaining = 0
        self.running = False

    def tick(self) -> bool:
        """Consume one unit; return False when nothing was running."""
        if not self.running:
            return False
        self.remaining -= 1
        if self.remaining <= 0:
            self.remaining = 0
            self.running = False
            if self.on_elapsed is not None:
                self.on_elapsed()
        return True
