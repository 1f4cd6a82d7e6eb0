"""Cancellable timer scheduling.

Components never sleep on wall-clock time themselves; they ask a
:class:`Scheduler` for one-shot or periodic callbacks. Production code uses
:class:`AsyncioScheduler`, tests drive :class:`VirtualScheduler` by hand.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

TimerCallback = Callable[[], None]


class TimerHandle:
    """Handle returned by a scheduler; ``cancel()`` is idempotent."""

    def __init__(self) -> None:
        self._cancelled = False
        self._on_cancel: Optional[Callable[[], None]] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()
            self._on_cancel = None


class Scheduler(ABC):
    """Abstract source of delayed and periodic callbacks."""

    @abstractmethod
    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""

    @abstractmethod
    def call_every(self, interval: float, callback: TimerCallback) -> TimerHandle:
        """Run ``callback`` every ``interval`` seconds until cancelled."""


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle:
        handle = TimerHandle()

        def fire() -> None:
            if not handle.cancelled:
                handle._cancelled = True
                callback()

        timer = self.loop.call_later(delay, fire)
        handle._on_cancel = timer.cancel
        return handle

    def call_every(self, interval: float, callback: TimerCallback) -> TimerHandle:
        handle = TimerHandle()
        loop = self.loop

        def fire() -> None:
            if handle.cancelled:
                return
            callback()
            if not handle.cancelled:
                schedule()

        def schedule() -> None:
            timer = loop.call_later(interval, fire)
            handle._on_cancel = timer.cancel

        schedule()
        return handle


class VirtualScheduler(Scheduler):
    """Deterministic scheduler whose clock only moves on :meth:`advance`."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, TimerHandle, TimerCallback, Optional[float]]] = []

    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle:
        handle = TimerHandle()
        self._push(self.now + delay, handle, callback, None)
        return handle

    def call_every(self, interval: float, callback: TimerCallback) -> TimerHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = TimerHandle()
        self._push(self.now + interval, handle, callback, interval)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._queue if not entry[2].cancelled)

    def advance(self, seconds: float) -> None:
        """Move virtual time forward, firing every callback that falls due."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            when, _, handle, callback, interval = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = when
            if interval is None:
                handle._cancelled = True
            callback()
            if interval is not None and not handle.cancelled:
                self._push(when + interval, handle, callback, interval)
        self.now = target

    def _push(self, when: float, handle: TimerHandle, callback: TimerCallback, interval: Optional[float]) -> None:
        heapq.heappush(self._queue, (when, next(self._seq), handle, callback, interval))
