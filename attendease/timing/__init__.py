"""Countdowns, schedulers and the issuer-side reveal timer."""

from .countdown import Countdown
from .issuance import IssuanceTimer, RevealPhase, RevealState
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle, VirtualScheduler

__all__ = [
    "Countdown",
    "IssuanceTimer",
    "RevealPhase",
    "RevealState",
    "Scheduler",
    "TimerHandle",
    "AsyncioScheduler",
    "VirtualScheduler",
]
