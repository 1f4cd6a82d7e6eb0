"""UTC time helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], int]


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def now_ms() -> int:
    """Return the current UTC time as integer epoch milliseconds."""
    return int(utc_now().timestamp() * 1000)


def from_ms(value: int) -> datetime:
    """Convert epoch milliseconds into a timezone-aware UTC datetime."""
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
