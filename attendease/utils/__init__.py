"""Utility helpers for text normalization and time operations."""

from .text import normalize_class_id, normalize_identifier
from .time import Clock, from_ms, now_ms, utc_now

__all__ = ["Clock", "from_ms", "now_ms", "utc_now", "normalize_class_id", "normalize_identifier"]
