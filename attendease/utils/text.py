"""Text normalization helpers."""

from __future__ import annotations


def normalize_identifier(value: str) -> str:
    """Trim and lower-case an account identifier for matching."""
    return value.strip().lower()


def normalize_class_id(value: str) -> str:
    """Return the canonical upper-case form of a class identifier."""
    return value.upper()
