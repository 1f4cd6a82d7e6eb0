"""Protocol constants and environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Optional

ENV_PREFIX = "ATTENDEASE_"


@dataclass(frozen=True)
class ProtocolConfig:
    """Timing and validation constants shared by issuer and scanner.

    ``display_ticks`` / ``reveal_ticks`` drive the issuer-side countdown and
    are counted in ticks of ``tick_interval_s`` seconds. ``validity_window_ms``
    is the scanner-side acceptance window and is deliberately independent of
    the display countdown.
    """

    expiry_horizon_ms: int = 15_000
    validity_window_ms: int = 60_000
    display_ticks: int = 15
    reveal_ticks: int = 5
    tick_interval_s: float = 1.0
    identity_check_delay_s: float = 1.5
    auth_delay_s: float = 0.5
    min_credential_length: int = 6
    max_class_id_length: int = 10

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "ProtocolConfig":
        """Build a config, overriding defaults with ``ATTENDEASE_*`` variables.

        ``ATTENDEASE_VALIDITY_WINDOW_MS=90000`` overrides ``validity_window_ms``
        and so on for every field.
        """
        env = os.environ if environ is None else environ
        overrides: dict = {}
        for f in fields(cls):
            raw = env.get(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is None or raw == "":
                continue
            caster = float if f.type in (float, "float") else int
            try:
                overrides[f.name] = caster(raw)
            except ValueError as exc:
                raise ValueError(f"Invalid value for {ENV_PREFIX}{f.name.upper()}: {raw!r}") from exc
        return cls(**overrides)


DEFAULT_CONFIG = ProtocolConfig()
