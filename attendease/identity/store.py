"""Session persistence adapters.

The core never depends on persistence for correctness; a store only mirrors the
signed-in identity so a restarted client can pick the session back up.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import asyncpg

from .session import SessionIdentity

SESSION_KEY = "attendease_user"

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Abstract key-value persistence for one signed-in identity."""

    @abstractmethod
    async def load(self) -> Optional[SessionIdentity]:
        """Return the persisted identity, if any."""

    @abstractmethod
    async def save(self, identity: SessionIdentity) -> None:
        """Persist ``identity``, replacing any previous one."""

    @abstractmethod
    async def clear(self) -> None:
        """Forget the persisted identity."""

    async def close(self) -> None:
        """Release backend resources if needed."""


class InMemorySessionStore(SessionStore):
    """Process-local store used by tests and the demo."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    async def load(self) -> Optional[SessionIdentity]:
        raw = self.data.get(SESSION_KEY)
        return SessionIdentity.from_dict(json.loads(raw)) if raw else None

    async def save(self, identity: SessionIdentity) -> None:
        self.data[SESSION_KEY] = json.dumps(identity.to_dict())

    async def clear(self) -> None:
        self.data.pop(SESSION_KEY, None)


class FileSessionStore(SessionStore):
    """JSON file store, the desktop counterpart of browser local storage."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def load(self) -> Optional[SessionIdentity]:
        if not self.path.exists():
            return None
        try:
            record = json.loads(self.path.read_text(encoding="utf-8")).get(SESSION_KEY)
            return SessionIdentity.from_dict(record) if record else None
        except Exception:
            logger.warning("Ignoring unreadable session file %s", self.path)
            return None

    async def save(self, identity: SessionIdentity) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({SESSION_KEY: identity.to_dict()}), encoding="utf-8")

    async def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class PostgresSessionStore(SessionStore):
    """Postgres-backed store using asyncpg, keyed by device."""

    def __init__(self, dsn: str, *, device_id: str = "default") -> None:
        self.dsn = dsn
        self.device_id = device_id
        self.pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self.pool is None:
            self.pool = await asyncpg.create_pool(dsn=self.dsn, min_size=1, max_size=2)

    async def close(self) -> None:
        if self.pool is not None:
            await self.pool.close()
            self.pool = None

    async def load(self) -> Optional[SessionIdentity]:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT identifier FROM attendease_sessions WHERE device_id=$1",
                self.device_id,
            )
            return SessionIdentity.from_identifier(row["identifier"]) if row else None

    async def save(self, identity: SessionIdentity) -> None:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO attendease_sessions (device_id, identifier, role, updated_at)
                VALUES ($1, $2, $3, NOW())
                ON CONFLICT (device_id) DO UPDATE
                SET identifier = EXCLUDED.identifier, role = EXCLUDED.role, updated_at = NOW()
                """,
                self.device_id,
                identity.identifier,
                identity.role.value,
            )

    async def clear(self) -> None:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            await conn.execute("DELETE FROM attendease_sessions WHERE device_id=$1", self.device_id)


def create_session_store_from_env() -> SessionStore:
    """Pick Postgres when a DSN is configured, then a session file, else memory."""
    dsn = os.getenv("ATTENDEASE_PG_DSN") or os.getenv("DATABASE_URL")
    if dsn:
        return PostgresSessionStore(dsn=dsn, device_id=os.getenv("ATTENDEASE_DEVICE_ID", "default"))
    path = os.getenv("ATTENDEASE_SESSION_FILE")
    if path:
        return FileSessionStore(path)
    return InMemorySessionStore()
