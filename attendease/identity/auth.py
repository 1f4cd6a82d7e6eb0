"""Sign-in, registration and sign-out against a session store."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..config import DEFAULT_CONFIG, ProtocolConfig
from ..errors import CredentialTooShort
from .roles import validate_identifier
from .session import SessionIdentity
from .store import SessionStore

logger = logging.getLogger(__name__)


class AuthService:
    """Authenticate identifiers by shape and mirror the session to a store.

    There is no credential backend: a credential only has to meet the minimum
    length, and the role comes from the identifier itself.
    """

    def __init__(self, store: SessionStore, config: Optional[ProtocolConfig] = None) -> None:
        self.store = store
        self.config = config or DEFAULT_CONFIG
        self._current: Optional[SessionIdentity] = None

    @property
    def current(self) -> Optional[SessionIdentity]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    async def restore(self) -> Optional[SessionIdentity]:
        """Load a previously saved identity at startup."""
        self._current = await self.store.load()
        if self._current is not None:
            logger.info("Restored session for %s (%s)", self._current.identifier, self._current.role.value)
        return self._current

    async def login(self, identifier: str, credential: str) -> SessionIdentity:
        return await self._authenticate(identifier, credential, action="login")

    async def register(self, identifier: str, credential: str) -> SessionIdentity:
        return await self._authenticate(identifier, credential, action="register")

    async def logout(self) -> None:
        if self._current is not None:
            logger.info("Signing out %s", self._current.identifier)
        self._current = None
        await self.store.clear()

    async def _authenticate(self, identifier: str, credential: str, *, action: str) -> SessionIdentity:
        role = validate_identifier(identifier)
        if len(credential or "") < self.config.min_credential_length:
            raise CredentialTooShort(self.config.min_credential_length)

        if self.config.auth_delay_s > 0:
            await asyncio.sleep(self.config.auth_delay_s)

        identity = SessionIdentity(identifier=identifier, role=role)
        self._current = identity
        await self.store.save(identity)
        logger.info("%s succeeded for %s (%s)", action, identifier, role.value)
        return identity
