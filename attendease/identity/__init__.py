"""Identity classification, session state and persistence."""

from .auth import AuthService
from .roles import Role, classify, validate_identifier
from .session import SessionIdentity, ensure_can_issue
from .store import (
    FileSessionStore,
    InMemorySessionStore,
    PostgresSessionStore,
    SessionStore,
    create_session_store_from_env,
)

__all__ = [
    "AuthService",
    "Role",
    "classify",
    "validate_identifier",
    "SessionIdentity",
    "ensure_can_issue",
    "SessionStore",
    "InMemorySessionStore",
    "FileSessionStore",
    "PostgresSessionStore",
    "create_session_store_from_env",
]
