import asyncio

import pytest

from attendease.config import ProtocolConfig
from attendease.errors import ClassificationUnknown, CredentialTooShort
from attendease.identity.auth import AuthService
from attendease.identity.roles import Role
from attendease.identity.session import SessionIdentity
from attendease.identity.store import (
    FileSessionStore,
    InMemorySessionStore,
    PostgresSessionStore,
    create_session_store_from_env,
)

FAST = ProtocolConfig(auth_delay_s=0.0)


def test_login_saves_identity_and_logout_clears_it() -> None:
    async def run() -> None:
        store = InMemorySessionStore()
        auth = AuthService(store, FAST)

        identity = await auth.login("teacher@iiitp.ac.in", "secret1")
        assert identity == SessionIdentity("teacher@iiitp.ac.in", Role.FACULTY)
        assert auth.is_authenticated
        assert await store.load() == identity

        await auth.logout()
        assert auth.current is None
        assert await store.load() is None

    asyncio.run(run())


def test_register_classifies_students() -> None:
    async def run() -> None:
        auth = AuthService(InMemorySessionStore(), FAST)
        identity = await auth.register("123456789@ece.iiitp.ac.in", "secret1")
        assert identity.role is Role.STUDENT

    asyncio.run(run())


def test_login_rejects_unknown_identifiers_and_short_credentials() -> None:
    async def run() -> None:
        store = InMemorySessionStore()
        auth = AuthService(store, FAST)

        with pytest.raises(ClassificationUnknown):
            await auth.login("someone@example.com", "secret1")
        with pytest.raises(CredentialTooShort) as exc:
            await auth.login("teacher@iiitp.ac.in", "12345")
        assert "6 characters" in str(exc.value)

        assert auth.current is None
        assert await store.load() is None

    asyncio.run(run())


def test_restore_picks_up_saved_session() -> None:
    async def run() -> None:
        store = InMemorySessionStore()
        await AuthService(store, FAST).login("teacher@iiitp.ac.in", "secret1")

        fresh = AuthService(store, FAST)
        assert fresh.current is None
        restored = await fresh.restore()
        assert restored is not None
        assert restored.role is Role.FACULTY

    asyncio.run(run())


def test_file_store_round_trip(tmp_path) -> None:
    async def run() -> None:
        store = FileSessionStore(tmp_path / "session" / "user.json")
        assert await store.load() is None

        identity = SessionIdentity.from_identifier("123456789@cse.iiitp.ac.in")
        await store.save(identity)
        assert await FileSessionStore(store.path).load() == identity

        await store.clear()
        await store.clear()
        assert await store.load() is None

    asyncio.run(run())


def test_store_selection_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("ATTENDEASE_PG_DSN", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("ATTENDEASE_SESSION_FILE", raising=False)
    assert isinstance(create_session_store_from_env(), InMemorySessionStore)

    monkeypatch.setenv("ATTENDEASE_SESSION_FILE", str(tmp_path / "user.json"))
    assert isinstance(create_session_store_from_env(), FileSessionStore)

    monkeypatch.setenv("ATTENDEASE_PG_DSN", "postgresql://localhost/attendease")
    store = create_session_store_from_env()
    assert isinstance(store, PostgresSessionStore)
    assert store.pool is None


def test_corrupt_session_file_restores_no_session(tmp_path) -> None:
    async def run() -> None:
        path = tmp_path / "user.json"
        path.write_text("{not json", encoding="utf-8")
        auth = AuthService(FileSessionStore(path), FAST)

        assert await auth.restore() is None
        assert auth.is_authenticated is False

        path.write_text('["attendease_user"]', encoding="utf-8")
        assert await FileSessionStore(path).load() is None

    asyncio.run(run())
