from __future__ import annotations

from pathlib import Path

from auth_app.infrastructure.db.session import (
    SQLITE_BUSY_TIMEOUT_SECONDS,
    _engine_options,
    create_session_factory,
)


def test_sqlite_urls_get_busy_timeout() -> None:
    assert _engine_options("sqlite+aiosqlite:///./auth.db") == {
        "connect_args": {"timeout": SQLITE_BUSY_TIMEOUT_SECONDS},
    }


def test_server_database_urls_get_pre_ping() -> None:
    assert _engine_options("postgresql+asyncpg://auth:secret@db/auth") == {"pool_pre_ping": True}


def test_session_factory_binds_engine_for_url(tmp_path: Path) -> None:
    factory = create_session_factory(f"sqlite+aiosqlite:///{tmp_path / 'session.db'}")

    engine = factory.kw["bind"]
    assert engine.dialect.name == "sqlite"
    assert factory.kw["expire_on_commit"] is False
