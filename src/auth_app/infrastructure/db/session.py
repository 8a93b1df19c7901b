"""Async SQLAlchemy engine and session factory for the user store."""

from __future__ import annotations

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Seconds a SQLite writer waits on a locked database before failing a signup.
SQLITE_BUSY_TIMEOUT_SECONDS = 15


def create_session_factory(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Create the session factory backing `SqlAlchemyUserRepository`.

    SQLite URLs get a busy timeout so concurrent signups serialize on the
    file lock instead of failing; server databases get connection pre-ping.
    """

    engine = create_async_engine(database_url, **_engine_options(database_url))
    return async_sessionmaker(engine, expire_on_commit=False)


def _engine_options(database_url: str) -> dict[str, Any]:
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"timeout": SQLITE_BUSY_TIMEOUT_SECONDS}}
    return {"pool_pre_ping": True}
