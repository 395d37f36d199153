"""
Engine and session factories for the Lock In database.

Postgres URLs are pointed at ``asyncpg`` and SQLite URLs at ``aiosqlite``
whatever driver the configured URL names. In-memory SQLite shares a single
connection so every session sees the same tables.
"""

from __future__ import annotations

import re

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

from .base import Base

_POSTGRES_SCHEME = re.compile(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://")
_SQLITE_SCHEME = re.compile(r"^sqlite(?:\+[a-z0-9_]+)?://")


def normalize_url(db_url: str) -> str:
    """Rewrite ``db_url`` to use the async driver for its backend."""
    url = _POSTGRES_SCHEME.sub("postgresql+asyncpg://", db_url, count=1)
    return _SQLITE_SCHEME.sub("sqlite+aiosqlite://", url, count=1)


def create_engine(db_url: str, **kwargs) -> AsyncEngine:
    """Create an async engine for ``db_url``.

    Args:
        db_url: Database connection URL, sync or async flavoured
        **kwargs: Extra keyword arguments for ``create_async_engine``

    Returns:
        Configured AsyncEngine instance
    """
    url = make_url(normalize_url(db_url))
    if url.get_backend_name() == "sqlite":
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        if url.database in (None, "", ":memory:"):
            kwargs.setdefault("poolclass", StaticPool)
    else:
        kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url, **kwargs)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose objects stay readable after commit."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create the server tables directly; deployed databases use Alembic instead."""
    # Registers every table on the shared metadata.
    from . import entities

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, tables=entities.SERVER_TABLES)
