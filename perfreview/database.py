"""Database engine and session management.

The engine is created lazily so that importing models (or the pure engine
modules) never opens a connection pool.
"""

import ssl
from collections.abc import AsyncGenerator
from functools import lru_cache
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from perfreview.config import settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def split_ssl_options(url: str) -> tuple[str, dict]:
    """Move sslmode/ssl query options into asyncpg connect_args (asyncpg rejects them in the URL)."""
    parsed = urlparse(url)
    query = parse_qs(parsed.query)
    mode = (query.pop("sslmode", None) or query.pop("ssl", None) or [None])[0]
    connect_args = {}
    if mode and mode not in ("disable", "false"):
        connect_args["ssl"] = ssl.create_default_context()
    clean = urlunparse(parsed._replace(query=urlencode(query, doseq=True)))
    return clean, connect_args


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    url, connect_args = split_ssl_options(settings.database_url)
    return create_async_engine(
        url,
        echo=settings.log_level == "DEBUG",
        connect_args=connect_args,
        pool_pre_ping=True,
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database sessions."""
    async with get_session_maker()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
