"""Database session and engine helpers."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import get_settings

_engines: dict[str, AsyncEngine] = {}
_factories: dict[str, async_sessionmaker[AsyncSession]] = {}


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to ``database_url`` (settings by default)."""
    url = database_url or get_settings().database_url
    factory = _factories.get(url)
    if factory is not None:
        return factory
    engine = create_async_engine(url, echo=False, pool_pre_ping=True)
    factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    _engines[url] = engine
    _factories[url] = factory
    return factory


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield an async database session using the configured engine."""
    async with get_sessionmaker()() as session:
        yield session


async def dispose_engine(database_url: str | None = None) -> None:
    """Close pooled connections for ``database_url`` and forget its factory."""
    url = database_url or get_settings().database_url
    _factories.pop(url, None)
    engine = _engines.pop(url, None)
    if engine is not None:
        await engine.dispose()
