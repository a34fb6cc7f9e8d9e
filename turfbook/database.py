"""Async database engine, session factory and table bootstrap."""

from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from turfbook.config import settings

Base = declarative_base()

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory bound to ``engine``; sessions keep attributes after commit."""
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


def get_engine() -> AsyncEngine:
    """Engine for ``settings.database_url``, created on first use."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(settings.database_url, echo=False, future=True)
    return _engine


def get_session_factory() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_engine())
    return _session_factory


async def create_tables(engine: Optional[AsyncEngine] = None) -> None:
    """Create the turfs/reviews tables if missing (development and tests)."""
    # Importing registers the ORM tables on Base.metadata
    from turfbook.repositories import tables  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Provide a single async DB session per request."""
    async with get_session_factory()() as session:
        yield session
