"""Async SQLAlchemy engine, session factory, and declarative base.

The engine and its connection pool are created once, at import, and shared
by every data-access call in the process.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from lightbnb.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


# Factory used by the services; swapped out by set_session_factory()
_session_factory = async_session_factory


def set_session_factory(factory) -> None:
    """Point every data-access call at a different session factory."""
    global _session_factory
    _session_factory = factory


def get_session_factory():
    return _session_factory


async def create_schema(bind: AsyncEngine | None = None) -> None:
    """Create all LightBnB tables that do not exist yet."""
    import lightbnb.models  # noqa: F401

    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready on %s", bind.url.render_as_string(hide_password=True))


async def dispose_engine() -> None:
    """Close pooled connections; call once at process shutdown."""
    await engine.dispose()
