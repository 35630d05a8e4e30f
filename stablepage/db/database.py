"""Database engine and session management for the SQL record source."""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from stablepage.config.settings import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def create_engine(url: Optional[str] = None) -> AsyncEngine:
    """Create an async engine; defaults to ``settings.database_url``."""
    settings = get_settings()
    url = url or settings.database_url
    options = {"echo": settings.database_echo, "future": True}
    if ":memory:" in url:
        options["poolclass"] = StaticPool
    elif not url.startswith("sqlite"):
        options.update(pool_size=10, max_overflow=10, pool_timeout=30, pool_recycle=300, pool_pre_ping=True)
    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create tables for all mapped models."""
    from stablepage.models import record  # noqa: F401  (registers the table)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")


async def dispose_engine(engine: AsyncEngine) -> None:
    await engine.dispose()
    logger.info("Database engine disposed")
