"""
Order Store Engine

Async SQLAlchemy engine and session factory for the order store. SQLite
(through aiosqlite) is the default; any async URL in ``DATABASE_URL`` works.
"""

import logging
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from storefront.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

DATABASE_URL = make_url(settings.database_url)


def _engine_options() -> dict:
    """Pool options for the configured backend."""
    if DATABASE_URL.get_backend_name() == "sqlite":
        # aiosqlite connections are bound to the loop that opened them
        return {"poolclass": NullPool}
    return {"pool_size": 5, "max_overflow": 10}


engine = create_async_engine(DATABASE_URL, echo=settings.debug, **_engine_options())

# Rows stay readable after commit so handlers can build responses from them
async_session_maker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request."""
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """Create the order table (and the SQLite file's directory) if missing."""
    if DATABASE_URL.get_backend_name() == "sqlite" and DATABASE_URL.database:
        Path(DATABASE_URL.database).parent.mkdir(parents=True, exist_ok=True)

    # Registers Order on Base.metadata
    from storefront import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"✅ Order store ready ({DATABASE_URL.get_backend_name()})")
