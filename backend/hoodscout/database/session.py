"""Database configuration and session management."""
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy.orm import DeclarativeBase
from typing import AsyncGenerator, Optional

from ..config.settings import settings


class Base(DeclarativeBase):
    pass


def _async_database_url(url: str) -> str:
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url

# Don't create engine at import time so tests can run without a database
engine: Optional[AsyncEngine] = None
async_session_local: Optional[async_sessionmaker] = None

def get_engine() -> AsyncEngine:
    """Get or create the async engine."""
    global engine
    if engine is None:
        engine = create_async_engine(
            _async_database_url(settings.DATABASE_URL),
            echo=settings.DATABASE_ECHO,
            pool_pre_ping=True,
        )
    return engine

def get_session_local() -> async_sessionmaker:
    """Get or create the session maker."""
    global async_session_local
    if async_session_local is None:
        async_session_local = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return async_session_local

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session."""
    session_local = get_session_local()
    async with session_local() as session:
        try:
            yield session
        finally:
            await session.close()

async def create_tables() -> None:
    """Create the lookup tables if they do not exist yet."""
    # Import models so they register on Base.metadata
    from . import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def dispose_engine() -> None:
    global engine, async_session_local
    if engine is not None:
        await engine.dispose()
    engine = None
    async_session_local = None
