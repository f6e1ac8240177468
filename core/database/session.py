"""Evidence Manager - Database Session Management
Supports PostgreSQL (production) and SQLite (testing).
One AsyncSession per request is the unit of work for a use case.
"""

import asyncio
import os
import time
from collections.abc import AsyncGenerator

from loguru import logger
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from core.config import db_settings, get_environment

from .models import Base


def get_async_database_url() -> str:
    """Get async database URL from environment."""
    env = get_environment()

    if env == "test":
        url = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://")
        return url

    url = os.getenv("DATABASE_URL", "")

    # In production, require explicit DATABASE_URL
    if env == "production" and not url:
        raise RuntimeError(
            "DATABASE_URL must be set in production mode. "
            "Set EVIDENCE_MANAGER_ENV=development for local development."
        )

    # Block SQLite in production
    if env == "production" and "sqlite" in url.lower():
        raise RuntimeError("SQLite is not supported in production mode. Use PostgreSQL.")

    if not url:
        return db_settings.async_url

    # Convert to async URL if needed
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://")
    return url


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign key enforcement for every SQLite connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_async_engine(url: str | None = None) -> AsyncEngine:
    """Create async database engine."""
    db_url = url or get_async_database_url()

    if "sqlite" in db_url:
        engine = create_async_engine(db_url)
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_async_engine(
        db_url,
        pool_pre_ping=True,
        pool_size=db_settings.pool_size,
        max_overflow=db_settings.max_overflow,
    )


# Lazy initialization - only create the engine when needed
_async_engine = None
_async_session_local = None


def _get_async_engine_instance() -> AsyncEngine:
    """Get or create async engine (lazy)."""
    global _async_engine
    if _async_engine is None:
        _async_engine = get_async_engine()
    return _async_engine


def _get_async_session_local():
    """Get or create async session factory (lazy)."""
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = async_sessionmaker(
            _get_async_engine_instance(), class_=AsyncSession, expire_on_commit=False
        )
    return _async_session_local


async def init_db_async():
    """Initialize database tables (async)."""
    eng = _get_async_engine_instance()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Dispose of the engine and its connection pool."""
    global _async_engine, _async_session_local
    if _async_engine is not None:
        await _async_engine.dispose()
    _async_engine = None
    _async_session_local = None


# Dependency for FastAPI
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    AsyncSessionLocal = _get_async_session_local()
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


class UnitOfWork:
    """Transaction boundary shared by the repositories of one request."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


async def test_connection() -> bool:
    """Test database connection.

    Returns:
        True if connection successful
    """
    try:
        engine = _get_async_engine_instance()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection test failed: {e}")
        return False


async def wait_for_database(timeout: float = 60.0, interval: float = 2.0) -> bool:
    """Wait for database to become available.

    Args:
        timeout: Maximum time to wait in seconds
        interval: Time between connection attempts

    Returns:
        True if database became available
    """
    start = time.time()

    while time.time() - start < timeout:
        if await test_connection():
            logger.info("Database connection established")
            return True

        logger.info(f"Waiting for database... ({time.time() - start:.0f}s / {timeout:.0f}s)")
        await asyncio.sleep(interval)

    logger.error(f"Database not available after {timeout}s")
    return False
