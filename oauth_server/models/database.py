"""Database configuration and base models"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all database models"""

    pass


def to_async_url(db_url: str) -> str:
    """Convert a plain SQLite URL to its aiosqlite form"""
    if db_url.startswith("sqlite:///"):
        return db_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return db_url


def create_engine(db_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create async engine for the configured database

    Args:
        db_url: Database URL (plain sqlite:/// URLs are converted for async support)
        echo: Log SQL statements

    Returns:
        AsyncEngine
    """
    async_db_url = to_async_url(db_url)
    engine = create_async_engine(async_db_url, echo=echo, future=True)

    if "sqlite" in async_db_url:

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Let concurrent writers wait for each other instead of failing"""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA busy_timeout=30000")  # 30 seconds
            cursor.close()

    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory bound to engine"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database (create tables)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(engine: AsyncEngine) -> None:
    """Close database connections"""
    await engine.dispose()
