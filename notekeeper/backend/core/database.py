"""
Database Configuration.

SQLAlchemy async engine and session management.
Uses lazy initialization to prevent import-time failures when config is missing.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from notekeeper.backend.core.logging import get_logger

logger = get_logger(__name__)

# Module-level state for lazy initialization
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def _ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def _create_engine() -> AsyncEngine:
    """Create async SQLAlchemy engine."""
    from notekeeper.backend.core.config import get_app_config, get_database_url

    url = get_database_url()
    db_config = get_app_config().database

    _ensure_sqlite_directory(url)
    engine = create_async_engine(url, echo=db_config.echo)
    logger.debug(
        "Database engine created",
        extra={"backend": make_url(url).get_backend_name()},
    )
    return engine


def get_engine() -> AsyncEngine:
    """Get the database engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory, creating it on first use."""
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_factory


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create every table known to the ORM metadata.

    Existing tables are left untouched; there is no migration step.
    """
    from notekeeper.backend.models import Base

    target = engine or get_engine()
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema synchronized", extra={"tables": sorted(Base.metadata.tables)})


async def dispose_engine() -> None:
    """Close all pooled connections and forget the engine."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_factory = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    The session is committed when the request handler returns and
    rolled back if it raises.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def engine_info() -> dict[str, Any]:
    """Describe the configured engine for health reporting."""
    engine = get_engine()
    return {
        "backend": engine.url.get_backend_name(),
        "driver": engine.url.get_driver_name(),
    }
