"""
Database engine and session management.

SQLite (aiosqlite) is the default backend; a ``postgresql+asyncpg`` URL
switches to PostgreSQL with connection pool tuning.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.infra.config.logging_config import get_logger
from app.infra.config.settings import get_settings

settings = get_settings()
logger = get_logger("database")


def _engine_options(database_url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.debug_sql}
    if make_url(database_url).get_backend_name() != "sqlite":
        options.update(pool_pre_ping=True, pool_recycle=300)
    return options


engine: AsyncEngine = create_async_engine(
    settings.database_url, **_engine_options(settings.database_url)
)

async_session_factory = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


def get_engine() -> AsyncEngine:
    return engine


def get_session_factory() -> async_sessionmaker:
    return async_session_factory


async def init_models() -> None:
    """Create the events, archive and user tables if they are missing."""
    from app.data.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(
        "database.initialized",
        backend=make_url(settings.database_url).get_backend_name(),
        tables=sorted(Base.metadata.tables),
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database session.

    One session per request; the unit of work decides commit or rollback,
    anything still pending when the request fails is discarded here.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
