"""
Database engine: AsyncEngine creation + AsyncSession factory
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from todo_service.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the shared engine; its pool bounds and queues concurrent connections"""
    url = make_url(settings.DATABASE_URL)

    if url.get_backend_name() == "sqlite":
        # SQLite uses its own pool implementation without size limits
        return create_async_engine(url, echo=settings.DB_ECHO)

    return create_async_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
        echo=settings.DB_ECHO,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
