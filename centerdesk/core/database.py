from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.pool import NullPool

from centerdesk.core.config import settings, get_database_url
from centerdesk.models import Base


def build_engine(database_url: Optional[str] = None, echo: Optional[bool] = None, **kwargs) -> AsyncEngine:
    """Create an async engine; pooling options only apply to server databases"""
    url = database_url or get_database_url()
    options = {
        "echo": settings.DATABASE_ECHO if echo is None else echo,
    }
    if url.startswith("sqlite"):
        options["poolclass"] = NullPool
    else:
        options.update(
            pool_pre_ping=True,        # Connection health check
            pool_size=20,              # Maximum number of connections in the pool
            max_overflow=10,           # Connections allowed beyond pool_size
            pool_timeout=30,           # Seconds to wait on pool checkout
            pool_recycle=1800,         # Recycle connections after 30 minutes
        )
    options.update(kwargs)
    return create_async_engine(url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,    # Don't expire objects after commit
        autoflush=False            # Explicit flush management
    )


@asynccontextmanager
async def session_scope(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for one unit of work.
    Usage: async with session_scope(factory) as session:
    """
    session = session_factory()
    try:
        yield session
        # Commit by default when used as context manager
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


# Database initialization functions
async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def close_db(engine: AsyncEngine) -> None:
    """Close database connections"""
    await engine.dispose()
