"""Async engine and the request-scoped catalog session."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cinedesk.config import get_settings

settings = get_settings()

engine = create_async_engine(settings.database_url_async, pool_pre_ping=True)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def init_db() -> None:
    """Create missing tables (development convenience; production uses Alembic)."""
    # Importing the package registers every model on Base.metadata
    from cinedesk.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request: committed on success, rolled back on error.

    The submission pipeline commits itself after the insert; the final commit
    here is then a no-op.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
