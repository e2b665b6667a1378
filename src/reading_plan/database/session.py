"""SQLAlchemy async session management for FastAPI."""

from typing import AsyncGenerator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from reading_plan.database.connection import get_engine
from reading_plan.utils.logging import get_logger

logger = get_logger("database")

# Global session factory
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_session_factory(engine: Optional[AsyncEngine] = None) -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            engine or get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Session factory created")
    return _session_factory


def reset_session_factory() -> None:
    """Drop the cached session factory (used on shutdown)."""
    global _session_factory
    _session_factory = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for getting a database session.

    The service only reads, so the session is rolled back on error and
    otherwise simply closed.
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        except Exception as e:
            await session.rollback()
            logger.error(f"Unexpected error in database session: {e}")
            raise
