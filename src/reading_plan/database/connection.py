"""Database engine and connection pool."""

from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from reading_plan.config import DatabaseSettings
from reading_plan.utils.logging import get_logger

logger = get_logger("database")

# Global engine instance
_engine: Optional[AsyncEngine] = None


def create_engine(db_settings: DatabaseSettings) -> AsyncEngine:
    """Create and configure the SQLAlchemy async engine."""
    db_url = db_settings.async_url

    engine_kwargs: Dict[str, Any] = {
        "pool_pre_ping": True,  # Verify connections before using them
        "echo": db_settings.echo,
    }
    # SQLite drivers do not take queue pool sizing
    if not db_url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=db_settings.pool_size,
            max_overflow=db_settings.max_overflow,
            pool_recycle=db_settings.pool_recycle,
        )

    engine = create_async_engine(db_url, **engine_kwargs)
    logger.info(f"Database engine created: driver={engine.url.drivername}")
    return engine


def init_engine(db_settings: DatabaseSettings) -> AsyncEngine:
    """Create the global engine if it does not exist yet."""
    global _engine
    if _engine is None:
        _engine = create_engine(db_settings)
    return _engine


def get_engine() -> AsyncEngine:
    """Get the global database engine."""
    if _engine is None:
        raise RuntimeError("Database engine is not initialized; call init_engine() first")
    return _engine


async def close_engine() -> None:
    """Close the database engine and dispose of all connections."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        logger.info("Database engine closed")


async def check_connection(engine: Optional[AsyncEngine] = None) -> bool:
    """Check if database connection is available."""
    try:
        engine = engine or get_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            row = result.fetchone()
            return row is not None and row[0] == 1
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
