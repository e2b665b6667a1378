"""Database connection and session management."""

from reading_plan.database.connection import (
    check_connection,
    close_engine,
    create_engine,
    get_engine,
    init_engine,
)
from reading_plan.database.models import Base, BibleVerse
from reading_plan.database.session import (
    get_session,
    get_session_factory,
    reset_session_factory,
)

__all__ = [
    # Models
    "Base",
    "BibleVerse",
    # Connection
    "create_engine",
    "init_engine",
    "get_engine",
    "close_engine",
    "check_connection",
    # Session
    "get_session",
    "get_session_factory",
    "reset_session_factory",
]
