"""Database package."""

from pokevault.database.session import (
    async_session_factory,
    close_db,
    engine,
    get_session,
    get_session_context,
    init_db,
)

__all__ = [
    "engine",
    "async_session_factory",
    "get_session",
    "get_session_context",
    "init_db",
    "close_db",
]
