"""Database package."""

from usersdb.database.session import (
    create_db_engine,
    create_session_factory,
    session_scope,
    sqlite_database_path,
    ensure_schema,
    reset_schema,
)

__all__ = [
    "create_db_engine",
    "create_session_factory",
    "session_scope",
    "sqlite_database_path",
    "ensure_schema",
    "reset_schema",
]
