"""
Database Session Management
============================

Handles database connections and session lifecycle.

Nothing here is created at import time: the caller builds an engine with
create_db_engine(), wraps it with create_session_factory(), and disposes the
engine when done.
"""

import os
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from usersdb.config import settings
from usersdb.models.base import create_all_tables, drop_all_tables


def sqlite_database_path(database_url: str) -> Optional[str]:
    """
    Return the file path of a SQLite URL.

    Returns None for in-memory databases and non-SQLite URLs.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return None
    database = url.database
    if not database or database == ":memory:" or database.startswith("file::memory:"):
        return None
    return database


def create_db_engine(
    database_url: Optional[str] = None,
    echo: Optional[bool] = None,
    journal_mode: Optional[str] = None,
) -> Engine:
    """
    Create and configure the database engine.

    Args:
        database_url: SQLAlchemy URL (default from settings)
        echo: Log every SQL statement (default: settings.app_debug)
        journal_mode: SQLite journal mode (default from settings)

    Returns:
        Engine bound to one connection for SQLite, a regular pool otherwise

    Raises:
        OSError: If the directory for the database file cannot be created
    """
    database_url = database_url or settings.database_url
    echo = settings.app_debug if echo is None else echo
    journal_mode = (journal_mode or settings.sqlite_journal_mode).upper()

    # SQLite-specific configuration
    if database_url.startswith("sqlite"):
        # Ensure data directory exists
        db_path = sqlite_database_path(database_url)
        if db_path:
            db_dir = os.path.dirname(os.path.abspath(db_path))
            if not os.path.isdir(db_dir):
                os.makedirs(db_dir, exist_ok=True)

        # One connection held for the engine's lifetime
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo
        )

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute(f"PRAGMA journal_mode={journal_mode}")
            cursor.close()

    else:
        engine = create_engine(database_url, echo=echo)

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Build a session factory bound to the engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for one unit of work.

    Commits when the block finishes, rolls back and re-raises on error.

    Usage:
        with session_scope(SessionLocal) as db:
            UserRepository(db).insert("Alice", 30)
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def ensure_schema(engine: Engine) -> None:
    """Create the Users table if it does not exist (no-op otherwise)."""
    create_all_tables(engine)


def reset_schema(engine: Engine) -> None:
    """Drop and recreate all tables."""
    drop_all_tables(engine)
    create_all_tables(engine)
