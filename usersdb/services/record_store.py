"""
Record Store
============

Owns the connection to the local Users database and exposes the four CRUD
operations.

Every operation:
- runs in its own transaction (commit on success, rollback on error)
- holds the store lock, so only one request is in flight at a time
- binds every value as a parameter
- returns a StoreResult instead of raising

Lifetime is explicit: build the store at startup, open() it, close() it at
shutdown. The store also works as a context manager.

Example:
    with RecordStore.from_settings() as store:
        store.insert("Alice", 30)
        for user in store.fetch_all().records:
            print(user.id, user.name, user.age)
"""

import logging
import threading
from typing import Callable, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    ProgrammingError,
    SQLAlchemyError,
    StatementError,
)
from sqlalchemy.orm import sessionmaker

from usersdb.config import Settings, settings
from usersdb.core.constants import (
    SQLITE_INT_MAX,
    SQLITE_INT_MIN,
    USERS_TABLE,
    StoreStatus,
)
from usersdb.core.results import StoreResult, UserRecord
from usersdb.database.session import (
    create_db_engine,
    create_session_factory,
    ensure_schema,
    session_scope,
    sqlite_database_path,
)
from usersdb.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def classify_error(exc: SQLAlchemyError) -> StoreStatus:
    """Map a SQLAlchemy / DB-API error to a failure kind."""
    if isinstance(exc, (IntegrityError, DataError)):
        return StoreStatus.EXECUTION_FAILED
    if isinstance(exc, InterfaceError):
        return StoreStatus.BIND_FAILED
    if isinstance(exc, (OperationalError, ProgrammingError)):
        return StoreStatus.STATEMENT_PREPARE_FAILED
    if isinstance(exc, DBAPIError):
        return StoreStatus.EXECUTION_FAILED
    if isinstance(exc, StatementError):
        # Raised before the driver saw the statement, e.g. a type processor
        return StoreStatus.BIND_FAILED
    return StoreStatus.EXECUTION_FAILED


def _error_message(exc: Exception) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _bind_problem(name, **integers) -> Optional[str]:
    """Return why the values cannot be bound, or None if they can."""
    if name is not None and not isinstance(name, str):
        return f"name must be text, got {type(name).__name__}"
    for field, value in integers.items():
        # bool is an int subclass but never a valid id or age
        if isinstance(value, bool) or not isinstance(value, int):
            return f"{field} must be an integer, got {type(value).__name__}"
        if not SQLITE_INT_MIN <= value <= SQLITE_INT_MAX:
            return f"{field} {value} does not fit a 64-bit integer"
    return None


class RecordStore:
    """
    CRUD access to the Users table of one SQLite file.

    Attributes:
        database_url: SQLAlchemy URL of the store
        open_result: Outcome of the last open() call (None while closed)
    """

    def __init__(self, database_url: Optional[str] = None,
                 echo: Optional[bool] = None,
                 journal_mode: Optional[str] = None):
        """
        Build a closed store.

        Args:
            database_url: SQLAlchemy URL (default from settings)
            echo: Log every SQL statement (default: settings.app_debug)
            journal_mode: SQLite journal mode (default from settings)
        """
        self.database_url = database_url or settings.database_url
        self.echo = echo
        self.journal_mode = journal_mode
        self.open_result: Optional[StoreResult] = None
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, current: Optional[Settings] = None) -> "RecordStore":
        """Build a store from the application settings."""
        current = current or settings
        return cls(
            database_url=current.database_url,
            echo=current.app_debug,
            journal_mode=current.sqlite_journal_mode,
        )

    @property
    def database_path(self) -> Optional[str]:
        """File path of the store, None when it lives in memory."""
        return sqlite_database_path(self.database_url)

    @property
    def is_open(self) -> bool:
        return self._session_factory is not None

    # ========================================
    # Lifecycle
    # ========================================

    def open(self) -> StoreResult:
        """
        Open the database and ensure the Users table exists.

        A failure is logged and returned; the store then stays closed and
        every operation reports STORE_UNAVAILABLE.

        Returns:
            SUCCESS, STORE_UNAVAILABLE or SCHEMA_SETUP_FAILED
        """
        with self._lock:
            if self._engine is not None:
                return self.open_result

            self.open_result = self._open()
            return self.open_result

    def _open(self) -> StoreResult:
        engine = None
        try:
            logger.info("Database path: %s", self.database_path or ":memory:")
            engine = create_db_engine(
                self.database_url, echo=self.echo, journal_mode=self.journal_mode
            )
            with engine.connect():
                pass
        except (OSError, ImportError, SQLAlchemyError) as exc:
            # ImportError: the URL names a DBAPI driver that is not installed
            if engine is not None:
                engine.dispose()
            logger.error("Error opening database: %s", _error_message(exc))
            return StoreResult.failure(
                "open", StoreStatus.STORE_UNAVAILABLE, _error_message(exc)
            )

        try:
            ensure_schema(engine)
        except SQLAlchemyError as exc:
            engine.dispose()
            logger.error("Error creating table: %s", _error_message(exc))
            return StoreResult.failure(
                "open", StoreStatus.SCHEMA_SETUP_FAILED, _error_message(exc)
            )

        self._engine = engine
        self._session_factory = create_session_factory(engine)
        logger.info("Table '%s' created (or already exists).", USERS_TABLE)
        return StoreResult.success("open")

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
                logger.info("Database closed: %s", self.database_path or ":memory:")
            self._engine = None
            self._session_factory = None
            self.open_result = None

    def __enter__(self) -> "RecordStore":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"<RecordStore({self.database_url!r}, {state})>"

    # ========================================
    # CRUD
    # ========================================

    def insert(self, name: str, age: int) -> StoreResult:
        """
        Add a user; the store assigns the id.

        Returns:
            SUCCESS with rows_affected=1 and record_id set, or a failure
        """
        problem = _bind_problem(name, age=age)
        if problem:
            return self._bind_failure("insert", problem)

        def work(repo: UserRepository) -> StoreResult:
            new_id = repo.insert(name, age)
            logger.debug("User added: id=%s name=%r age=%s", new_id, name, age)
            return StoreResult.success("insert", rows_affected=1, record_id=new_id)

        return self._run("insert", work)

    def fetch_all(self) -> StoreResult:
        """
        Every user in insertion order.

        Returns:
            SUCCESS with records (possibly empty), or a failure
        """
        def work(repo: UserRepository) -> StoreResult:
            records = tuple(UserRecord.model_validate(user) for user in repo.fetch_all())
            return StoreResult.success("fetch_all", records=records)

        return self._run("fetch_all", work)

    def update(self, user_id: int, name: str, age: int) -> StoreResult:
        """
        Replace name and age of the user with this id.

        Returns:
            SUCCESS (1 row), NOT_FOUND (0 rows), or a failure
        """
        problem = _bind_problem(name, id=user_id, age=age)
        if problem:
            return self._bind_failure("update", problem)

        def work(repo: UserRepository) -> StoreResult:
            rows = repo.update(user_id, name, age)
            if rows == 0:
                logger.info("update: no user with id %s", user_id)
                return StoreResult.not_found("update")
            logger.debug("User updated: id=%s name=%r age=%s", user_id, name, age)
            return StoreResult.success("update", rows_affected=rows, record_id=user_id)

        return self._run("update", work)

    def delete(self, user_id: int) -> StoreResult:
        """
        Remove the user with this id.

        Returns:
            SUCCESS (1 row), NOT_FOUND (0 rows), or a failure
        """
        problem = _bind_problem(None, id=user_id)
        if problem:
            return self._bind_failure("delete", problem)

        def work(repo: UserRepository) -> StoreResult:
            rows = repo.delete(user_id)
            if rows == 0:
                logger.info("delete: no user with id %s", user_id)
                return StoreResult.not_found("delete")
            logger.debug("User deleted: id=%s", user_id)
            return StoreResult.success("delete", rows_affected=rows, record_id=user_id)

        return self._run("delete", work)

    # ========================================
    # Internals
    # ========================================

    def _run(self, operation: str,
             work: Callable[[UserRepository], StoreResult]) -> StoreResult:
        with self._lock:
            if self._session_factory is None:
                logger.warning("%s: store is not open", operation)
                return StoreResult.failure(
                    operation, StoreStatus.STORE_UNAVAILABLE, "store is not open"
                )
            try:
                with session_scope(self._session_factory) as db:
                    return work(UserRepository(db))
            except SQLAlchemyError as exc:
                status = classify_error(exc)
                message = _error_message(exc)
                logger.error("%s failed (%s): %s", operation, status.value, message)
                return StoreResult.failure(operation, status, message)

    def _bind_failure(self, operation: str, problem: str) -> StoreResult:
        logger.warning("%s: %s", operation, problem)
        return StoreResult.failure(operation, StoreStatus.BIND_FAILED, problem)
