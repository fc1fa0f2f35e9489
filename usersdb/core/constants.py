"""
Application-wide constants.

Centralize magic strings and configuration values here.
"""

from enum import Enum


# ========================================
# Store Outcomes
# ========================================

class StoreStatus(str, Enum):
    """
    Outcome of a single Record Store operation.

    Inherits from str so a status compares equal to its value:

        status = StoreStatus.NOT_FOUND
        print(status == "NOT_FOUND")  # True
    """

    SUCCESS = "SUCCESS"
    """The statement ran and touched (or read) what was asked."""

    NOT_FOUND = "NOT_FOUND"
    """The statement ran but no row matched the given id."""

    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    """The database file could not be opened, or the store is closed."""

    SCHEMA_SETUP_FAILED = "SCHEMA_SETUP_FAILED"
    """The Users table could not be created."""

    STATEMENT_PREPARE_FAILED = "STATEMENT_PREPARE_FAILED"
    """Malformed statement or a store-side error while preparing it."""

    BIND_FAILED = "BIND_FAILED"
    """A parameter value was rejected (e.g. wrong type)."""

    EXECUTION_FAILED = "EXECUTION_FAILED"
    """The statement ran but failed (e.g. constraint violation)."""


SUCCESS_STATUSES = frozenset({StoreStatus.SUCCESS, StoreStatus.NOT_FOUND})


# ========================================
# Storage
# ========================================

DATABASE_FILENAME = "UsersDB.sqlite"
# Per-user directory under the home directory
DATA_DIRNAME = ".usersdb"
USERS_TABLE = "Users"

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1
