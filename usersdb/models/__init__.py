"""
Database models package.

Contains all SQLAlchemy ORM models.
"""

from usersdb.models.base import Base, create_all_tables, drop_all_tables
from usersdb.models.user import User

__all__ = [
    "Base",
    "User",
    "create_all_tables",
    "drop_all_tables",
]
