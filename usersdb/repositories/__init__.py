"""
Data access layer (Repository pattern).

Repositories handle all database queries,
isolating business logic from SQL.
"""

from usersdb.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
