"""
Services Package
================

Business logic layer for usersdb.

Available services:
- RecordStore: CRUD access to the Users table with typed results
"""

from usersdb.services.record_store import RecordStore, classify_error

__all__ = [
    "RecordStore",
    "classify_error",
]
