"""
usersdb
=======

A small local store for user records (id, name, age) on SQLite.

Usage:
    from usersdb import RecordStore

    with RecordStore.from_settings() as store:
        store.insert("Alice", 30)
        print(store.fetch_all().records)
"""

from usersdb.core.constants import StoreStatus
from usersdb.core.errors import RecordStoreError
from usersdb.core.results import StoreResult, UserRecord
from usersdb.services.record_store import RecordStore

__version__ = "0.1.0"

__all__ = [
    "RecordStore",
    "StoreResult",
    "StoreStatus",
    "UserRecord",
    "RecordStoreError",
]
