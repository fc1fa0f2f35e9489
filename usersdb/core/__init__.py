"""Core constants, errors and result types."""

from usersdb.core.constants import StoreStatus
from usersdb.core.errors import RecordStoreError
from usersdb.core.results import StoreResult, UserRecord

__all__ = [
    "StoreStatus",
    "RecordStoreError",
    "StoreResult",
    "UserRecord",
]
