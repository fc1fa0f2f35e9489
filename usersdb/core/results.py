"""
Result types returned by the Record Store.

UserRecord is a detached, immutable snapshot of one row. StoreResult is the
outcome of one store operation: a status, the affected-row count, and for
reads the fetched records.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from usersdb.core.constants import StoreStatus, SUCCESS_STATUSES
from usersdb.core.errors import error_for_status


class UserRecord(BaseModel):
    """
    Snapshot of a row in the Users table.

    Built from an ORM row or a mapping; changing it never touches the store.

    Example:
        record = UserRecord(id=1, name="Alice", age=30)
        record.model_dump()  # {"id": 1, "name": "Alice", "age": 30}
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: Optional[str] = None
    age: Optional[int] = None


class StoreResult(BaseModel):
    """
    Outcome of a Record Store operation.

    Attributes:
        operation: Which operation produced this result ("insert", "update", ...)
        status: SUCCESS, NOT_FOUND or one of the failure kinds
        rows_affected: Rows inserted/updated/deleted (0 for reads and failures)
        record_id: Id assigned by an insert
        records: Rows returned by fetch_all, in insertion order
        message: Error detail for failures

    Example:
        result = store.update(7, "Bob", 26)
        if result.status is StoreStatus.NOT_FOUND:
            print("No user with id 7")
    """

    model_config = ConfigDict(frozen=True)

    operation: str
    status: StoreStatus
    rows_affected: int = 0
    record_id: Optional[int] = None
    records: Tuple[UserRecord, ...] = ()
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when the statement ran, whether or not a row matched."""
        return self.status in SUCCESS_STATUSES

    @property
    def found(self) -> bool:
        """True when the statement ran and touched at least one row."""
        return self.status is StoreStatus.SUCCESS

    def raise_for_status(self, allow_not_found: bool = False) -> "StoreResult":
        """
        Raise the matching RecordStoreError unless the operation succeeded.

        Args:
            allow_not_found: Treat a zero-row update/delete as success

        Returns:
            self, so calls can be chained
        """
        if self.status is StoreStatus.SUCCESS:
            return self
        if self.status is StoreStatus.NOT_FOUND and allow_not_found:
            return self
        message = self.message or self.status.value
        raise error_for_status(self.status)(message, operation=self.operation)

    # ========================================
    # Constructors
    # ========================================

    @classmethod
    def success(cls, operation: str, **kwargs) -> "StoreResult":
        return cls(operation=operation, status=StoreStatus.SUCCESS, **kwargs)

    @classmethod
    def not_found(cls, operation: str) -> "StoreResult":
        return cls(operation=operation, status=StoreStatus.NOT_FOUND, rows_affected=0)

    @classmethod
    def failure(cls, operation: str, status: StoreStatus, message: str) -> "StoreResult":
        return cls(operation=operation, status=status, message=message)
