"""
Record Store exceptions.

Store operations never raise these on their own; they return a StoreResult.
A caller that prefers exceptions calls ``result.raise_for_status()``, which
raises the subclass matching the failure kind.
"""

from typing import Dict, Optional, Type

from usersdb.core.constants import StoreStatus


class RecordStoreError(Exception):
    """Base class for all Record Store failures."""

    status: StoreStatus = StoreStatus.EXECUTION_FAILED

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class RecordNotFound(RecordStoreError):
    """No row matched the given id."""

    status = StoreStatus.NOT_FOUND


class StoreUnavailable(RecordStoreError):
    status = StoreStatus.STORE_UNAVAILABLE


class SchemaSetupFailed(RecordStoreError):
    status = StoreStatus.SCHEMA_SETUP_FAILED


class StatementPrepareFailed(RecordStoreError):
    status = StoreStatus.STATEMENT_PREPARE_FAILED


class BindFailed(RecordStoreError):
    status = StoreStatus.BIND_FAILED


class ExecutionFailed(RecordStoreError):
    status = StoreStatus.EXECUTION_FAILED


ERRORS_BY_STATUS: Dict[StoreStatus, Type[RecordStoreError]] = {
    cls.status: cls
    for cls in (
        RecordNotFound,
        StoreUnavailable,
        SchemaSetupFailed,
        StatementPrepareFailed,
        BindFailed,
        ExecutionFailed,
    )
}


def error_for_status(status: StoreStatus) -> Type[RecordStoreError]:
    """Return the exception class for a failure status."""
    return ERRORS_BY_STATUS.get(status, RecordStoreError)
