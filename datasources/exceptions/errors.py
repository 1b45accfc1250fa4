"""
Data-access error taxonomy.

QueryBuildError       - a required clause is missing or the builder state cannot render;
                        raised before any backend call.
BackendOperationError - the driver failed (connectivity, constraint, timeout); the driver
                        exception is chained as __cause__ and kept on .original.
DecodeError           - a row/document could not be decoded into the destination model.
TransactionError      - transaction lifecycle misuse (nested begin, double commit/rollback).

Absence (no matching row for a single-record lookup) is not an error.
"""

from typing import Any, Optional


class DataAccessError(Exception):
    """Base class for data-access errors."""
    code: int = 500

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        target: Optional[str] = None,
        detail: Any = None,
        code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.target = target
        self.detail = detail
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        if self.operation and self.target:
            return f"{self.operation} on {self.target}: {self.message}"
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class QueryBuildError(DataAccessError):
    """Builder state is incomplete or inconsistent."""
    code = 400


class InvalidEntityError(QueryBuildError):
    """Field extraction received something that is not an entity instance."""


class BackendOperationError(DataAccessError):
    """Driver-level failure, wrapped with operation context."""
    code = 503

    def __init__(self, message: str, original: Optional[BaseException] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.original = original


class DecodeError(DataAccessError):
    """Result could not be decoded into the destination model."""
    code = 500


class TransactionError(DataAccessError):
    """Transaction lifecycle misuse."""
    code = 409


class UnitOfWorkClosedError(TransactionError):
    """The unit of work was already committed or rolled back."""
