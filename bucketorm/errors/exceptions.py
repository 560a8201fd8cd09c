"""
BucketORM exception taxonomy.

Every failure raised by a model is a BucketORMError carrying a machine
readable ErrorCode, a descriptive message naming the offending model, id or
field, and optional details. Nothing in the core retries or recovers.
"""

from enum import Enum
from typing import Any, Optional

from bucketorm.models.record import FieldError


class ErrorCode(str, Enum):
    INVALID_DATA = "INVALID_DATA"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    RECORD_ALREADY_EXISTS = "RECORD_ALREADY_EXISTS"
    STORAGE_ERROR = "STORAGE_ERROR"
    CORRUPT_DATA = "CORRUPT_DATA"


class BucketORMError(Exception):
    """Base class for all errors surfaced by BucketORM."""

    code: ErrorCode = ErrorCode.STORAGE_ERROR

    def __init__(
        self,
        message: str,
        *,
        model: Optional[str] = None,
        record_id: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.model = model
        self.record_id = record_id
        self.details = details

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "model": self.model,
            "record_id": self.record_id,
            "details": self.details,
        }


class InvalidData(BucketORMError):
    """The caller-supplied id or payload violates a precondition or schema."""

    code = ErrorCode.INVALID_DATA

    def __init__(
        self,
        message: str,
        *,
        errors: Optional[list[FieldError]] = None,
        **kwargs,
    ):
        self.errors: list[FieldError] = list(errors or [])
        kwargs.setdefault("details", [e.to_dict() for e in self.errors] or None)
        super().__init__(message, **kwargs)

    @classmethod
    def from_field_errors(cls, errors: list[FieldError], **kwargs) -> "InvalidData":
        summary = ", ".join(str(e) for e in errors)
        return cls(f"Schema validation failed: {summary}", errors=errors, **kwargs)


class RecordNotFound(BucketORMError):
    code = ErrorCode.RECORD_NOT_FOUND


class RecordAlreadyExists(BucketORMError):
    code = ErrorCode.RECORD_ALREADY_EXISTS


class StorageError(BucketORMError):
    """The storage backend failed. The underlying exception is kept as `cause`."""

    code = ErrorCode.STORAGE_ERROR

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        key: Optional[str] = None,
        error_code: str = "",
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.cause = cause
        self.key = key
        self.error_code = error_code


class CorruptData(BucketORMError):
    """Stored bytes could not be parsed as a record."""

    code = ErrorCode.CORRUPT_DATA

    def __init__(self, message: str, *, key: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.key = key
