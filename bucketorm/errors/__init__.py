from bucketorm.errors.models import FriendlyError, ErrorSeverity
from bucketorm.errors.handler import ErrorHandler
from bucketorm.errors.exceptions import (
    ErrorCode,
    BucketORMError,
    InvalidData,
    RecordNotFound,
    RecordAlreadyExists,
    StorageError,
    CorruptData,
)

__all__ = [
    "FriendlyError", "ErrorSeverity", "ErrorHandler",
    "ErrorCode", "BucketORMError",
    "InvalidData", "RecordNotFound", "RecordAlreadyExists",
    "StorageError", "CorruptData",
]
