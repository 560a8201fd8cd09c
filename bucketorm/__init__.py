"""
BucketORM: a document store over S3-compatible object storage.

Models map to key prefixes, records to JSON objects:
    <bucket>/<model>/<id>.json
"""

from bucketorm.core import BucketORM, BucketModel, BucketSchemaModel
from bucketorm.errors import (
    ErrorCode,
    BucketORMError,
    InvalidData,
    RecordNotFound,
    RecordAlreadyExists,
    StorageError,
    CorruptData,
)
from bucketorm.interfaces import StorageAdapter
from bucketorm.models import FindManyOptions, FieldError, Record, StoreConfig

__all__ = [
    "BucketORM", "BucketModel", "BucketSchemaModel",
    "ErrorCode", "BucketORMError",
    "InvalidData", "RecordNotFound", "RecordAlreadyExists",
    "StorageError", "CorruptData",
    "StorageAdapter",
    "FindManyOptions", "FieldError", "Record", "StoreConfig",
]
