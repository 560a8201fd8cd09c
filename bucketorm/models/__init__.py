from bucketorm.models.record import (
    Record, FindManyOptions, FieldError,
    ID_FIELD, CREATED_AT, UPDATED_AT, TIMESTAMP_FIELDS, RESERVED_FIELDS,
)
from bucketorm.models.config import StoreConfig

__all__ = [
    "Record", "FindManyOptions", "FieldError",
    "ID_FIELD", "CREATED_AT", "UPDATED_AT", "TIMESTAMP_FIELDS", "RESERVED_FIELDS",
    "StoreConfig",
]
