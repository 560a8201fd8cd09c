"""
BucketORM Interfaces: Cloud-agnostic contracts.

The core depends on these interfaces only.
Backend-specific implementations live in adapters/.
"""

from bucketorm.interfaces.storage_adapter import StorageAdapter

__all__ = [
    "StorageAdapter",
]
