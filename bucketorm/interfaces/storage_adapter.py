"""
Storage Adapter Interface

Cloud-agnostic abstraction for flat key/value object storage.
Implementations: S3StorageAdapter (AWS / MinIO), FileStorage, MemoryStorage.

Models only ever see these four primitives; everything else
(records, timestamps, filtering) is built on top of them.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageAdapter(ABC):
    """
    Abstract base class for object storage.

    Keys are bucket-relative ("user/alice.json"). A missing key is not an
    error for download: it returns None. Every other failure must surface
    as an exception (StorageError for the bundled adapters).
    """

    @abstractmethod
    async def upload(self, key: str, data: bytes) -> None:
        """
        Store an object, replacing any existing object at the key.

        Args:
            key: Object key (e.g., "user/alice.json")
            data: Raw bytes to store
        """
        ...

    @abstractmethod
    async def download(self, key: str) -> Optional[bytes]:
        """
        Retrieve an object.

        Returns:
            Raw bytes of the object, or None if the key does not exist
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete an object. Deleting a missing key is not an error."""
        ...

    @abstractmethod
    async def list_keys(self, prefix: str = "") -> list[str]:
        """
        List object keys under a prefix.

        Args:
            prefix: Key prefix filter (e.g., "user/")

        Returns:
            Full keys, in the backend's listing order
        """
        ...
