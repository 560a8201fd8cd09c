"""
Local Storage Adapter: in-process dict.

For tests and quick experiments. Nothing is persisted; listing is
lexicographic by key, like S3.
"""

from typing import Optional

from bucketorm.interfaces.storage_adapter import StorageAdapter


class MemoryStorage(StorageAdapter):
    """Dict-backed storage adapter."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}

    async def upload(self, key: str, data: bytes) -> None:
        self.objects[key] = bytes(data)

    async def download(self, key: str) -> Optional[bytes]:
        return self.objects.get(key)

    async def delete(self, key: str) -> None:
        self.objects.pop(key, None)

    async def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(key for key in self.objects if key.startswith(prefix))
