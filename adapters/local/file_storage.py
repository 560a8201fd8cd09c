"""
Local Storage Adapter: filesystem.

For local development without MinIO. Each key is a file under the root
directory ("user/alice.json" -> <root>/user/alice.json). Writes go to a
temp file first and are moved into place.
"""

import logging
import os
import re
import uuid
from pathlib import Path
from typing import Optional

from bucketorm.errors.exceptions import StorageError
from bucketorm.interfaces.storage_adapter import StorageAdapter

logger = logging.getLogger("bucketorm.file")

# In-flight writes: .<name>.<uuid hex>.tmp next to the target file
TEMP_FILE = re.compile(r"^\..+\.[0-9a-f]{32}\.tmp$")


class FileStorage(StorageAdapter):
    """Directory-backed storage adapter."""

    def __init__(self, root: str = "data/bucketorm"):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not key or "\x00" in key or "\\" in key or key.startswith("/"):
            raise StorageError(f"Invalid key: {key!r}", key=key)
        if any(segment in ("", ".", "..") for segment in key.split("/")):
            raise StorageError(f"Invalid key: {key!r}", key=key)
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise StorageError(f"Key escapes storage root: {key!r}", key=key)
        return path

    async def upload(self, key: str, data: bytes) -> None:
        path = self._path(key)
        tmp = path.parent / f".{path.name}.{uuid.uuid4().hex}.tmp"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise StorageError(f"Failed to write '{key}': {e}", cause=e, key=key) from e

    async def download(self, key: str) -> Optional[bytes]:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read '{key}': {e}", cause=e, key=key) from e

    async def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete '{key}': {e}", cause=e, key=key) from e

    async def list_keys(self, prefix: str = "") -> list[str]:
        keys = []
        for path in self.root.rglob("*"):
            if not path.is_file() or TEMP_FILE.match(path.name):
                continue
            key = path.relative_to(self.root).as_posix()
            if key.startswith(prefix):
                keys.append(key)
        keys.sort()
        logger.debug(f"Listed {len(keys)} keys under {self.root}/{prefix}")
        return keys
