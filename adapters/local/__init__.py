from adapters.local.memory_storage import MemoryStorage
from adapters.local.file_storage import FileStorage

__all__ = [
    "MemoryStorage",
    "FileStorage",
]
