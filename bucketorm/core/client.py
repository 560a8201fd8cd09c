"""
BucketORM: entry point and model registry.

One BucketORM owns one storage adapter and caches one BucketModel and one
BucketSchemaModel per model name. Caches belong to the instance, so two
differently configured clients never share models.

Usage:
    orm = BucketORM.from_env()
    users = orm.model("user")
    await users.create({"id": "alice", "name": "Alice"})

    checked = orm.schema_model("user", UserSchema)
    await checked.create_with_validation({"id": "bob", "name": "Bob", "age": 30})
"""

import logging
import threading
from typing import Optional

from pydantic import BaseModel

from bucketorm.core.model import BucketModel
from bucketorm.core.schema_model import BucketSchemaModel
from bucketorm.interfaces.storage_adapter import StorageAdapter
from bucketorm.models.config import BACKENDS, StoreConfig

logger = logging.getLogger("bucketorm.client")


class BucketORM:
    """Resolves model names to cached model instances over a shared adapter."""

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        storage: Optional[StorageAdapter] = None,
    ):
        self.config = config or StoreConfig()
        # Built eagerly: a bad config fails here, not on first use.
        self._storage = storage if storage is not None else create_storage(self.config)
        self._models: dict[str, BucketModel] = {}
        self._schema_models: dict[str, BucketSchemaModel] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "BucketORM":
        """Create a client from environment variables (see StoreConfig)."""
        return cls(StoreConfig.from_env(env_file))

    def get_storage(self) -> StorageAdapter:
        return self._storage

    def model(self, name: str) -> BucketModel:
        """Get or create the model for `name`."""
        with self._lock:
            return self._get_or_create_model(name)

    def schema_model(self, name: str, schema: type[BaseModel]) -> BucketSchemaModel:
        """
        Get or create the validating model for `name`.

        The schema is fixed by the first call for a name; later calls get
        the cached instance. It wraps the same BucketModel that model(name)
        returns, so both views read and write one namespace.
        """
        with self._lock:
            cached = self._schema_models.get(name)
            if cached is not None:
                if cached.get_schema() is not schema:
                    logger.warning(
                        f"Model '{name}' is already registered with schema "
                        f"{cached.get_schema().__name__}; ignoring {schema.__name__}"
                    )
                return cached

            schema_model = BucketSchemaModel(self._get_or_create_model(name), schema)
            self._schema_models[name] = schema_model
            logger.debug(f"Registered schema model '{name}' ({schema.__name__})")
            return schema_model

    def registered_models(self) -> list[str]:
        with self._lock:
            return sorted(set(self._models) | set(self._schema_models))

    def _get_or_create_model(self, name: str) -> BucketModel:
        model = self._models.get(name)
        if model is None:
            model = BucketModel(name, self._storage)
            self._models[name] = model
            logger.debug(f"Registered model '{name}'")
        return model


def create_storage(config: StoreConfig) -> StorageAdapter:
    """Construct the adapter selected by `config.backend`."""
    if config.backend == "s3":
        from adapters.aws.s3_storage import S3StorageAdapter
        return S3StorageAdapter(config)
    if config.backend == "file":
        from adapters.local.file_storage import FileStorage
        return FileStorage(config.data_dir)
    if config.backend == "memory":
        from adapters.local.memory_storage import MemoryStorage
        return MemoryStorage()
    raise ValueError(
        f"Unknown storage backend '{config.backend}'. Available: {list(BACKENDS)}"
    )
