"""
BucketModel: CRUD for one model name on top of a StorageAdapter.

Storage layout:
    <model>/<id>.json    one JSON object per record

There is no lock or transaction around read-then-write: two concurrent
creates for the same id can both pass the existence check, and the last
write wins. find_many is a full prefix listing followed by one read per
key and an in-memory filter.
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, Optional, Union

from bucketorm.core import codec, keys
from bucketorm.errors.exceptions import (
    BucketORMError,
    InvalidData,
    RecordAlreadyExists,
    RecordNotFound,
    StorageError,
)
from bucketorm.interfaces.storage_adapter import StorageAdapter
from bucketorm.models.record import (
    CREATED_AT,
    FindManyOptions,
    ID_FIELD,
    Record,
    UPDATED_AT,
)

logger = logging.getLogger("bucketorm.model")


class BucketModel:
    """CRUD operations for the records of a single model."""

    def __init__(self, name: str, storage: StorageAdapter):
        self._name = keys.validate_model_name(name)
        self.storage = storage

    @property
    def name(self) -> str:
        return self._name

    @property
    def prefix(self) -> str:
        return keys.prefix_of(self._name)

    def key_for(self, record_id: str) -> str:
        return keys.key_of(self._name, keys.validate_id(record_id, self._name))

    # --- CRUD ---

    async def create(self, data: Mapping[str, Any]) -> Record:
        """
        Create a new record. The id is caller-supplied and must be unused.

        Raises:
            InvalidData: data is not a mapping or has no valid id
            RecordAlreadyExists: a record with this id is already stored
        """
        if not isinstance(data, Mapping):
            raise InvalidData("Record data must be a mapping", model=self._name)
        record_id = data.get(ID_FIELD)
        if not isinstance(record_id, str) or not record_id:
            raise InvalidData("Record must have a valid string ID", model=self._name)
        keys.validate_id(record_id, self._name)
        key = keys.key_of(self._name, record_id)

        if await self._read(key, record_id) is not None:
            raise RecordAlreadyExists(
                f"Record with ID '{record_id}' already exists in model '{self._name}'",
                model=self._name,
                record_id=record_id,
            )

        now = codec.utcnow()
        record: Record = {**data, CREATED_AT: now, UPDATED_AT: now}
        await self._write(key, record)

        logger.info(f"Created {self._name}/{record_id}")
        return record

    async def find_one(self, record_id: str) -> Optional[Record]:
        """Return the record, or None if it does not exist."""
        record_id = keys.validate_id(record_id, self._name)
        return await self._read(keys.key_of(self._name, record_id), record_id)

    async def find_many(
        self,
        options: Union[FindManyOptions, Mapping[str, Any], None] = None,
        *,
        where: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Record]:
        """
        List every record of this model, then filter and paginate in memory.

        Options can be passed as a FindManyOptions, a plain dict with the same
        keys, or as keyword arguments, but not both at once. `where` keeps records whose fields all
        equal the given values; `offset` is applied before `limit`. Results
        follow the storage backend's listing order.
        """
        options = _coerce_options(options, where, limit, offset)

        listed = await self._list()
        records: list[Record] = []
        for key in listed:
            record_id = keys.id_from_key(self._name, key)
            if record_id is None:
                continue
            record = await self._read(key, record_id)
            if record is None:
                logger.warning(f"Skipping {key}: removed after listing")
                continue
            records.append(record)

        if options.where:
            records = [r for r in records if _matches(r, options.where)]

        if options.offset is not None:
            records = records[options.offset:]
        if options.limit is not None:
            records = records[:options.limit]

        logger.debug(
            f"find_many on '{self._name}': {len(listed)} keys listed, {len(records)} returned"
        )
        return records

    async def update(self, record_id: str, data: Mapping[str, Any]) -> Record:
        """
        Shallow-merge `data` over the stored record and write it back.

        id and createdAt are kept from the stored record whatever `data`
        says; updatedAt is set to now.

        Raises:
            InvalidData: invalid id, or data is not a mapping
            RecordNotFound: no record with this id
        """
        record_id = keys.validate_id(record_id, self._name)
        if not isinstance(data, Mapping):
            raise InvalidData(
                "Update data must be a mapping", model=self._name, record_id=record_id
            )
        key = keys.key_of(self._name, record_id)

        existing = await self._read(key, record_id)
        if existing is None:
            raise self._not_found(record_id)

        now = codec.utcnow()
        previous = existing.get(UPDATED_AT)
        if isinstance(previous, datetime) and now <= previous:
            # Keep updatedAt strictly increasing within one millisecond.
            now = previous + timedelta(milliseconds=1)

        record: Record = {
            **existing,
            **data,
            ID_FIELD: record_id,
            CREATED_AT: existing.get(CREATED_AT),
            UPDATED_AT: now,
        }
        await self._write(key, record)

        logger.info(f"Updated {self._name}/{record_id} ({', '.join(map(str, data)) or 'no fields'})")
        return record

    async def delete(self, record_id: str) -> None:
        """
        Delete a record.

        Raises:
            InvalidData: invalid id
            RecordNotFound: no record with this id
        """
        record_id = keys.validate_id(record_id, self._name)
        key = keys.key_of(self._name, record_id)

        if await self._read(key, record_id) is None:
            raise self._not_found(record_id)

        try:
            await self.storage.delete(key)
        except BucketORMError:
            raise
        except Exception as e:
            raise self._storage_error("delete", key, record_id, e) from e

        logger.info(f"Deleted {self._name}/{record_id}")

    # --- Helpers ---

    async def _read(self, key: str, record_id: str) -> Optional[Record]:
        try:
            data = await self.storage.download(key)
        except BucketORMError:
            raise
        except Exception as e:
            raise self._storage_error("read", key, record_id, e) from e

        if data is None:
            return None
        record = codec.decode(data, key=key)
        logger.debug(f"Read {key}")
        return record

    async def _write(self, key: str, record: Record) -> None:
        body = codec.encode(record)
        try:
            await self.storage.upload(key, body)
        except BucketORMError:
            raise
        except Exception as e:
            raise self._storage_error("write", key, record.get(ID_FIELD), e) from e

    async def _list(self) -> list[str]:
        try:
            return list(await self.storage.list_keys(self.prefix))
        except BucketORMError:
            raise
        except Exception as e:
            raise StorageError(
                f"Failed to list records for model '{self._name}': {e}",
                cause=e,
                key=self.prefix,
                model=self._name,
            ) from e

    def _not_found(self, record_id: str) -> RecordNotFound:
        return RecordNotFound(
            f"Record with ID '{record_id}' not found in model '{self._name}'",
            model=self._name,
            record_id=record_id,
        )

    def _storage_error(
        self, action: str, key: str, record_id: Optional[str], error: Exception
    ) -> StorageError:
        return StorageError(
            f"Failed to {action} record '{record_id}' of model '{self._name}': {error}",
            cause=error,
            key=key,
            model=self._name,
            record_id=record_id,
        )

    def __repr__(self) -> str:
        return f"BucketModel(name={self._name!r})"


def _coerce_options(
    options: Union[FindManyOptions, Mapping[str, Any], None],
    where: Optional[Mapping[str, Any]],
    limit: Optional[int],
    offset: Optional[int],
) -> FindManyOptions:
    keywords_given = where is not None or limit is not None or offset is not None
    if options is not None and keywords_given:
        raise InvalidData(
            "Pass find_many options either as one argument or as keywords, not both"
        )

    if options is None:
        options = FindManyOptions(where=dict(where or {}), limit=limit, offset=offset)
    elif isinstance(options, Mapping):
        unknown = set(options) - {"where", "limit", "offset"}
        if unknown:
            raise InvalidData(f"Unknown find_many options: {sorted(unknown)}")
        options = FindManyOptions(
            where=dict(options.get("where") or {}),
            limit=options.get("limit"),
            offset=options.get("offset"),
        )

    for label, value in (("limit", options.limit), ("offset", options.offset)):
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidData(f"{label} must be a non-negative integer, got {value!r}")
    return options


def _matches(record: Record, where: Mapping[str, Any]) -> bool:
    """Every field in `where` must be present and strictly equal."""
    for field_name, expected in where.items():
        if field_name not in record:
            return False
        if not _strict_equals(record[field_name], expected):
            return False
    return True


def _strict_equals(actual: Any, expected: Any) -> bool:
    # True == 1 in Python; a boolean only matches a boolean.
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is type(expected) and actual == expected
    return actual == expected
