"""
Record codec.

Records are stored as UTF-8 JSON, pretty-printed, with timestamps as
ISO-8601 UTC strings at millisecond precision ("2025-01-01T00:00:00.000Z").
On decode only createdAt/updatedAt are turned back into datetimes; every
other field passes through as parsed.
"""

import json
from datetime import date, datetime, timezone
from typing import Any, Optional

from bucketorm.errors.exceptions import CorruptData, InvalidData
from bucketorm.models.record import Record, TIMESTAMP_FIELDS


def utcnow() -> datetime:
    """Current UTC time truncated to what the codec can store."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode(record: Record) -> bytes:
    try:
        text = json.dumps(record, indent=2, ensure_ascii=False, default=_json_default)
    except (TypeError, ValueError) as e:
        raise InvalidData(
            f"Record is not JSON serializable: {e}",
            record_id=record.get("id") if isinstance(record, dict) else None,
        ) from e
    return text.encode("utf-8")


def decode(data: bytes, key: Optional[str] = None) -> Record:
    where = f" at '{key}'" if key else ""
    try:
        record = json.loads(data)
    except (UnicodeDecodeError, ValueError) as e:
        raise CorruptData(f"Stored object{where} is not valid JSON: {e}", key=key) from e

    if not isinstance(record, dict):
        raise CorruptData(
            f"Stored object{where} is not a JSON object (got {type(record).__name__})",
            key=key,
        )

    for field_name in TIMESTAMP_FIELDS:
        value = record.get(field_name)
        if isinstance(value, str):
            try:
                record[field_name] = parse_timestamp(value)
            except ValueError as e:
                raise CorruptData(
                    f"Stored object{where} has an invalid {field_name}: {value!r}",
                    key=key,
                ) from e

    return record
