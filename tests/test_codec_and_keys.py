"""
Record codec and key scheme tests.

Verifies that:
- Timestamps survive encode/decode as the same instant
- Only createdAt/updatedAt are revived; other fields pass through
- Unparseable bytes raise CorruptData
- Keys map (model, id) -> <model>/<id>.json and back
"""

import json
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bucketorm.core import codec, keys
from bucketorm.errors.exceptions import CorruptData, InvalidData


# --- Codec ---


def test_round_trip_preserves_record():
    now = codec.utcnow()
    record = {
        "id": "alice",
        "name": "Alice",
        "age": 30,
        "score": 9.5,
        "active": True,
        "tags": ["a", "b"],
        "address": {"city": "Lisbon"},
        "nickname": None,
        "createdAt": now,
        "updatedAt": now,
    }

    assert codec.decode(codec.encode(record)) == record


def test_encode_writes_iso_utc_strings():
    ts = datetime(2025, 3, 4, 5, 6, 7, 891000, tzinfo=timezone.utc)

    body = json.loads(codec.encode({"id": "a", "createdAt": ts, "updatedAt": ts}))

    assert body["createdAt"] == "2025-03-04T05:06:07.891Z"
    assert body["updatedAt"] == "2025-03-04T05:06:07.891Z"


def test_encode_is_utf8_json():
    body = codec.encode({"id": "a", "name": "Zoë"})

    assert "Zoë".encode("utf-8") in body
    assert json.loads(body.decode("utf-8"))["name"] == "Zoë"


def test_decode_normalizes_offsets_to_same_instant():
    record = codec.decode(b'{"id": "a", "createdAt": "2025-01-01T02:00:00.000+02:00"}')

    assert record["createdAt"] == datetime(2025, 1, 1, tzinfo=timezone.utc)


def test_decode_reads_original_format():
    record = codec.decode(
        b'{"id": "a", "createdAt": "2024-06-01T12:00:00.123Z", "updatedAt": "2024-06-02T12:00:00.000Z"}'
    )

    assert record["createdAt"] == datetime(2024, 6, 1, 12, 0, 0, 123000, tzinfo=timezone.utc)
    assert record["updatedAt"] - record["createdAt"] == timedelta(days=1, microseconds=-123000)


def test_decode_leaves_other_fields_alone():
    ts = datetime(2025, 1, 1, tzinfo=timezone.utc)

    record = codec.decode(codec.encode({"id": "a", "birthday": date(2000, 5, 17), "seenAt": ts}))

    assert record["birthday"] == "2000-05-17"
    assert record["seenAt"] == "2025-01-01T00:00:00.000Z"


def test_naive_timestamps_are_treated_as_utc():
    body = json.loads(codec.encode({"id": "a", "createdAt": datetime(2025, 1, 1, 12, 0)}))

    assert body["createdAt"] == "2025-01-01T12:00:00.000Z"


def test_utcnow_has_millisecond_precision():
    now = codec.utcnow()

    assert now.tzinfo is not None
    assert now.microsecond % 1000 == 0


@pytest.mark.parametrize("data", [b"{not json", b"", b"\xff\xfe\x00", b"[1, 2, 3]", b'"text"'])
def test_decode_rejects_corrupt_bytes(data):
    with pytest.raises(CorruptData):
        codec.decode(data, key="user/a.json")


def test_decode_rejects_invalid_timestamp():
    with pytest.raises(CorruptData) as exc_info:
        codec.decode(b'{"id": "a", "createdAt": "yesterday"}', key="user/a.json")
    assert "createdAt" in exc_info.value.message


def test_encode_rejects_unserializable():
    with pytest.raises(InvalidData):
        codec.encode({"id": "a", "value": {1, 2}})


# --- Keys ---


def test_key_of_and_prefix_of():
    assert keys.key_of("user", "alice") == "user/alice.json"
    assert keys.prefix_of("user") == "user/"


def test_id_from_key_inverts_key_of():
    assert keys.id_from_key("user", keys.key_of("user", "alice.smith")) == "alice.smith"


@pytest.mark.parametrize("key", [
    "user/readme.txt",
    "users/alice.json",
    "user/.json",
    "user/nested/alice.json",
    "post/alice.json",
])
def test_id_from_key_ignores_foreign_keys(key):
    assert keys.id_from_key("user", key) is None


def test_distinct_pairs_give_distinct_keys():
    pairs = [("user", "a"), ("users", "a"), ("user", "a.json"), ("user.json", "a")]

    generated = {keys.key_of(model, record_id) for model, record_id in pairs}

    assert len(generated) == len(pairs)


@pytest.mark.parametrize("record_id", ["", None, 7, "a/b", "/"])
def test_validate_id_rejects(record_id):
    with pytest.raises(InvalidData):
        keys.validate_id(record_id, "user")


@pytest.mark.parametrize("name", ["", "a/b", None])
def test_validate_model_name_rejects(name):
    with pytest.raises(ValueError):
        keys.validate_model_name(name)
