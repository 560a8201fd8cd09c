"""
Storage adapter tests.

Verifies each adapter honours the StorageAdapter contract:
- download returns None for missing keys, never raises
- list_keys returns full keys under a prefix, lexicographic for local adapters
- backend failures surface as StorageError with the original cause
"""

import io
import sys
import uuid
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bucketorm.core.model import BucketModel
from bucketorm.errors.exceptions import StorageError
from bucketorm.models.config import StoreConfig
from adapters.aws.s3_storage import S3StorageAdapter
from adapters.local.file_storage import FileStorage
from adapters.local.memory_storage import MemoryStorage


def _client_error(code: str, operation: str = "GetObject", status: int = 400) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} raised by test"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


# --- Fixtures ---


@pytest.fixture(params=["memory", "file"])
def local_storage(request, tmp_path):
    if request.param == "memory":
        return MemoryStorage()
    return FileStorage(str(tmp_path / "objects"))


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def s3(s3_client):
    return S3StorageAdapter(StoreConfig(bucket="test-bucket"), client=s3_client)


# --- Local adapters ---


async def test_local_round_trip(local_storage):
    await local_storage.upload("user/alice.json", b'{"id": "alice"}')

    assert await local_storage.download("user/alice.json") == b'{"id": "alice"}'


async def test_local_missing_key_is_none(local_storage):
    assert await local_storage.download("user/ghost.json") is None


async def test_local_upload_overwrites(local_storage):
    await local_storage.upload("user/a.json", b"1")
    await local_storage.upload("user/a.json", b"2")

    assert await local_storage.download("user/a.json") == b"2"
    assert await local_storage.list_keys("user/") == ["user/a.json"]


async def test_local_list_keys_by_prefix(local_storage):
    for key in ["user/b.json", "user/a.json", "post/x.json", "users/c.json"]:
        await local_storage.upload(key, b"{}")

    assert await local_storage.list_keys("user/") == ["user/a.json", "user/b.json"]
    assert await local_storage.list_keys() == [
        "post/x.json", "user/a.json", "user/b.json", "users/c.json",
    ]


async def test_local_delete_is_idempotent(local_storage):
    await local_storage.upload("user/a.json", b"{}")

    await local_storage.delete("user/a.json")
    await local_storage.delete("user/a.json")

    assert await local_storage.download("user/a.json") is None
    assert await local_storage.list_keys("user/") == []


@pytest.mark.parametrize("key", ["../escape.json", "user/../../x.json", "/abs.json", "user//a.json"])
async def test_file_storage_rejects_unsafe_keys(tmp_path, key):
    storage = FileStorage(str(tmp_path / "objects"))

    with pytest.raises(StorageError):
        await storage.upload(key, b"{}")
    assert not (tmp_path / "escape.json").exists()


async def test_file_storage_hides_temp_files(tmp_path):
    storage = FileStorage(str(tmp_path))
    await storage.upload("user/a.json", b"{}")
    (tmp_path / "user" / f".a.json.{uuid.uuid4().hex}.tmp").write_bytes(b"partial")

    assert await storage.list_keys("user/") == ["user/a.json"]


async def test_file_storage_lists_dot_prefixed_keys(tmp_path):
    storage = FileStorage(str(tmp_path))
    await storage.upload("user/.alice.json", b"{}")
    await storage.upload("user/bob.json", b"{}")

    assert await storage.list_keys("user/") == ["user/.alice.json", "user/bob.json"]


async def test_file_storage_find_many_sees_dot_prefixed_ids(tmp_path):
    users = BucketModel("user", FileStorage(str(tmp_path)))
    await users.create({"id": ".alice"})
    await users.create({"id": "bob"})

    assert await users.find_one(".alice") is not None
    assert [r["id"] for r in await users.find_many()] == [".alice", "bob"]


# --- S3 adapter ---


async def test_s3_upload_puts_json_object(s3, s3_client):
    await s3.upload("user/alice.json", b"{}")

    s3_client.put_object.assert_called_once_with(
        Bucket="test-bucket",
        Key="user/alice.json",
        Body=b"{}",
        ContentType="application/json",
    )


async def test_s3_download_reads_body(s3, s3_client):
    s3_client.get_object.return_value = {"Body": io.BytesIO(b'{"id": "a"}')}

    assert await s3.download("user/a.json") == b'{"id": "a"}'
    s3_client.get_object.assert_called_once_with(Bucket="test-bucket", Key="user/a.json")


@pytest.mark.parametrize("code", ["NoSuchKey", "404", "NotFound"])
async def test_s3_download_missing_key_is_none(s3, s3_client, code):
    s3_client.get_object.side_effect = _client_error(code, status=404)

    assert await s3.download("user/ghost.json") is None


async def test_s3_download_access_denied_raises(s3, s3_client):
    error = _client_error("AccessDenied", status=403)
    s3_client.get_object.side_effect = error

    with pytest.raises(StorageError) as exc_info:
        await s3.download("user/a.json")

    assert exc_info.value.cause is error
    assert exc_info.value.error_code == "S3_ACCESS_DENIED"
    assert exc_info.value.key == "user/a.json"
    assert "s3://test-bucket/user/a.json" in exc_info.value.message


async def test_s3_upload_endpoint_unreachable(s3, s3_client):
    s3_client.put_object.side_effect = EndpointConnectionError(
        endpoint_url="http://localhost:9000/test-bucket/user/a.json"
    )

    with pytest.raises(StorageError) as exc_info:
        await s3.upload("user/a.json", b"{}")

    assert exc_info.value.error_code == "S3_ENDPOINT_UNREACHABLE"


async def test_s3_delete(s3, s3_client):
    await s3.delete("user/a.json")

    s3_client.delete_object.assert_called_once_with(Bucket="test-bucket", Key="user/a.json")


async def test_s3_delete_no_such_bucket(s3, s3_client):
    s3_client.delete_object.side_effect = _client_error("NoSuchBucket", "DeleteObject", 404)

    with pytest.raises(StorageError) as exc_info:
        await s3.delete("user/a.json")
    assert exc_info.value.error_code == "S3_NO_SUCH_BUCKET"


async def test_s3_list_keys_pages_through_results(s3, s3_client):
    paginator = MagicMock()
    paginator.paginate.return_value = [
        {"Contents": [{"Key": "user/a.json"}, {"Key": "user/b.json"}]},
        {"Contents": [{"Key": "user/c.json"}]},
        {},
    ]
    s3_client.get_paginator.return_value = paginator

    keys = await s3.list_keys("user/")

    assert keys == ["user/a.json", "user/b.json", "user/c.json"]
    s3_client.get_paginator.assert_called_once_with("list_objects_v2")
    paginator.paginate.assert_called_once_with(Bucket="test-bucket", Prefix="user/")


async def test_s3_list_keys_failure(s3, s3_client):
    paginator = MagicMock()
    paginator.paginate.side_effect = _client_error("SlowDown", "ListObjectsV2", 503)
    s3_client.get_paginator.return_value = paginator

    with pytest.raises(StorageError) as exc_info:
        await s3.list_keys("user/")
    assert exc_info.value.error_code == "S3_THROTTLED"


def test_s3_requires_bucket():
    with pytest.raises(ValueError):
        S3StorageAdapter(StoreConfig(bucket=""))


def test_s3_client_configuration(monkeypatch):
    captured = {}

    def fake_client(service, **kwargs):
        captured["service"] = service
        captured.update(kwargs)
        return MagicMock()

    monkeypatch.setattr("adapters.aws.s3_storage.boto3.client", fake_client)

    S3StorageAdapter(StoreConfig(
        bucket="b",
        region="eu-central-1",
        access_key_id="minio",
        secret_access_key="minio123",
        endpoint="http://localhost:9000",
        force_path_style=True,
        request_timeout_s=7,
    ))

    assert captured["service"] == "s3"
    assert captured["region_name"] == "eu-central-1"
    assert captured["endpoint_url"] == "http://localhost:9000"
    assert captured["aws_access_key_id"] == "minio"
    assert captured["aws_secret_access_key"] == "minio123"
    assert captured["config"].s3 == {"addressing_style": "path"}
    assert captured["config"].connect_timeout == 7


def test_s3_client_uses_default_credential_chain(monkeypatch):
    captured = {}
    monkeypatch.setattr(
        "adapters.aws.s3_storage.boto3.client",
        lambda service, **kwargs: captured.update(kwargs) or MagicMock(),
    )

    S3StorageAdapter(StoreConfig(bucket="b"))

    assert "aws_access_key_id" not in captured
    assert "endpoint_url" not in captured
