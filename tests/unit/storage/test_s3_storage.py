"""Unit tests for S3 storage backends."""

from __future__ import annotations

import io
from typing import Any

import pytest

from core.config import VaultConfig
from core.errors import TableVaultStorageError
from storage.s3_storage import S3BinaryStorage, S3StringStorage


class _ClientError(Exception):
    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.response = {"Error": {"Code": code}}


class _FakeS3Client:
    def __init__(self, get_error: Exception | None = None) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self._get_error = get_error

    def put_object(self, Bucket: str, Key: str, Body: bytes) -> dict[str, Any]:
        self.objects[(Bucket, Key)] = Body
        return {}

    def get_object(self, Bucket: str, Key: str) -> dict[str, Any]:
        if self._get_error is not None:
            raise self._get_error
        if (Bucket, Key) not in self.objects:
            raise _ClientError("NoSuchKey")
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)])}


def _config(tmp_path) -> VaultConfig:
    return VaultConfig(data_root=tmp_path)


def test_s3_string_storage_writes_object(tmp_path) -> None:
    """Text payloads should be uploaded as utf-8 bytes under the key."""
    client = _FakeS3Client()
    storage = S3StringStorage("s3://vaults/app/state.json", _config(tmp_path), client)

    storage.save("{}")

    assert client.objects[("vaults", "app/state.json")] == b"{}"


def test_s3_missing_object_loads_as_empty(tmp_path) -> None:
    """An object that was never written should read as empty."""
    storage = S3BinaryStorage("s3://vaults/state.pkl", _config(tmp_path), _FakeS3Client())

    assert storage.load() == b""


def test_s3_binary_storage_round_trips(tmp_path) -> None:
    """Uploaded bytes should be downloaded unchanged."""
    storage = S3BinaryStorage("s3://vaults/state.pkl", _config(tmp_path), _FakeS3Client())
    storage.save(b"\x00\x01")

    assert storage.load() == b"\x00\x01"


def test_s3_access_errors_propagate_as_storage_errors(tmp_path) -> None:
    """Errors other than a missing key should surface."""
    client = _FakeS3Client(get_error=_ClientError("AccessDenied"))
    storage = S3BinaryStorage("s3://vaults/state.pkl", _config(tmp_path), client)

    with pytest.raises(TableVaultStorageError):
        storage.load()


def test_s3_string_storage_rejects_non_utf8_object(tmp_path) -> None:
    """Binary content in a text vault object should fail with a storage error."""
    client = _FakeS3Client()
    client.objects[("vaults", "state.json")] = b"\xff\xfe\xfa"
    storage = S3StringStorage("s3://vaults/state.json", _config(tmp_path), client)

    with pytest.raises(TableVaultStorageError):
        storage.load()
