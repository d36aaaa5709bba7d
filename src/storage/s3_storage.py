"""S3 object storage backends.

This module keeps one vault payload per S3 object. It encapsulates
boto3 client creation so callers only pass an ``s3://bucket/key`` URI.
"""

from __future__ import annotations

from typing import Any

from core.config import VaultConfig
from core.constants import TEXT_ENCODING
from core.errors import TableVaultDependencyError, TableVaultStorageError
from core.logging_config import get_logger
from core.s3_uri import S3Location, parse_s3_uri
from storage.base import BinaryStorage, StringStorage

_LOGGER = get_logger(__name__)
_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def create_s3_client(config: VaultConfig) -> Any:
    """Create boto3 S3 client for vault storage.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 S3 client.

    Raises:
        TableVaultDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise TableVaultDependencyError(
            "S3 storage requires boto3, but it is not installed. "
            "Install boto3 to store vaults at s3:// locations."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


class S3BinaryStorage(BinaryStorage):
    """Binary payload stored as one S3 object."""

    def __init__(self, uri: str, config: VaultConfig, s3_client: Any | None = None) -> None:
        """Initialize storage for an object URI.

        Args:
            uri: Object location in ``s3://bucket/key`` form.
            config: Runtime config used to build a client when none is given.
            s3_client: Optional preconfigured boto3-compatible client.
        """
        self._location = parse_s3_uri(uri)
        self._client = s3_client if s3_client is not None else create_s3_client(config)

    def save(self, payload: bytes) -> None:
        _put_object(self._client, self._location, payload)

    def load(self) -> bytes:
        return _get_object(self._client, self._location)


class S3StringStorage(StringStorage):
    """Text payload stored as one utf-8 S3 object."""

    def __init__(self, uri: str, config: VaultConfig, s3_client: Any | None = None) -> None:
        self._location = parse_s3_uri(uri)
        self._client = s3_client if s3_client is not None else create_s3_client(config)

    def save(self, payload: str) -> None:
        _put_object(self._client, self._location, payload.encode(TEXT_ENCODING))

    def load(self) -> str:
        raw_bytes = _get_object(self._client, self._location)
        try:
            return raw_bytes.decode(TEXT_ENCODING)
        except UnicodeDecodeError as error:
            raise TableVaultStorageError(
                f"Stored object s3://{self._location.bucket}/{self._location.key} is not valid "
                f"{TEXT_ENCODING} text: {error}. Use a binary backend for binary serializers."
            ) from error


def _put_object(s3_client: Any, location: S3Location, payload: bytes) -> None:
    """Upload payload bytes to S3.

    Raises:
        TableVaultStorageError: If upload fails.
    """
    try:
        s3_client.put_object(Bucket=location.bucket, Key=location.key, Body=payload)
    except Exception as error:
        raise TableVaultStorageError(
            f"Failed to write vault object s3://{location.bucket}/{location.key}: {error}. "
            "Check AWS credentials and retry the save."
        ) from error
    _LOGGER.info(
        "storage_written",
        bucket=location.bucket,
        key=location.key,
        size_bytes=len(payload),
    )


def _get_object(s3_client: Any, location: S3Location) -> bytes:
    """Download payload bytes from S3, treating a missing object as empty.

    Raises:
        TableVaultStorageError: If download fails for another reason.
    """
    try:
        response = s3_client.get_object(Bucket=location.bucket, Key=location.key)
        return bytes(response["Body"].read())
    except Exception as error:
        if _is_missing_object(error):
            return b""
        raise TableVaultStorageError(
            f"Failed to read vault object s3://{location.bucket}/{location.key}: {error}. "
            "Check AWS credentials and bucket permissions."
        ) from error


def _is_missing_object(error: Exception) -> bool:
    response = getattr(error, "response", None)
    if not isinstance(response, dict):
        return False
    code = str(response.get("Error", {}).get("Code", ""))
    return code in _MISSING_OBJECT_CODES
