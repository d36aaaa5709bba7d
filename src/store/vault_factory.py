"""Engine construction from runtime configuration.

This module maps a serialization format name onto a provider, picks a
storage backend of the matching modality, and wires the optional Fernet
provider from the configured key.
"""

from __future__ import annotations

from typing import Any

from core.config import VaultConfig
from core.constants import (
    DEFAULT_SERIALIZATION_FORMAT,
    DEFAULT_STORE_NAME,
    SUPPORTED_SERIALIZATION_FORMATS,
)
from core.errors import TableVaultConfigError
from serialization.base import BinarySerializationProvider, StringSerializationProvider
from serialization.json_provider import JsonSerializationProvider
from serialization.pickle_provider import PickleSerializationProvider
from serialization.yaml_provider import YamlSerializationProvider
from storage.file_storage import FileBinaryStorage, FileStringStorage
from storage.s3_storage import S3BinaryStorage, S3StringStorage
from store.engine import PersistenceEngine
from transforms.encryption import FernetEncryptionProvider


def build_serializer(
    serialization: str,
) -> StringSerializationProvider | BinarySerializationProvider:
    """Build a serialization provider by format name.

    Args:
        serialization: One of ``json``, ``yaml``, ``pickle``.

    Returns:
        Provider instance.

    Raises:
        TableVaultConfigError: If the format is unsupported.
    """
    normalized = serialization.lower().strip()
    if normalized == "json":
        return JsonSerializationProvider()
    if normalized == "yaml":
        return YamlSerializationProvider()
    if normalized == "pickle":
        return PickleSerializationProvider()
    supported = ", ".join(SUPPORTED_SERIALIZATION_FORMATS)
    raise TableVaultConfigError(
        f"Unsupported serialization format '{serialization}'. Choose one of: {supported}."
    )


def build_encryption(config: VaultConfig) -> FernetEncryptionProvider | None:
    """Build the Fernet provider when encryption is enabled.

    Raises:
        TableVaultConfigError: If encryption is enabled without a key.
    """
    if not config.encryption_enabled:
        return None
    if not config.encryption_key:
        raise TableVaultConfigError(
            "Encryption is enabled but TABLEVAULT_ENCRYPTION_KEY is not set. "
            "Set a Fernet key or disable TABLEVAULT_ENCRYPTION_ENABLED."
        )
    return FernetEncryptionProvider(config.encryption_key)


def open_file_vault(
    config: VaultConfig | None = None,
    name: str = DEFAULT_STORE_NAME,
    serialization: str = DEFAULT_SERIALIZATION_FORMAT,
) -> PersistenceEngine:
    """Open a vault stored in one file under the configured data root.

    Args:
        config: Runtime configuration; read from environment when omitted.
        name: Vault file stem.
        serialization: Serialization format name.

    Returns:
        Engine with stored tables already loaded.
    """
    resolved_config = config or VaultConfig.from_env()
    serializer = build_serializer(serialization)
    path = resolved_config.data_root / f"{name}.{serializer.extension}"
    storage: FileStringStorage | FileBinaryStorage
    if isinstance(serializer, StringSerializationProvider):
        storage = FileStringStorage(path)
    else:
        storage = FileBinaryStorage(path)
    return PersistenceEngine(
        storage=storage,
        serializer=serializer,
        encryption=build_encryption(resolved_config),
        settings=resolved_config.settings(),
    )


def open_s3_vault(
    uri: str,
    config: VaultConfig | None = None,
    serialization: str = DEFAULT_SERIALIZATION_FORMAT,
    s3_client: Any | None = None,
) -> PersistenceEngine:
    """Open a vault stored in one S3 object.

    Args:
        uri: Object location in ``s3://bucket/key`` form.
        config: Runtime configuration; read from environment when omitted.
        serialization: Serialization format name.
        s3_client: Optional preconfigured boto3-compatible client.

    Returns:
        Engine with stored tables already loaded.
    """
    resolved_config = config or VaultConfig.from_env()
    serializer = build_serializer(serialization)
    storage: S3StringStorage | S3BinaryStorage
    if isinstance(serializer, StringSerializationProvider):
        storage = S3StringStorage(uri, resolved_config, s3_client)
    else:
        storage = S3BinaryStorage(uri, resolved_config, s3_client)
    return PersistenceEngine(
        storage=storage,
        serializer=serializer,
        encryption=build_encryption(resolved_config),
        settings=resolved_config.settings(),
    )
