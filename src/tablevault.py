"""Public SDK surface for TableVault.

This module provides a stable import path for library users.
It re-exports the engine, typed models, and pluggable collaborators.
"""

from __future__ import annotations

from core.config import VaultConfig
from core.errors import (
    TableVaultConfigError,
    TableVaultDependencyError,
    TableVaultEncryptionError,
    TableVaultError,
    TableVaultSerializationError,
    TableVaultStorageError,
    TableVaultStoreError,
    VersionDowngradeError,
)
from core.type_registry import register_type, resolve_type, type_key, unregister_type
from core.types import DataTable, PersistenceAction, PersistenceSettings, TableMetadata
from serialization.base import BinarySerializationProvider, StringSerializationProvider
from serialization.json_provider import JsonSerializationProvider
from serialization.pickle_provider import PickleSerializationProvider
from serialization.yaml_provider import YamlSerializationProvider
from storage.base import BinaryStorage, StringStorage
from storage.file_storage import FileBinaryStorage, FileStringStorage
from storage.memory_storage import MemoryBinaryStorage, MemoryStringStorage
from storage.s3_storage import S3BinaryStorage, S3StringStorage
from store.engine import PersistenceEngine
from store.lifecycle_hooks import PersistenceCallback
from store.vault_factory import open_file_vault, open_s3_vault
from transforms.compression import Compressor, GzipCompressor
from transforms.encryption import EncryptionProvider, FernetEncryptionProvider

__all__ = [
    "BinarySerializationProvider",
    "BinaryStorage",
    "Compressor",
    "DataTable",
    "EncryptionProvider",
    "FernetEncryptionProvider",
    "FileBinaryStorage",
    "FileStringStorage",
    "GzipCompressor",
    "JsonSerializationProvider",
    "MemoryBinaryStorage",
    "MemoryStringStorage",
    "PersistenceAction",
    "PersistenceCallback",
    "PersistenceEngine",
    "PersistenceSettings",
    "PickleSerializationProvider",
    "S3BinaryStorage",
    "S3StringStorage",
    "StringSerializationProvider",
    "StringStorage",
    "TableMetadata",
    "TableVaultConfigError",
    "TableVaultDependencyError",
    "TableVaultEncryptionError",
    "TableVaultError",
    "TableVaultSerializationError",
    "TableVaultStorageError",
    "TableVaultStoreError",
    "VaultConfig",
    "VersionDowngradeError",
    "YamlSerializationProvider",
    "open_file_vault",
    "open_s3_vault",
    "register_type",
    "resolve_type",
    "type_key",
    "unregister_type",
]
