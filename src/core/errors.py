"""TableVault exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class TableVaultError(Exception):
    """Base exception for all TableVault failures."""


class TableVaultConfigError(TableVaultError):
    """Raised for invalid runtime configuration."""


class TableVaultStoreError(TableVaultError):
    """Raised for persistence engine and table failures."""


class TableVaultSerializationError(TableVaultError):
    """Raised when a table set cannot be serialized or deserialized."""


class TableVaultStorageError(TableVaultError):
    """Raised for storage backend read and write failures."""


class TableVaultEncryptionError(TableVaultError):
    """Raised when a payload cannot be encrypted or decrypted."""


class TableVaultDependencyError(TableVaultError):
    """Raised when an optional runtime dependency is missing."""


class VersionDowngradeError(TableVaultStoreError):
    """Raised when a write asks for a table version below the current one."""

    def __init__(self, entry_type: type, requested_version: int, current_version: int) -> None:
        self.entry_type = entry_type
        self.requested_version = requested_version
        self.current_version = current_version
        super().__init__(
            f"Cannot downgrade table '{entry_type.__qualname__}' from version "
            f"{current_version} to {requested_version}. "
            "Pass a version greater than or equal to the current one."
        )
