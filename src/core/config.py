"""Runtime configuration model for TableVault.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    ENV_COMPRESSION_ENABLED,
    ENV_DATA_ROOT,
    ENV_ENCRYPTION_ENABLED,
    ENV_ENCRYPTION_KEY,
    ENV_S3_PROFILE,
    ENV_S3_REGION,
)
from core.errors import TableVaultConfigError
from core.types import PersistenceSettings

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class VaultConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for file-backed vaults.
        encryption_enabled: Whether saved payloads are encrypted.
        compression_enabled: Whether saved payloads are gzip-compressed.
        encryption_key: Optional Fernet key used by file-backed vaults.
        s3_region: Optional default AWS region for S3 storage.
        s3_profile: Optional AWS profile for boto3 session initialization.
    """

    data_root: Path
    encryption_enabled: bool = False
    compression_enabled: bool = False
    encryption_key: str | None = None
    s3_region: str | None = None
    s3_profile: str | None = None

    @classmethod
    def from_env(cls) -> "VaultConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            TableVaultConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv(ENV_DATA_ROOT, str(DEFAULT_DATA_ROOT))
        encryption_enabled = _parse_flag(ENV_ENCRYPTION_ENABLED, os.getenv(ENV_ENCRYPTION_ENABLED, ""))
        compression_enabled = _parse_flag(
            ENV_COMPRESSION_ENABLED, os.getenv(ENV_COMPRESSION_ENABLED, "")
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            encryption_enabled=encryption_enabled,
            compression_enabled=compression_enabled,
            encryption_key=os.getenv(ENV_ENCRYPTION_KEY) or None,
            s3_region=os.getenv(ENV_S3_REGION),
            s3_profile=os.getenv(ENV_S3_PROFILE),
        )

    def settings(self) -> PersistenceSettings:
        """Return the pipeline settings described by this config."""
        return PersistenceSettings(
            encryption_enabled=self.encryption_enabled,
            compression_enabled=self.compression_enabled,
        )


def _parse_flag(env_name: str, raw_value: str) -> bool:
    """Parse a boolean environment flag.

    Args:
        env_name: Environment variable name, used in error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed boolean value.

    Raises:
        TableVaultConfigError: If value is not a recognized boolean string.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise TableVaultConfigError(
        f"Invalid {env_name} value: expected a boolean, got '{raw_value}'. "
        f"Set {env_name} to one of 1/0, true/false, yes/no, on/off."
    )
