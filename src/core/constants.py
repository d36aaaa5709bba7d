"""Core constants used across TableVault modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

EMPTY_ID = ""
INITIAL_TABLE_VERSION = 0
MISSING_METADATA_VALUE = -1
MISSING_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)
DEFAULT_DATA_ROOT = Path(".tablevault")
DEFAULT_STORE_NAME = "vault"
DEFAULT_SERIALIZATION_FORMAT = "json"
SUPPORTED_SERIALIZATION_FORMATS = ("json", "yaml", "pickle")
JSON_EXTENSION = "json"
YAML_EXTENSION = "yaml"
PICKLE_EXTENSION = "pkl"
TABLE_PAYLOAD_FORMAT_VERSION = 1
VALUE_KIND_KEY = "__kind__"
TEXT_ENCODING = "utf-8"
DEFAULT_COMPRESSION_LEVEL = 9
TEMP_FILE_SUFFIX = ".tmp"
ENV_DATA_ROOT = "TABLEVAULT_DATA_ROOT"
ENV_ENCRYPTION_ENABLED = "TABLEVAULT_ENCRYPTION_ENABLED"
ENV_COMPRESSION_ENABLED = "TABLEVAULT_COMPRESSION_ENABLED"
ENV_ENCRYPTION_KEY = "TABLEVAULT_ENCRYPTION_KEY"
ENV_S3_REGION = "TABLEVAULT_S3_REGION"
ENV_S3_PROFILE = "TABLEVAULT_S3_PROFILE"
ENV_LOG_LEVEL = "TABLEVAULT_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "info"
