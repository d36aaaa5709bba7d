"""Shared payload layout for text serialization providers.

This module centralizes the table-set to dictionary conversion.
It is reused by the JSON and YAML providers so both formats persist
identical structures.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from core.constants import TABLE_PAYLOAD_FORMAT_VERSION
from core.errors import TableVaultSerializationError
from core.type_registry import resolve_type, type_key
from core.types import DataTable, TableSet
from serialization.value_codec import decode_value, encode_value


def table_set_to_payload(tables: TableSet) -> dict[str, Any]:
    """Serialize a table set into a format-neutral payload.

    Args:
        tables: Engine table set.

    Returns:
        Dictionary payload made of native scalars, lists, and dicts.
    """
    return {
        "format_version": TABLE_PAYLOAD_FORMAT_VERSION,
        "tables": [_table_to_payload(table) for table in tables.values()],
    }


def table_set_from_payload(payload: Any) -> TableSet:
    """Deserialize a payload produced by ``table_set_to_payload``.

    Args:
        payload: Parsed payload.

    Returns:
        Reconstructed table set.

    Raises:
        TableVaultSerializationError: If the payload layout is invalid.
    """
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise TableVaultSerializationError(
            "Invalid table payload: expected a mapping at top level. "
            "The stored data was not written by TableVault."
        )
    format_version = payload.get("format_version")
    if format_version != TABLE_PAYLOAD_FORMAT_VERSION:
        raise TableVaultSerializationError(
            f"Unsupported table payload format version {format_version!r}; "
            f"expected {TABLE_PAYLOAD_FORMAT_VERSION}."
        )
    tables: TableSet = {}
    for table_payload in payload.get("tables") or []:
        table = _table_from_payload(table_payload)
        tables[table.entry_type] = table
    return tables


def _table_to_payload(table: DataTable) -> dict[str, Any]:
    return {
        "type": _loadable_type_key(table.entry_type),
        "version": table.version,
        "revision": table.revision,
        "timestamp": table.timestamp.isoformat(),
        "entries": {entry_id: encode_value(value) for entry_id, value in table.entries.items()},
    }


def _loadable_type_key(entry_type: type) -> str:
    """Return the key for a table type, refusing keys that cannot be loaded back.

    Raises:
        TableVaultSerializationError: If the key does not resolve to ``entry_type``.
    """
    key = type_key(entry_type)
    if resolve_type(key) is not entry_type:
        raise TableVaultSerializationError(
            f"Type key '{key}' resolves to a different class than "
            f"'{entry_type.__qualname__}'. Register the type with an explicit key."
        )
    return key


def _table_from_payload(payload: Any) -> DataTable:
    if not isinstance(payload, dict):
        raise TableVaultSerializationError(
            "Invalid table payload: expected each table to be a mapping."
        )
    try:
        entries = dict(payload.get("entries") or {})
        return DataTable(
            entry_type=resolve_type(str(payload["type"])),
            version=int(payload["version"]),
            revision=int(payload["revision"]),
            timestamp=datetime.fromisoformat(str(payload["timestamp"])),
            entries={str(entry_id): decode_value(value) for entry_id, value in entries.items()},
        )
    except (KeyError, TypeError, ValueError) as error:
        raise TableVaultSerializationError(
            f"Invalid table payload: {error}. The stored data is incomplete or corrupted."
        ) from error
