"""JSON text serialization provider."""

from __future__ import annotations

import json

from core.constants import JSON_EXTENSION
from core.errors import TableVaultSerializationError
from core.types import TableSet
from serialization.base import StringSerializationProvider
from serialization.table_payload import table_set_from_payload, table_set_to_payload


class JsonSerializationProvider(StringSerializationProvider):
    """Serialize table sets as JSON documents."""

    extension = JSON_EXTENSION

    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def serialize(self, tables: TableSet) -> str:
        payload = table_set_to_payload(tables)
        return json.dumps(payload, indent=self._indent, sort_keys=True)

    def deserialize(self, payload: str) -> TableSet:
        if not payload.strip():
            return {}
        try:
            parsed = json.loads(payload)
        except json.JSONDecodeError as error:
            raise TableVaultSerializationError(
                f"Failed to parse JSON payload: {error.msg} at line {error.lineno}. "
                "Check that pipeline settings match the ones used to save."
            ) from error
        return table_set_from_payload(parsed)
