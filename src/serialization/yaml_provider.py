"""YAML text serialization provider."""

from __future__ import annotations

import yaml

from core.constants import YAML_EXTENSION
from core.errors import TableVaultSerializationError
from core.types import TableSet
from serialization.base import StringSerializationProvider
from serialization.table_payload import table_set_from_payload, table_set_to_payload


class YamlSerializationProvider(StringSerializationProvider):
    """Serialize table sets as YAML documents using safe dump/load."""

    extension = YAML_EXTENSION

    def serialize(self, tables: TableSet) -> str:
        payload = table_set_to_payload(tables)
        return yaml.safe_dump(payload, sort_keys=True, allow_unicode=True)

    def deserialize(self, payload: str) -> TableSet:
        if not payload.strip():
            return {}
        try:
            parsed = yaml.safe_load(payload)
        except yaml.YAMLError as error:
            raise TableVaultSerializationError(
                f"Failed to parse YAML payload: {error}. "
                "Check that pipeline settings match the ones used to save."
            ) from error
        return table_set_from_payload(parsed)
