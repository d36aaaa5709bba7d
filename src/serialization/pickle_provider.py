"""Pickle binary serialization provider.

Pickle persists values exactly, including classes the text codec does
not support, but only loads payloads from trusted storage.
"""

from __future__ import annotations

import pickle

from core.constants import PICKLE_EXTENSION
from core.errors import TableVaultSerializationError
from core.types import TableSet
from serialization.base import BinarySerializationProvider


class PickleSerializationProvider(BinarySerializationProvider):
    """Serialize table sets with the pickle protocol."""

    extension = PICKLE_EXTENSION

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self._protocol = protocol

    def serialize(self, tables: TableSet) -> bytes:
        try:
            return pickle.dumps(tables, protocol=self._protocol)
        except (pickle.PicklingError, AttributeError, TypeError) as error:
            raise TableVaultSerializationError(
                f"Failed to pickle table set: {error}. "
                "Stored values must be defined at module level."
            ) from error

    def deserialize(self, payload: bytes) -> TableSet:
        if not payload:
            return {}
        try:
            tables = pickle.loads(payload)
        except (pickle.UnpicklingError, AttributeError, EOFError, ImportError) as error:
            raise TableVaultSerializationError(
                f"Failed to unpickle table set: {error}. "
                "Check that pipeline settings match the ones used to save."
            ) from error
        if not isinstance(tables, dict):
            raise TableVaultSerializationError(
                "Invalid pickle payload: expected a table set mapping."
            )
        return tables
