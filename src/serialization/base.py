"""Serialization provider capabilities.

The engine matches exactly one text or binary provider with a storage
backend of the same modality, so the two capabilities are distinct
base classes rather than one structural protocol.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from core.types import TableSet


class StringSerializationProvider(ABC):
    """Provider producing a text representation of a table set."""

    extension: str = "txt"

    @abstractmethod
    def serialize(self, tables: TableSet) -> str:
        """Serialize the full table set to text."""

    @abstractmethod
    def deserialize(self, payload: str) -> TableSet:
        """Rebuild a table set from text. Empty text yields an empty set."""


class BinarySerializationProvider(ABC):
    """Provider producing a binary representation of a table set."""

    extension: str = "bin"

    @abstractmethod
    def serialize(self, tables: TableSet) -> bytes:
        """Serialize the full table set to bytes."""

    @abstractmethod
    def deserialize(self, payload: bytes) -> TableSet:
        """Rebuild a table set from bytes. Empty bytes yield an empty set."""
