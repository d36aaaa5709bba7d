"""Save/load pipeline variants.

This module pairs a serialization provider with a storage backend of the
same modality and the active payload transforms. The pairing is resolved
once per engine; a mismatched pair resolves to no pipeline at all.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from core.types import TableSet
from serialization.base import BinarySerializationProvider, StringSerializationProvider
from storage.base import BinaryStorage, StringStorage
from transforms.post_process import (
    PayloadTransforms,
    load_pre_process_binary,
    load_pre_process_text,
    save_post_process_binary,
    save_post_process_text,
)


class VaultPipeline(ABC):
    """Ordered serialize/transform/store stages for one modality."""

    modality: str = ""

    def __init__(self, serializer: Any, storage: Any, transforms: PayloadTransforms) -> None:
        self.serializer = serializer
        self.storage = storage
        self.transforms = transforms

    def serialize(self, tables: TableSet) -> Any:
        """Serialize the table set into its wire representation."""
        return self.serializer.serialize(tables)

    def deserialize(self, payload: Any) -> TableSet:
        """Rebuild a table set from a pre-processed payload."""
        return self.serializer.deserialize(payload)

    def write(self, payload: Any) -> None:
        self.storage.save(payload)

    def read(self) -> Any:
        return self.storage.load()

    async def write_async(self, payload: Any) -> None:
        await self.storage.save_async(payload)

    async def read_async(self) -> Any:
        return await self.storage.load_async()

    def pre_process(self, payload: Any) -> Any:
        """Undo save transforms; an empty payload means nothing was stored."""
        if not payload:
            return payload
        return self._pre_process(payload)

    @abstractmethod
    def post_process(self, payload: Any) -> Any:
        """Apply save transforms to a serialized payload."""

    @abstractmethod
    def _pre_process(self, payload: Any) -> Any:
        """Undo save transforms on a non-empty payload."""


class StringPipeline(VaultPipeline):
    """Text serializer paired with text storage."""

    modality = "string"

    def post_process(self, payload: str) -> str:
        return save_post_process_text(payload, self.transforms)

    def _pre_process(self, payload: str) -> str:
        return load_pre_process_text(payload, self.transforms)


class BinaryPipeline(VaultPipeline):
    """Binary serializer paired with binary storage."""

    modality = "binary"

    def post_process(self, payload: bytes) -> bytes:
        return save_post_process_binary(payload, self.transforms)

    def _pre_process(self, payload: bytes) -> bytes:
        return load_pre_process_binary(payload, self.transforms)


def resolve_pipeline(
    serializer: object,
    storage: object,
    transforms: PayloadTransforms,
) -> VaultPipeline | None:
    """Pick the pipeline both collaborators support.

    Text is checked before binary. Returns None when neither modality is
    implemented by both the serializer and the storage backend.
    """
    if isinstance(serializer, StringSerializationProvider) and isinstance(storage, StringStorage):
        return StringPipeline(serializer, storage, transforms)
    if isinstance(serializer, BinarySerializationProvider) and isinstance(storage, BinaryStorage):
        return BinaryPipeline(serializer, storage, transforms)
    return None
