"""Unit tests for pipeline resolution."""

from __future__ import annotations

from serialization.json_provider import JsonSerializationProvider
from serialization.pickle_provider import PickleSerializationProvider
from storage.memory_storage import MemoryBinaryStorage, MemoryStringStorage
from store.pipeline import BinaryPipeline, StringPipeline, resolve_pipeline
from transforms.post_process import PayloadTransforms


def test_text_serializer_with_text_storage_resolves_string_pipeline() -> None:
    """Matching text collaborators should resolve to the string pipeline."""
    pipeline = resolve_pipeline(JsonSerializationProvider(), MemoryStringStorage(), PayloadTransforms())

    assert isinstance(pipeline, StringPipeline)


def test_binary_serializer_with_binary_storage_resolves_binary_pipeline() -> None:
    """Matching binary collaborators should resolve to the binary pipeline."""
    pipeline = resolve_pipeline(
        PickleSerializationProvider(), MemoryBinaryStorage(), PayloadTransforms()
    )

    assert isinstance(pipeline, BinaryPipeline)


def test_mismatched_modalities_resolve_to_none() -> None:
    """A text serializer cannot feed binary storage."""
    pipeline = resolve_pipeline(JsonSerializationProvider(), MemoryBinaryStorage(), PayloadTransforms())

    assert pipeline is None


def test_pre_process_skips_empty_payload() -> None:
    """Empty storage should bypass decompression and decryption."""
    pipeline = resolve_pipeline(
        PickleSerializationProvider(),
        MemoryBinaryStorage(),
        PayloadTransforms.build(False, True, None),
    )

    assert pipeline is not None and pipeline.pre_process(b"") == b""
