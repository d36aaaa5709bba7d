"""Unit tests for the public SDK import surface."""

from __future__ import annotations

import tablevault
from sample_entries import Profile


def test_public_api_exports_resolve() -> None:
    """Every name in __all__ should be importable from the facade."""
    missing = [name for name in tablevault.__all__ if not hasattr(tablevault, name)]

    assert missing == []


def test_public_api_builds_memory_vault() -> None:
    """The facade should be enough to build and use an engine."""
    storage = tablevault.MemoryStringStorage()
    engine = tablevault.PersistenceEngine(storage, tablevault.JsonSerializationProvider())
    engine.set(Profile("ada"), "p1")

    engine.save()

    assert tablevault.PersistenceEngine(storage, tablevault.JsonSerializationProvider()).contains(
        Profile, "p1"
    )
