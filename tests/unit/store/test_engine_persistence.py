"""Unit tests for persistence engine save and load."""

from __future__ import annotations

import pytest

from core.errors import TableVaultEncryptionError
from core.types import PersistenceSettings
from serialization.json_provider import JsonSerializationProvider
from serialization.pickle_provider import PickleSerializationProvider
from serialization.yaml_provider import YamlSerializationProvider
from storage.memory_storage import MemoryBinaryStorage, MemoryStringStorage
from store import engine as engine_module
from store.engine import PersistenceEngine
from transforms.encryption import FernetEncryptionProvider
from sample_entries import HookedNote, Inventory, Profile, RecordingLogger, Tier

_FULL_SETTINGS = PersistenceSettings(encryption_enabled=True, compression_enabled=True)


def test_save_then_reload_restores_tables_and_metadata() -> None:
    """A new engine on the same storage should see identical tables."""
    storage = MemoryStringStorage()
    writer = PersistenceEngine(storage, JsonSerializationProvider())
    writer.set(Profile("ada", 36, ("admin",), Tier.PRO), "p1", version=2)
    writer.set(Inventory("ada", {"bolts": 3}), "i1")
    writer.save()

    reader = PersistenceEngine(storage, JsonSerializationProvider())

    assert (
        reader.get_collection(Profile) == writer.get_collection(Profile)
        and reader.get_metadata(Profile) == writer.get_metadata(Profile)
        and reader.get_metadata(Inventory) == writer.get_metadata(Inventory)
    )


@pytest.mark.parametrize("settings", [PersistenceSettings(), _FULL_SETTINGS])
def test_binary_pipeline_round_trips_with_settings(settings: PersistenceSettings) -> None:
    """Pickle over binary storage should round-trip with and without stages."""
    storage = MemoryBinaryStorage()
    provider = FernetEncryptionProvider(FernetEncryptionProvider.generate_key())
    writer = PersistenceEngine(storage, PickleSerializationProvider(), provider, settings)
    writer.set(Profile("ada"), "p1", version=1)
    writer.save()

    reader = PersistenceEngine(storage, PickleSerializationProvider(), provider, settings)

    assert reader.get(Profile, "p1") == Profile("ada")


def test_text_pipeline_with_full_settings_stores_base64() -> None:
    """Encrypted and compressed text vaults should hide their content."""
    storage = MemoryStringStorage()
    provider = FernetEncryptionProvider(FernetEncryptionProvider.generate_key())
    writer = PersistenceEngine(storage, YamlSerializationProvider(), provider, _FULL_SETTINGS)
    writer.set(Profile("ada"), "p1")
    writer.save()

    reader = PersistenceEngine(storage, YamlSerializationProvider(), provider, _FULL_SETTINGS)

    assert "ada" not in storage.payload and reader.get(Profile, "p1") == Profile("ada")


def test_load_with_wrong_key_propagates_error() -> None:
    """Decryption failures should not be swallowed by the engine."""
    storage = MemoryBinaryStorage()
    writer_key = FernetEncryptionProvider(FernetEncryptionProvider.generate_key())
    writer = PersistenceEngine(storage, PickleSerializationProvider(), writer_key, _FULL_SETTINGS)
    writer.set(Profile("ada"), "p1")
    writer.save()
    other_key = FernetEncryptionProvider(FernetEncryptionProvider.generate_key())

    with pytest.raises(TableVaultEncryptionError):
        PersistenceEngine(storage, PickleSerializationProvider(), other_key, _FULL_SETTINGS)


def test_load_replaces_in_memory_tables() -> None:
    """Unsaved changes should be discarded by a load."""
    storage = MemoryStringStorage()
    engine = PersistenceEngine(storage, JsonSerializationProvider())
    engine.set(Profile("saved"), "p1")
    engine.save()
    engine.set(Profile("unsaved"), "p2")

    engine.load()

    assert sorted(engine.get_collection(Profile)) == ["p1"]


def test_mismatched_pipeline_makes_save_and_load_noops(monkeypatch: pytest.MonkeyPatch) -> None:
    """A text serializer on binary storage should never touch storage."""
    recorder = RecordingLogger()
    monkeypatch.setattr(engine_module, "_LOGGER", recorder)
    storage = MemoryBinaryStorage()
    engine = PersistenceEngine(storage, JsonSerializationProvider())
    engine.set(Profile("v"), "p1")

    engine.save()
    engine.load()

    assert (
        engine.pipeline is None
        and storage.save_count == 0
        and engine.contains(Profile, "p1")
        and "pipeline_unavailable" in recorder.names()
    )


def test_encryption_without_provider_warns_and_stores_plain(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Enabled encryption with no provider should fall back to plain payloads."""
    recorder = RecordingLogger()
    monkeypatch.setattr(engine_module, "_LOGGER", recorder)
    storage = MemoryStringStorage()
    engine = PersistenceEngine(
        storage,
        JsonSerializationProvider(),
        settings=PersistenceSettings(encryption_enabled=True),
    )
    engine.set(Profile("visible"), "p1")

    engine.save()

    assert "visible" in storage.payload and "encryption_provider_missing" in recorder.names()


def test_hooks_fire_around_save_and_load() -> None:
    """Stored values should see serialize hooks on save and deserialize hooks on load."""
    storage = MemoryStringStorage()
    engine = PersistenceEngine(storage, JsonSerializationProvider())
    saved_note = HookedNote("hello")
    engine.set(saved_note, "n1")

    engine.save()
    engine.load()
    loaded_note = engine.get(HookedNote, "n1")

    assert (
        saved_note.events == ["before_serialize", "after_serialized"]
        and loaded_note.events == ["before_deserialize", "after_deserialize"]
    )


def test_save_logs_pipeline_summary(monkeypatch: pytest.MonkeyPatch) -> None:
    """Saving should emit one structured summary event."""
    recorder = RecordingLogger()
    monkeypatch.setattr(engine_module, "_LOGGER", recorder)
    engine = PersistenceEngine(MemoryStringStorage(), JsonSerializationProvider())
    engine.set(Profile("v"), "p1")

    engine.save()

    assert ("info", "vault_saved") in [(level, event) for level, event, _ in recorder.events]


@pytest.mark.parametrize("provider_type", [JsonSerializationProvider, YamlSerializationProvider])
def test_none_values_survive_reopen(provider_type) -> None:
    """A table of None values should be saved and reopened by text providers."""
    storage = MemoryStringStorage()
    writer = PersistenceEngine(storage, provider_type())
    writer.set(None, "n1")
    writer.save()

    reader = PersistenceEngine(storage, provider_type())

    assert reader.contains(type(None), "n1") and reader.get(type(None), "n1", "missing") is None
