"""Typed persistence engine.

This module owns the per-type table set, implements the create, update,
delete, and query contract with version tracking and listener
notification, and drives the save/load pipeline against a storage backend.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from core.constants import EMPTY_ID, INITIAL_TABLE_VERSION
from core.errors import TableVaultStoreError, VersionDowngradeError
from core.logging_config import get_logger
from core.types import (
    DataTable,
    Listener,
    PersistenceAction,
    PersistenceSettings,
    TableMetadata,
    TableSet,
)
from serialization.base import BinarySerializationProvider, StringSerializationProvider
from storage.base import BinaryStorage, StringStorage
from store.lifecycle_hooks import (
    AFTER_DESERIALIZE,
    AFTER_SERIALIZED,
    BEFORE_DESERIALIZE,
    BEFORE_SERIALIZE,
    invoke_value_hooks,
)
from store.listeners import ListenerRegistry
from store.pipeline import VaultPipeline, resolve_pipeline
from transforms.compression import Compressor
from transforms.encryption import EncryptionProvider
from transforms.post_process import PayloadTransforms

_LOGGER = get_logger(__name__)


class PersistenceEngine:
    """In-memory typed tables synchronized with one storage backend.

    The engine is not thread-safe. CRUD calls are expected from a single
    owner; ``save_async``/``load_async`` use a best-effort busy flag so a
    second async operation issued while one is in flight returns at once.
    """

    def __init__(
        self,
        storage: StringStorage | BinaryStorage,
        serializer: StringSerializationProvider | BinarySerializationProvider,
        encryption: EncryptionProvider | None = None,
        settings: PersistenceSettings | None = None,
        compressor: Compressor | None = None,
    ) -> None:
        """Bind the engine to its collaborators and load stored tables.

        Args:
            storage: Text or binary storage backend.
            serializer: Text or binary serialization provider.
            encryption: Optional encryption provider.
            settings: Pipeline switches; everything off when omitted.
            compressor: Optional replacement for the default gzip stage.

        Raises:
            TableVaultError: If the initial load fails.
        """
        self.settings = settings or PersistenceSettings()
        self._tables: TableSet = {}
        self._listeners = ListenerRegistry()
        self._is_busy = False
        self._closed = False
        if self.settings.encryption_enabled and encryption is None:
            _LOGGER.warning(
                "encryption_provider_missing",
                detail="encryption is enabled but no provider was given; payloads stay plain",
            )
        transforms = PayloadTransforms.build(
            encryption_enabled=self.settings.encryption_enabled,
            compression_enabled=self.settings.compression_enabled,
            encryption=encryption,
            compressor=compressor,
        )
        self._pipeline: VaultPipeline | None = resolve_pipeline(serializer, storage, transforms)
        if self._pipeline is None:
            _LOGGER.warning(
                "pipeline_unavailable",
                serializer=type(serializer).__qualname__,
                storage=type(storage).__qualname__,
            )
        self.load()

    @property
    def is_busy(self) -> bool:
        """Whether an async save or load is in flight."""
        return self._is_busy

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pipeline(self) -> VaultPipeline | None:
        """Resolved pipeline, or None when serializer and storage do not match."""
        return self._pipeline

    def entry_types(self) -> tuple[type, ...]:
        """Return every entry type that has a table."""
        return tuple(self._tables)

    def set(
        self,
        value: Any,
        entry_id: str = EMPTY_ID,
        version: int | None = None,
        *,
        entry_type: type | None = None,
        auto_save: bool = False,
    ) -> str:
        """Insert or replace one entry.

        Args:
            value: Value to store.
            entry_id: Identifier; a fresh UUID is generated when empty.
            version: Table version to record; keeps the current one when omitted.
            entry_type: Table to write into; defaults to ``type(value)``.
            auto_save: Save the vault right after the mutation.

        Returns:
            The effective identifier, or ``entry_id`` unchanged when the
            requested version is lower than the table's current version.
        """
        self._ensure_open()
        resolved_type = entry_type or type(value)
        table = self._get_or_create_table(resolved_type, version)
        try:
            effective_version = _effective_version(table, version)
        except VersionDowngradeError as error:
            _LOGGER.error(
                "version_downgrade_rejected",
                entry_type=resolved_type.__qualname__,
                entry_id=entry_id,
                requested_version=error.requested_version,
                current_version=error.current_version,
            )
            return entry_id
        if not entry_id:
            entry_id = str(uuid.uuid4())
        action = table.upsert(entry_id, value)
        table.record_mutation(effective_version)
        self._listeners.notify(resolved_type, self, action, entry_id, value)
        if auto_save:
            self.save()
        return entry_id

    def get(self, entry_type: type, entry_id: str, default: Any = None) -> Any:
        """Return a stored value, or ``default`` when type or id is unknown."""
        table = self._tables.get(entry_type)
        if table is None:
            return default
        return table.entries.get(entry_id, default)

    def get_metadata(self, entry_type: type) -> TableMetadata:
        """Return version, revision, and timestamp for a table.

        Types never stored report ``(-1, -1, MISSING_TIMESTAMP)``.
        """
        table = self._tables.get(entry_type)
        if table is None:
            return TableMetadata.missing()
        return table.metadata()

    def get_collection(self, entry_type: type) -> dict[str, Any]:
        """Return a copy of all entries of a type."""
        table = self._tables.get(entry_type)
        if table is None:
            return {}
        return dict(table.entries)

    def delete(self, entry_type: type, entry_id: str, *, auto_save: bool = False) -> bool:
        """Remove one entry.

        The entry is already gone when ``DELETE`` listeners run; they receive
        the removed value.

        Args:
            entry_type: Table to remove from.
            entry_id: Identifier to remove.
            auto_save: Save the vault right after a successful removal.

        Returns:
            True when the entry existed and was removed.
        """
        self._ensure_open()
        table = self._tables.get(entry_type)
        if table is None or entry_id not in table.entries:
            return False
        removed_value = table.remove(entry_id)
        table.record_mutation(table.version)
        self._listeners.notify(entry_type, self, PersistenceAction.DELETE, entry_id, removed_value)
        if auto_save:
            self.save()
        return True

    def contains(self, entry_type: type, entry_id: str) -> bool:
        table = self._tables.get(entry_type)
        return table is not None and entry_id in table.entries

    def add_listener(self, entry_type: type, callback: Listener) -> None:
        """Register a ``(engine, action, entry_id, value)`` callback for a type."""
        self._listeners.add(entry_type, callback)

    def remove_listener(self, entry_type: type, callback: Listener) -> None:
        self._listeners.remove(entry_type, callback)

    def save(self) -> None:
        """Serialize, transform, and store the full table set.

        No-op when serializer and storage do not share a modality.
        """
        self._ensure_open()
        pipeline = self._pipeline
        if pipeline is None:
            return
        payload = self._encode_tables(pipeline)
        pipeline.write(payload)
        self._log_saved(pipeline)

    def load(self) -> None:
        """Read, transform, and deserialize the stored table set.

        The loaded set replaces the in-memory one wholesale. No-op when
        serializer and storage do not share a modality.
        """
        self._ensure_open()
        pipeline = self._pipeline
        if pipeline is None:
            return
        raw_payload = pipeline.read()
        self._install_tables(pipeline, raw_payload)

    async def save_async(self) -> None:
        """Awaitable ``save``; returns at once if another async call is in flight."""
        self._ensure_open()
        pipeline = self._pipeline
        if self._is_busy:
            _LOGGER.info("async_operation_skipped", operation="save")
            return
        if pipeline is None:
            return
        self._is_busy = True
        try:
            payload = self._encode_tables(pipeline)
            await pipeline.write_async(payload)
            self._log_saved(pipeline)
        finally:
            self._is_busy = False

    async def load_async(self) -> None:
        """Awaitable ``load``; returns at once if another async call is in flight."""
        self._ensure_open()
        pipeline = self._pipeline
        if self._is_busy:
            _LOGGER.info("async_operation_skipped", operation="load")
            return
        if pipeline is None:
            return
        self._is_busy = True
        try:
            raw_payload = await pipeline.read_async()
            self._install_tables(pipeline, raw_payload)
        finally:
            self._is_busy = False

    def close(self) -> None:
        """Release listeners and reject further use. Safe to call twice."""
        if self._closed:
            return
        self._listeners.clear()
        self._closed = True
        _LOGGER.info("engine_closed", table_count=len(self._tables))

    def __enter__(self) -> "PersistenceEngine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_or_create_table(self, entry_type: type, version: int | None) -> DataTable:
        table = self._tables.get(entry_type)
        if table is not None:
            return table
        initial_version = INITIAL_TABLE_VERSION if version is None else version
        table = DataTable(
            entry_type=entry_type,
            version=initial_version,
            revision=0,
            timestamp=datetime.now(timezone.utc),
        )
        self._tables[entry_type] = table
        _LOGGER.info(
            "table_created",
            entry_type=entry_type.__qualname__,
            version=initial_version,
        )
        return table

    def _encode_tables(self, pipeline: VaultPipeline) -> Any:
        invoke_value_hooks(self._tables, BEFORE_SERIALIZE)
        serialized = pipeline.serialize(self._tables)
        invoke_value_hooks(self._tables, AFTER_SERIALIZED)
        return pipeline.post_process(serialized)

    def _install_tables(self, pipeline: VaultPipeline, raw_payload: Any) -> None:
        payload = pipeline.pre_process(raw_payload)
        loaded_tables = pipeline.deserialize(payload)
        invoke_value_hooks(loaded_tables, BEFORE_DESERIALIZE)
        self._tables = loaded_tables
        invoke_value_hooks(self._tables, AFTER_DESERIALIZE)
        _LOGGER.info(
            "vault_loaded",
            modality=pipeline.modality,
            table_count=len(self._tables),
        )

    def _log_saved(self, pipeline: VaultPipeline) -> None:
        _LOGGER.info(
            "vault_saved",
            modality=pipeline.modality,
            table_count=len(self._tables),
            encrypted=pipeline.transforms.encryption is not None,
            compressed=pipeline.transforms.compressor is not None,
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise TableVaultStoreError(
                "Persistence engine is closed. Create a new engine to keep using the vault."
            )


def _effective_version(table: DataTable, version: int | None) -> int:
    """Return the version a mutation should record.

    Raises:
        VersionDowngradeError: If ``version`` is below the table's version.
    """
    if version is None:
        return table.version
    if version < table.version:
        raise VersionDowngradeError(table.entry_type, version, table.version)
    return version
