"""Shared typed models.

This module defines the table, metadata, settings, and listener types
used by the engine, serialization providers, and storage layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, NamedTuple

from core.constants import MISSING_METADATA_VALUE, MISSING_TIMESTAMP


class PersistenceAction(Enum):
    """Kind of mutation reported to listeners."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


class TableMetadata(NamedTuple):
    """Version bookkeeping for one table, compared and unpacked as a tuple.

    Attributes:
        version: Caller-controlled schema version, never decreasing.
        revision: Number of mutations applied to the table.
        timestamp: UTC time of the last mutation.
    """

    version: int
    revision: int
    timestamp: datetime

    @classmethod
    def missing(cls) -> "TableMetadata":
        """Return the sentinel reported for types never stored."""
        return cls(MISSING_METADATA_VALUE, MISSING_METADATA_VALUE, MISSING_TIMESTAMP)


@dataclass(frozen=True)
class PersistenceSettings:
    """Pipeline switches applied on save and load.

    Attributes:
        encryption_enabled: Encrypt payloads when a provider is configured.
        compression_enabled: Gzip payloads after encryption.
    """

    encryption_enabled: bool = False
    compression_enabled: bool = False


@dataclass
class DataTable:
    """Identified entries of one entry type plus version metadata.

    Attributes:
        entry_type: Class of the values held by this table.
        version: Schema version of the table.
        revision: Mutation counter.
        timestamp: UTC time of the last mutation.
        entries: Identifier to value mapping.
    """

    entry_type: type
    version: int
    revision: int
    timestamp: datetime
    entries: dict[str, Any] = field(default_factory=dict)

    def metadata(self) -> TableMetadata:
        """Return an immutable view of the table metadata."""
        return TableMetadata(self.version, self.revision, self.timestamp)

    def upsert(self, entry_id: str, value: Any) -> PersistenceAction:
        """Insert or replace one entry and report which happened."""
        action = PersistenceAction.UPDATE if entry_id in self.entries else PersistenceAction.ADD
        self.entries[entry_id] = value
        return action

    def remove(self, entry_id: str) -> Any:
        """Remove one entry and return its value.

        Raises:
            KeyError: If the identifier is not present.
        """
        return self.entries.pop(entry_id)

    def record_mutation(self, version: int) -> None:
        """Advance revision and timestamp after a successful mutation."""
        self.revision += 1
        self.timestamp = datetime.now(timezone.utc)
        self.version = version


TableSet = dict[type, DataTable]
Listener = Callable[[Any, PersistenceAction, str, Any], None]
