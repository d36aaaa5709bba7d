"""In-process storage backends for tests and ephemeral vaults."""

from __future__ import annotations

from storage.base import BinaryStorage, StringStorage


class MemoryStringStorage(StringStorage):
    """Keep the last saved text payload in memory."""

    def __init__(self, initial: str = "") -> None:
        self.payload = initial
        self.save_count = 0

    def save(self, payload: str) -> None:
        self.payload = payload
        self.save_count += 1

    def load(self) -> str:
        return self.payload


class MemoryBinaryStorage(BinaryStorage):
    """Keep the last saved binary payload in memory."""

    def __init__(self, initial: bytes = b"") -> None:
        self.payload = initial
        self.save_count = 0

    def save(self, payload: bytes) -> None:
        self.payload = payload
        self.save_count += 1

    def load(self) -> bytes:
        return self.payload
