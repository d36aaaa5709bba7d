"""Storage backend capabilities.

Backends come in a text and a binary flavor. Each exposes blocking
``save``/``load`` primitives plus awaitable variants, which by default
run the blocking primitive in a worker thread.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod


class StringStorage(ABC):
    """Backend persisting a text payload."""

    @abstractmethod
    def save(self, payload: str) -> None:
        """Persist the payload, replacing any previous one."""

    @abstractmethod
    def load(self) -> str:
        """Return the stored payload, or an empty string when nothing is stored."""

    async def save_async(self, payload: str) -> None:
        await asyncio.to_thread(self.save, payload)

    async def load_async(self) -> str:
        return await asyncio.to_thread(self.load)


class BinaryStorage(ABC):
    """Backend persisting a binary payload."""

    @abstractmethod
    def save(self, payload: bytes) -> None:
        """Persist the payload, replacing any previous one."""

    @abstractmethod
    def load(self) -> bytes:
        """Return the stored payload, or empty bytes when nothing is stored."""

    async def save_async(self, payload: bytes) -> None:
        await asyncio.to_thread(self.save, payload)

    async def load_async(self) -> bytes:
        return await asyncio.to_thread(self.load)
