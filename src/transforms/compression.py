"""Gzip compression stage.

This module compresses serialized payloads after encryption on save
and decompresses them before decryption on load.
"""

from __future__ import annotations

import gzip
import zlib
from dataclasses import dataclass
from typing import Protocol

from core.constants import DEFAULT_COMPRESSION_LEVEL
from core.errors import TableVaultSerializationError


class Compressor(Protocol):
    """Byte-stream compression capability."""

    def compress(self, payload: bytes) -> bytes:
        """Return the compressed form of a payload."""

    def decompress(self, payload: bytes) -> bytes:
        """Return the original form of a compressed payload."""


@dataclass(frozen=True)
class GzipCompressor:
    """Gzip compressor with a fixed compression level.

    Attributes:
        level: Gzip level from 0 (store) to 9 (smallest).
    """

    level: int = DEFAULT_COMPRESSION_LEVEL

    def compress(self, payload: bytes) -> bytes:
        """Gzip a payload.

        Args:
            payload: Raw bytes, possibly empty.

        Returns:
            Gzip stream bytes.
        """
        return gzip.compress(payload, compresslevel=self.level)

    def decompress(self, payload: bytes) -> bytes:
        """Gunzip a payload.

        Args:
            payload: Gzip stream bytes.

        Returns:
            Decompressed bytes.

        Raises:
            TableVaultSerializationError: If the payload is not a gzip stream.
        """
        try:
            return gzip.decompress(payload)
        except (OSError, EOFError, zlib.error) as error:
            raise TableVaultSerializationError(
                f"Failed to decompress payload: {error}. "
                "Check that compression settings match the ones used to save."
            ) from error
