"""Local file storage backends.

This module keeps one vault payload per file and replaces it atomically
through a temporary sibling file, so a crash leaves either the old or the
new payload on disk.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.constants import TEMP_FILE_SUFFIX, TEXT_ENCODING
from core.errors import TableVaultStorageError
from core.logging_config import get_logger
from storage.base import BinaryStorage, StringStorage

_LOGGER = get_logger(__name__)


class FileBinaryStorage(BinaryStorage):
    """Binary payload stored in a single local file."""

    def __init__(self, path: Path) -> None:
        """Initialize storage for a file path.

        Args:
            path: Target file; parent directories are created on save.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, payload: bytes) -> None:
        _atomic_write_bytes(self._path, payload)
        _LOGGER.info("storage_written", path=str(self._path), size_bytes=len(payload))

    def load(self) -> bytes:
        return _read_bytes(self._path)


class FileStringStorage(StringStorage):
    """Text payload stored in a single local utf-8 file."""

    def __init__(self, path: Path) -> None:
        """Initialize storage for a file path.

        Args:
            path: Target file; parent directories are created on save.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, payload: str) -> None:
        encoded = payload.encode(TEXT_ENCODING)
        _atomic_write_bytes(self._path, encoded)
        _LOGGER.info("storage_written", path=str(self._path), size_bytes=len(encoded))

    def load(self) -> str:
        raw_bytes = _read_bytes(self._path)
        try:
            return raw_bytes.decode(TEXT_ENCODING)
        except UnicodeDecodeError as error:
            raise TableVaultStorageError(
                f"Stored file {self._path} is not valid {TEXT_ENCODING} text: {error}. "
                "Use a binary backend for binary serializers."
            ) from error


def _read_bytes(path: Path) -> bytes:
    """Read file bytes, treating a missing file as empty storage.

    Args:
        path: File path.

    Returns:
        File content, or empty bytes when the file does not exist.

    Raises:
        TableVaultStorageError: If the file exists but cannot be read.
    """
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return b""
    except OSError as error:
        raise TableVaultStorageError(
            f"Failed to read vault file {path}: {error}. Check read permissions."
        ) from error


def _atomic_write_bytes(path: Path, payload: bytes) -> None:
    """Write bytes through a temporary file and replace the target.

    Args:
        path: Target file path.
        payload: Bytes to persist.

    Raises:
        TableVaultStorageError: If the write fails.
    """
    temp_path = path.with_name(path.name + TEMP_FILE_SUFFIX)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with temp_path.open("wb") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    except OSError as error:
        if temp_path.is_file():
            temp_path.unlink()
        raise TableVaultStorageError(
            f"Failed to write vault file {path}: {error}. "
            "Check write permissions and available disk space."
        ) from error
