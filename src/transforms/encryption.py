"""Payload encryption stage.

This module defines the encryption capability used by the save/load
pipeline and a Fernet implementation backed by the cryptography package.
"""

from __future__ import annotations

from typing import Protocol

from cryptography.fernet import Fernet, InvalidToken

from core.errors import TableVaultConfigError, TableVaultEncryptionError


class EncryptionProvider(Protocol):
    """Symmetric byte encryption capability."""

    def encrypt(self, payload: bytes) -> bytes:
        """Return the encrypted form of a payload."""

    def decrypt(self, payload: bytes) -> bytes:
        """Return the plaintext form of an encrypted payload."""


class FernetEncryptionProvider:
    """Authenticated symmetric encryption with Fernet tokens."""

    def __init__(self, key: str | bytes) -> None:
        """Initialize provider from a urlsafe base64 Fernet key.

        Args:
            key: 32-byte key encoded as urlsafe base64.

        Raises:
            TableVaultConfigError: If the key is malformed.
        """
        try:
            self._fernet = Fernet(key)
        except (ValueError, TypeError) as error:
            raise TableVaultConfigError(
                f"Invalid encryption key: {error}. "
                "Generate one with FernetEncryptionProvider.generate_key()."
            ) from error

    @staticmethod
    def generate_key() -> str:
        """Generate a fresh Fernet key as text."""
        return Fernet.generate_key().decode("ascii")

    def encrypt(self, payload: bytes) -> bytes:
        """Encrypt a payload into a Fernet token."""
        return self._fernet.encrypt(payload)

    def decrypt(self, payload: bytes) -> bytes:
        """Decrypt a Fernet token.

        Args:
            payload: Token bytes produced by ``encrypt``.

        Returns:
            Plaintext bytes.

        Raises:
            TableVaultEncryptionError: If the token is invalid or the key differs.
        """
        try:
            return self._fernet.decrypt(payload)
        except InvalidToken as error:
            raise TableVaultEncryptionError(
                "Failed to decrypt payload: token is invalid or was produced with another key. "
                "Check the configured encryption key."
            ) from error
