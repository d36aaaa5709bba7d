"""Save post-processing and load pre-processing stages.

This module applies encryption and compression around serialized
payloads in a fixed order: encrypt then compress on save, decompress
then decrypt on load. Text payloads travel as base64 once transformed.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from core.constants import TEXT_ENCODING
from core.errors import TableVaultSerializationError
from transforms.compression import Compressor, GzipCompressor
from transforms.encryption import EncryptionProvider


@dataclass(frozen=True)
class PayloadTransforms:
    """Resolved stage configuration for one engine.

    Attributes:
        encryption: Encryption provider, or None when encryption is off.
        compressor: Compressor, or None when compression is off.
    """

    encryption: EncryptionProvider | None = None
    compressor: Compressor | None = None

    @classmethod
    def build(
        cls,
        encryption_enabled: bool,
        compression_enabled: bool,
        encryption: EncryptionProvider | None,
        compressor: Compressor | None = None,
    ) -> "PayloadTransforms":
        """Resolve settings into active stages.

        Encryption is active only when enabled and a provider exists.
        """
        active_encryption = encryption if encryption_enabled else None
        active_compressor = (compressor or GzipCompressor()) if compression_enabled else None
        return cls(encryption=active_encryption, compressor=active_compressor)

    @property
    def is_identity(self) -> bool:
        """Whether no stage is active."""
        return self.encryption is None and self.compressor is None


def save_post_process_binary(payload: bytes, transforms: PayloadTransforms) -> bytes:
    """Encrypt then compress a binary payload."""
    if transforms.encryption is not None:
        payload = transforms.encryption.encrypt(payload)
    if transforms.compressor is not None:
        payload = transforms.compressor.compress(payload)
    return payload


def load_pre_process_binary(payload: bytes, transforms: PayloadTransforms) -> bytes:
    """Decompress then decrypt a binary payload."""
    if transforms.compressor is not None:
        payload = transforms.compressor.decompress(payload)
    if transforms.encryption is not None:
        payload = transforms.encryption.decrypt(payload)
    return payload


def save_post_process_text(payload: str, transforms: PayloadTransforms) -> str:
    """Transform a text payload into base64 of its processed bytes.

    Args:
        payload: Serialized text.
        transforms: Active stages.

    Returns:
        Unchanged text when no stage is active, else base64 text.
    """
    if transforms.is_identity:
        return payload
    processed = save_post_process_binary(payload.encode(TEXT_ENCODING), transforms)
    return base64.b64encode(processed).decode("ascii")


def load_pre_process_text(payload: str, transforms: PayloadTransforms) -> str:
    """Reverse ``save_post_process_text``.

    Args:
        payload: Stored text.
        transforms: Active stages.

    Returns:
        Serialized text ready for deserialization.

    Raises:
        TableVaultSerializationError: If base64 or utf-8 decoding fails.
    """
    if transforms.is_identity:
        return payload
    try:
        raw_bytes = base64.b64decode(payload.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as error:
        raise TableVaultSerializationError(
            f"Stored payload is not valid base64: {error}. "
            "Check that encryption and compression settings match the ones used to save."
        ) from error
    processed = load_pre_process_binary(raw_bytes, transforms)
    try:
        return processed.decode(TEXT_ENCODING)
    except UnicodeDecodeError as error:
        raise TableVaultSerializationError(
            f"Processed payload is not valid {TEXT_ENCODING} text: {error}."
        ) from error
