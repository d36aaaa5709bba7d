"""Tagged value codec for text serialization formats.

This module converts stored values into JSON/YAML-safe structures and
back. Native scalars, lists, and string-keyed dicts pass through as-is;
richer values are wrapped in objects carrying a ``__kind__`` tag.
"""

from __future__ import annotations

import base64
import dataclasses
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable

from core.constants import VALUE_KIND_KEY
from core.errors import TableVaultSerializationError
from core.type_registry import resolve_type, type_key

_SCALAR_TYPES = (str, int, float, bool, type(None))


def encode_value(value: Any) -> Any:
    """Encode a value into a structure of native scalars, lists, and dicts.

    Args:
        value: Stored value.

    Returns:
        Encoded structure.

    Raises:
        TableVaultSerializationError: If the value type is unsupported.
    """
    if isinstance(value, Enum):
        return _tagged("enum", type=type_key(type(value)), value=encode_value(value.value))
    if isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, list):
        return [encode_value(item) for item in value]
    if isinstance(value, tuple):
        return _tagged("tuple", items=[encode_value(item) for item in value])
    if isinstance(value, (set, frozenset)):
        items = [encode_value(item) for item in value]
        return _tagged("frozenset" if isinstance(value, frozenset) else "set", items=items)
    if isinstance(value, dict):
        return _encode_dict(value)
    if isinstance(value, (bytes, bytearray)):
        return _tagged("bytes", value=base64.b64encode(bytes(value)).decode("ascii"))
    if isinstance(value, datetime):
        return _tagged("datetime", value=value.isoformat())
    if isinstance(value, date):
        return _tagged("date", value=value.isoformat())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _encode_dataclass(value)
    if callable(getattr(value, "to_dict", None)) and callable(
        getattr(type(value), "from_dict", None)
    ):
        return _tagged("object", type=type_key(type(value)), state=encode_value(value.to_dict()))
    raise TableVaultSerializationError(
        f"Cannot serialize value of type '{type(value).__qualname__}'. "
        "Store dataclasses, builtin containers, or objects with to_dict/from_dict."
    )


def decode_value(payload: Any) -> Any:
    """Decode a structure produced by ``encode_value``.

    Args:
        payload: Encoded structure.

    Returns:
        Reconstructed value.

    Raises:
        TableVaultSerializationError: If a tag is unknown or malformed.
    """
    if isinstance(payload, list):
        return [decode_value(item) for item in payload]
    if not isinstance(payload, dict):
        return payload
    kind = payload.get(VALUE_KIND_KEY)
    if kind is None:
        return {key: decode_value(item) for key, item in payload.items()}
    decoder = _DECODERS.get(str(kind))
    if decoder is None:
        raise TableVaultSerializationError(
            f"Unknown value kind '{kind}' in payload. "
            "The payload was written by an incompatible serializer."
        )
    try:
        return decoder(payload)
    except (KeyError, TypeError, ValueError) as error:
        raise TableVaultSerializationError(
            f"Malformed '{kind}' value in payload: {error}."
        ) from error


def _tagged(kind: str, **fields: Any) -> dict[str, Any]:
    return {VALUE_KIND_KEY: kind, **fields}


def _encode_dict(value: dict[Any, Any]) -> dict[str, Any]:
    if all(isinstance(key, str) for key in value) and VALUE_KIND_KEY not in value:
        return {key: encode_value(item) for key, item in value.items()}
    items = [[encode_value(key), encode_value(item)] for key, item in value.items()]
    return _tagged("mapping", items=items)


def _encode_dataclass(value: Any) -> dict[str, Any]:
    fields = {
        field.name: encode_value(getattr(value, field.name))
        for field in dataclasses.fields(value)
        if field.init
    }
    return _tagged("dataclass", type=type_key(type(value)), fields=fields)


def _decode_dataclass(payload: dict[str, Any]) -> Any:
    entry_type = resolve_type(str(payload["type"]))
    fields = {str(name): decode_value(item) for name, item in dict(payload["fields"]).items()}
    return entry_type(**fields)


def _decode_object(payload: dict[str, Any]) -> Any:
    entry_type = resolve_type(str(payload["type"]))
    return entry_type.from_dict(decode_value(payload["state"]))  # type: ignore[attr-defined]


def _decode_enum(payload: dict[str, Any]) -> Any:
    entry_type = resolve_type(str(payload["type"]))
    return entry_type(decode_value(payload["value"]))


def _decode_mapping(payload: dict[str, Any]) -> dict[Any, Any]:
    return {_hashable(decode_value(key)): decode_value(item) for key, item in payload["items"]}


def _hashable(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_hashable(item) for item in value)
    return value


_DECODERS: dict[str, Callable[[dict[str, Any]], Any]] = {
    "tuple": lambda payload: tuple(decode_value(item) for item in payload["items"]),
    "set": lambda payload: {_hashable(decode_value(item)) for item in payload["items"]},
    "frozenset": lambda payload: frozenset(
        _hashable(decode_value(item)) for item in payload["items"]
    ),
    "mapping": _decode_mapping,
    "bytes": lambda payload: base64.b64decode(str(payload["value"]).encode("ascii")),
    "datetime": lambda payload: datetime.fromisoformat(str(payload["value"])),
    "date": lambda payload: date.fromisoformat(str(payload["value"])),
    "enum": _decode_enum,
    "dataclass": _decode_dataclass,
    "object": _decode_object,
}
