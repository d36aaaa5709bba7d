"""Stable string keys for entry types.

Tables are keyed by class objects in memory. Text serialization needs a
stable name for each class, and loading needs to turn that name back into
the class. This module owns both directions plus an alias table for
classes registered under explicit keys.
"""

from __future__ import annotations

import importlib

from core.errors import TableVaultSerializationError

_KEY_SEPARATOR = ":"
_registered_by_key: dict[str, type] = {}
_registered_by_type: dict[type, str] = {}
# Builtin types that have no attribute on the builtins module.
_BUILTIN_SINGLETON_TYPES: dict[str, type] = {
    f"builtins:{singleton_type.__qualname__}": singleton_type
    for singleton_type in (type(None), type(Ellipsis), type(NotImplemented))
}


def register_type(entry_type: type, key: str | None = None) -> str:
    """Register a class under an explicit key.

    Args:
        entry_type: Class to register.
        key: Alias to persist instead of the import path.

    Returns:
        The key the class is now persisted under.

    Raises:
        TableVaultSerializationError: If the key is already bound to another class.
    """
    resolved_key = key or _import_path_key(entry_type)
    existing = _registered_by_key.get(resolved_key)
    if existing is not None and existing is not entry_type:
        raise TableVaultSerializationError(
            f"Type key '{resolved_key}' is already registered for {existing.__qualname__}. "
            "Choose a unique key for each entry type."
        )
    previous_key = _registered_by_type.get(entry_type)
    if previous_key is not None and previous_key != resolved_key:
        _registered_by_key.pop(previous_key, None)
    _registered_by_key[resolved_key] = entry_type
    _registered_by_type[entry_type] = resolved_key
    return resolved_key


def unregister_type(entry_type: type) -> None:
    """Drop an explicit registration, if any."""
    key = _registered_by_type.pop(entry_type, None)
    if key is not None:
        _registered_by_key.pop(key, None)


def type_key(entry_type: type) -> str:
    """Return the persisted key for a class."""
    registered = _registered_by_type.get(entry_type)
    if registered is not None:
        return registered
    return _import_path_key(entry_type)


def resolve_type(key: str) -> type:
    """Resolve a persisted key back into its class.

    Args:
        key: Key produced by ``type_key``.

    Returns:
        The matching class.

    Raises:
        TableVaultSerializationError: If the key cannot be resolved.
    """
    registered = _registered_by_key.get(key) or _BUILTIN_SINGLETON_TYPES.get(key)
    if registered is not None:
        return registered
    module_name, separator, qualname = key.partition(_KEY_SEPARATOR)
    if not separator or not module_name or not qualname:
        raise TableVaultSerializationError(
            f"Invalid type key '{key}': expected 'module:QualName'. "
            "Register the type with register_type before loading."
        )
    try:
        resolved: object = importlib.import_module(module_name)
    except ImportError as error:
        raise TableVaultSerializationError(
            f"Cannot import module '{module_name}' for type key '{key}': {error}. "
            "Make the module importable or register an alias."
        ) from error
    for attribute in qualname.split("."):
        resolved = getattr(resolved, attribute, None)
        if resolved is None:
            break
    if not isinstance(resolved, type):
        raise TableVaultSerializationError(
            f"Type key '{key}' does not name a class. "
            "Register the type with register_type before loading."
        )
    return resolved


def _import_path_key(entry_type: type) -> str:
    qualname = entry_type.__qualname__
    if "<locals>" in qualname:
        raise TableVaultSerializationError(
            f"Type '{qualname}' is defined inside a function and has no import path. "
            "Define it at module level or register it with an explicit key."
        )
    return f"{entry_type.__module__}{_KEY_SEPARATOR}{qualname}"
