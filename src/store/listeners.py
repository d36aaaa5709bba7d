"""Per-type mutation listeners.

Callbacks are kept in registration order per entry type and invoked
synchronously. Errors raised by a callback propagate to the caller.
"""

from __future__ import annotations

from typing import Any

from core.errors import TableVaultStoreError
from core.types import Listener, PersistenceAction


class ListenerRegistry:
    """Ordered callback lists keyed by entry type."""

    def __init__(self) -> None:
        self._callbacks: dict[type, list[Listener]] = {}

    def add(self, entry_type: type, callback: Listener) -> None:
        if not callable(callback):
            raise TableVaultStoreError(
                f"Listener for '{entry_type.__qualname__}' must be callable, "
                f"got {type(callback).__qualname__}."
            )
        self._callbacks.setdefault(entry_type, []).append(callback)

    def remove(self, entry_type: type, callback: Listener) -> None:
        """Remove the earliest registration of a callback, if present."""
        callbacks = self._callbacks.get(entry_type)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def notify(
        self,
        entry_type: type,
        engine: Any,
        action: PersistenceAction,
        entry_id: str,
        value: Any,
    ) -> None:
        # Iterate a snapshot so callbacks may unregister themselves.
        for callback in tuple(self._callbacks.get(entry_type, ())):
            callback(engine, action, entry_id, value)

    def count(self, entry_type: type) -> int:
        return len(self._callbacks.get(entry_type, ()))

    def clear(self) -> None:
        self._callbacks.clear()
