"""Serialization lifecycle hooks for stored values.

Any stored value may opt into notifications around save and load by
defining one or more of the hook methods below. Values without a hook
are skipped.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.types import TableSet

BEFORE_SERIALIZE = "on_before_serialize"
AFTER_SERIALIZED = "on_after_serialized"
BEFORE_DESERIALIZE = "on_before_deserialize"
AFTER_DESERIALIZE = "on_after_deserialize"


@runtime_checkable
class PersistenceCallback(Protocol):
    """Full hook capability a stored value may implement."""

    def on_before_serialize(self) -> None: ...

    def on_after_serialized(self) -> None: ...

    def on_before_deserialize(self) -> None: ...

    def on_after_deserialize(self) -> None: ...


def invoke_value_hooks(tables: TableSet, hook_name: str) -> int:
    """Call one hook on every stored value that defines it.

    Args:
        tables: Table set to walk, table by table.
        hook_name: Hook method name.

    Returns:
        Number of values notified.
    """
    notified = 0
    for table in tables.values():
        for value in table.entries.values():
            hook = getattr(value, hook_name, None)
            if callable(hook):
                hook()
                notified += 1
    return notified
