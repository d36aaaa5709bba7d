"""TableVault CLI entry points.

This module exposes read-only inspection commands for file-backed vaults.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import VaultConfig
from core.constants import (
    DEFAULT_SERIALIZATION_FORMAT,
    DEFAULT_STORE_NAME,
    SUPPORTED_SERIALIZATION_FORMATS,
)
from core.type_registry import resolve_type, type_key
from serialization.value_codec import encode_value
from store.engine import PersistenceEngine
from store.vault_factory import open_file_vault


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="tablevault", description="TableVault inspection CLI")
    parser.add_argument("--data-root", help="Override TABLEVAULT_DATA_ROOT for this command")
    parser.add_argument("--name", default=DEFAULT_STORE_NAME, help="Vault file stem")
    parser.add_argument(
        "--format",
        default=DEFAULT_SERIALIZATION_FORMAT,
        choices=SUPPORTED_SERIALIZATION_FORMATS,
        help="Serialization format of the vault file",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_tables_command(subparsers)
    _add_show_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the TableVault CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    with _open_engine(args) as engine:
        if args.command == "tables":
            return _run_tables_command(engine)
        if args.command == "show":
            return _run_show_command(engine, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _open_engine(args: argparse.Namespace) -> PersistenceEngine:
    """Open the vault selected by global options.

    Args:
        args: Parsed CLI args.

    Returns:
        Loaded engine.
    """
    config = VaultConfig.from_env()
    if args.data_root:
        config = replace(config, data_root=Path(args.data_root).expanduser().resolve())
    return open_file_vault(config, name=args.name, serialization=args.format)


def _run_tables_command(engine: PersistenceEngine) -> int:
    """Print one line per table: type key, version, revision, timestamp, entries."""
    for entry_type in sorted(engine.entry_types(), key=type_key):
        metadata = engine.get_metadata(entry_type)
        entry_count = len(engine.get_collection(entry_type))
        print(
            f"{type_key(entry_type)}\t"
            f"{metadata.version}\t"
            f"{metadata.revision}\t"
            f"{metadata.timestamp.isoformat()}\t"
            f"{entry_count}"
        )
    return 0


def _run_show_command(engine: PersistenceEngine, args: argparse.Namespace) -> int:
    """Print one table's entries as JSON.

    Args:
        engine: Loaded engine.
        args: Parsed CLI args.

    Returns:
        Exit code; 1 when the vault has no table for the type.
    """
    entry_type = resolve_type(args.type_key)
    if entry_type not in engine.entry_types():
        print(f"No table stored for type '{args.type_key}'.", file=sys.stderr)
        return 1
    entries = {
        entry_id: encode_value(value)
        for entry_id, value in engine.get_collection(entry_type).items()
    }
    print(json.dumps(entries, indent=2, sort_keys=True))
    return 0


def _add_tables_command(subparsers: Any) -> None:
    """Register tables subcommand."""
    subparsers.add_parser("tables", help="List stored tables with version metadata")


def _add_show_command(subparsers: Any) -> None:
    """Register show subcommand."""
    parser = subparsers.add_parser("show", help="Print entries of one table as JSON")
    parser.add_argument("type_key", help="Entry type key in module:QualName form")
