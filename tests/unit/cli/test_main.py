"""Unit tests for CLI command handling."""

from __future__ import annotations

import json
from dataclasses import replace

from cli.main import main
from core.config import VaultConfig
from core.logging_config import configure_logging
from store.vault_factory import open_file_vault
from sample_entries import Profile, Tier


def _seed_vault(tmp_path) -> None:
    config = replace(VaultConfig.from_env(), data_root=tmp_path, encryption_enabled=False)
    engine = open_file_vault(config)
    engine.set(Profile("ada", 36, ("admin",), Tier.PRO), "p1", version=3)
    engine.save()


def test_cli_tables_lists_metadata(tmp_path, capsys) -> None:
    """CLI tables should print one tab-separated line per table."""
    _seed_vault(tmp_path)

    exit_code = main(["--data-root", str(tmp_path), "tables"])
    fields = capsys.readouterr().out.strip().split("\t")

    assert exit_code == 0 and fields[:3] == ["sample_entries:Profile", "3", "1"] and fields[4] == "1"


def test_cli_show_prints_entries_as_json(tmp_path, capsys) -> None:
    """CLI show should print encoded entries keyed by id."""
    _seed_vault(tmp_path)

    exit_code = main(["--data-root", str(tmp_path), "show", "sample_entries:Profile"])
    entries = json.loads(capsys.readouterr().out)

    assert exit_code == 0 and entries["p1"]["fields"]["name"] == "ada"


def test_cli_show_unknown_table_fails(tmp_path, capsys) -> None:
    """CLI show should exit non-zero for a type without a table."""
    exit_code = main(["--data-root", str(tmp_path), "show", "sample_entries:Profile"])

    assert exit_code == 1 and "No table stored" in capsys.readouterr().err


def test_cli_logs_go_to_stderr_at_info_level(tmp_path, capsys) -> None:
    """Structured log events should never mix into command output."""
    configure_logging("info")
    _seed_vault(tmp_path)
    capsys.readouterr()

    exit_code = main(["--data-root", str(tmp_path), "show", "sample_entries:Profile"])
    captured = capsys.readouterr()

    assert (
        exit_code == 0
        and json.loads(captured.out)["p1"]["fields"]["age"] == 36
        and '"event": "vault_loaded"' in captured.err
        and '"event": "engine_closed"' in captured.err
    )
