"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path


def pytest_sessionstart() -> None:
    """Add src and shared test helpers to sys.path for test imports."""
    tests_root = Path(__file__).resolve().parent
    project_root = tests_root.parent
    for import_path in (project_root / "src", tests_root):
        if str(import_path) not in sys.path:
            sys.path.insert(0, str(import_path))
