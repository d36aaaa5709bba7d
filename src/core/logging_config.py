"""Structured logging configuration.

This module configures structlog once per process with JSON output on
stderr and a level filter. Host applications that configure structlog
themselves keep their own setup.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL
from core.errors import TableVaultConfigError

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(level: str | None = None) -> None:
    """Configure structlog for TableVault events.

    Args:
        level: Minimum level name; read from TABLEVAULT_LOG_LEVEL when omitted.

    Raises:
        TableVaultConfigError: If the level name is unknown.
    """
    level_value = parse_log_level(level or os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL))
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        logger_factory=_stderr_logger_factory,
    )


def _stderr_logger_factory(*_args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger; stdout carries command output only.
    return structlog.PrintLogger(sys.stderr)


def parse_log_level(level: str) -> int:
    """Map a level name onto its numeric value.

    Raises:
        TableVaultConfigError: If the level name is unknown.
    """
    normalized = level.strip().lower()
    if normalized not in _LEVELS:
        supported = ", ".join(_LEVELS)
        raise TableVaultConfigError(
            f"Invalid {ENV_LOG_LEVEL} value '{level}'. Choose one of: {supported}."
        )
    return _LEVELS[normalized]


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)
