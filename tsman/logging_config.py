"""Logging configuration for tsman.

This module provides:
- A rotating log file under the tsman config directory
- Optional console output for plain CLI commands
- Per-module debug levels for troubleshooting capture and restore

The interactive menu owns the terminal, so it never logs to the console;
when no handler is configured, records are swallowed by a NullHandler
instead of reaching logging's last-resort handler.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

from tsman.config import CONFIG_DIR

PACKAGE_LOGGER = "tsman"

DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
DEFAULT_BACKUP_COUNT = 3

LOG_DIR = CONFIG_DIR / "logs"
LOG_FILE_NAME = "tsman.log"

# Subcommands that start the menu; None is a bare ``tsman``
INTERACTIVE_COMMANDS = frozenset({None, "menu", "m"})


def get_log_file_path() -> Path:
    """Get the path to the log file, creating its directory if needed."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    return LOG_DIR / LOG_FILE_NAME


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), DEFAULT_LOG_LEVEL)
    return level


def setup_logging(
    *,
    level: int | str = DEFAULT_LOG_LEVEL,
    log_to_file: bool = True,
    log_to_console: bool = False,
    console_stream: TextIO = sys.stderr,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    debug_modules: list[str] | None = None,
) -> logging.Logger:
    """Configure the ``tsman`` logger.

    Any handlers from a previous call are replaced.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_to_file: Write to the rotating log file.
        log_to_console: Write to ``console_stream``.
        console_stream: Stream for console output.
        max_bytes: Maximum log file size before rotation.
        backup_count: Number of rotated files to keep.
        debug_modules: Modules to set to DEBUG, e.g. ``["tmux.restore"]``.

    Returns:
        The configured package logger.
    """
    level = _resolve_level(level)
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.handlers.clear()

    handlers: list[logging.Handler] = []
    if log_to_file:
        handlers.append(
            RotatingFileHandler(
                get_log_file_path(),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )
    if log_to_console:
        handlers.append(logging.StreamHandler(console_stream))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if not handlers:
        package_logger.addHandler(logging.NullHandler())

    for module_name in debug_modules or []:
        if not module_name.startswith(f"{PACKAGE_LOGGER}."):
            module_name = f"{PACKAGE_LOGGER}.{module_name}"
        logging.getLogger(module_name).setLevel(logging.DEBUG)

    return package_logger


def setup_cli_logging(
    command: str | None,
    *,
    debug: bool = False,
    level: int | str = DEFAULT_LOG_LEVEL,
    log_to_file: bool = True,
) -> logging.Logger:
    """Configure logging for one CLI invocation.

    ``--debug`` forces DEBUG and the log file, and echoes to stderr unless
    the command starts the menu.

    Args:
        command: The parsed subcommand, or None for a bare ``tsman``.
        debug: ``--debug`` was given.
        level: ``--log-level``.
        log_to_file: False when ``--no-log-file`` was given.
    """
    if debug:
        return setup_logging(
            level=logging.DEBUG,
            log_to_file=True,
            log_to_console=command not in INTERACTIVE_COMMANDS,
        )
    return setup_logging(level=level, log_to_file=log_to_file)


def log_exception(
    logger: logging.Logger,
    exc: Exception,
    message: str = "An error occurred",
    *,
    level: int = logging.ERROR,
    include_traceback: bool = True,
) -> None:
    """Log an exception with consistent formatting.

    Args:
        logger: Logger to use.
        exc: Exception to log.
        message: Human-readable message prefix.
        level: Log level (default ERROR).
        include_traceback: Whether to include full traceback.
    """
    if include_traceback:
        logger.log(level, "%s: %s", message, exc, exc_info=True)
    else:
        logger.log(level, "%s: %s (%s)", message, exc, type(exc).__name__)
