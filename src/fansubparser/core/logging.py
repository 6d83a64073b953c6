"""Centralized logging configuration for fansubparser.

This module sets up the root logger with console output and, when a log
file is configured, a rotating file handler.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from fansubparser.config.settings import LoggingSettings
from fansubparser.shared.constants import LogConfig


def setup_logging(
    log_file: str | None = None,
    log_level: str | None = None,
    log_max_bytes: int | None = None,
    log_backup_count: int | None = None,
    settings: LoggingSettings | None = None,
) -> None:
    """Set up the root logger.

    Explicit arguments take precedence over ``settings``, which in turn
    falls back to the defaults of :class:`LoggingSettings`.

    Args:
        log_file: Path to the log file. No file handler when unset.
        log_level: Logging level name, e.g. ``"DEBUG"``.
        log_max_bytes: Maximum size of the log file before rotation.
        log_backup_count: Number of rotated files to keep.
        settings: Logging settings supplying the defaults.
    """
    settings = settings or LoggingSettings()
    log_file = log_file or settings.file
    log_level = (log_level or settings.level).upper()
    log_max_bytes = log_max_bytes or settings.max_bytes
    log_backup_count = log_backup_count if log_backup_count is not None else settings.backup_count
    level = getattr(logging, log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt=settings.format, datefmt=LogConfig.DATE_FORMAT)

    # Console handler on stderr; stdout carries command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=log_max_bytes,
            backupCount=log_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

