"""
Shared Constants

This module collects the constants used across the parser, the
configuration layer and the command-line interface.
"""

from __future__ import annotations


class ParserDefaults:
    """Parser behaviour constants."""

    # Media container extensions recognised at the end of a file name
    MEDIA_EXTENSIONS: tuple[str, ...] = (
        "avi",
        "mkv",
        "mp4",
        "m2ts",
        "ogm",
        "ts",
        "webm",
        "wmv",
    )

    # Memoization cache
    CACHE_MAX_ENTRIES = 4096

    # Batch parsing
    MAX_WORKERS = 4
    MAX_WORKERS_LIMIT = 64


class LogConfig:
    """Logging configuration constants."""

    FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_LEVEL = "INFO"
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5
    VALID_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CLIDefaults:
    """CLI exit codes and version."""

    VERSION = "0.1.0"
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INTERRUPTED = 130
    STDIN_MARKER = "-"


class CLIHelp:
    """Help text for the command-line interface."""

    APP_NAME = "fansubparser"
    APP_DESCRIPTION = "fansubparser - Parse fansub file and directory names into structured metadata"
    APP_STYLE = "rich"
    VERSION_TEXT = "fansubparser {version}"

    PARSE_HELP = "Parse one or more file or directory names."
    PARSE_NAMES_HELP = "File or directory names to parse."
    BATCH_HELP = "Parse every line of a text file (use '-' for stdin)."
    BATCH_SOURCE_HELP = "Text file with one name per line, or '-' to read stdin."
    WORKERS_HELP = "Number of worker threads (defaults to the configured value)."
    PROFILE_HELP = "Record and print per-grammar timings."
    CONFIG_HELP = "Path to a TOML configuration file."


class CLICommands:
    """Command names."""

    PARSE = "parse"
    BATCH = "batch"
