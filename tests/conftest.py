"""
Pytest configuration and shared fixtures for fansubparser tests.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from fansubparser.cli.common.context import clear_cli_context
from fansubparser.core.parser.context import ParseContext


@pytest.fixture
def parse_context() -> ParseContext:
    """A fresh parse context with memoization enabled."""
    return ParseContext.create()


@pytest.fixture
def names_file(tmp_path: Path) -> Path:
    """A text file with a few names, one per line, including a blank line.

    Returns:
        Path to the file.
    """
    path = tmp_path / "names.txt"
    path.write_text(
        "[HorribleSubs] Working!!! - 07 [720p].mkv\n"
        "\n"
        "[Commie] Teekyuu - 38 [76ADB77A].mkv\n"
        "[Coalgirls]_Cross_Ange_01-03_(1280x720_Blu-ray_FLAC)\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None, None, None]:
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _clear_cli_context() -> Generator[None, None, None]:
    clear_cli_context()
    yield
    clear_cli_context()
