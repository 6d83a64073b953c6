"""
Test CLI context management system.

This test ensures that the context management system works correctly
with ContextVar and carries the loaded settings.
"""

import pytest
from pydantic import ValidationError

from fansubparser.cli.common.context import (
    CliContext,
    LogLevel,
    clear_cli_context,
    get_cli_context,
    set_cli_context,
)
from fansubparser.config.settings import ParserSettings, Settings


def test_cli_context_creation() -> None:
    """Test that CliContext can be created with default values."""
    context = CliContext()

    assert context.verbose == 0
    assert context.log_level == LogLevel.INFO
    assert context.json_output is False
    assert context.settings.parser == ParserSettings()


def test_cli_context_custom_values() -> None:
    """Test that CliContext can be created with custom values."""
    settings = Settings(parser=ParserSettings(max_workers=2))
    context = CliContext(verbose=2, log_level=LogLevel.DEBUG, json_output=True, settings=settings)

    assert context.verbose == 2
    assert context.log_level == LogLevel.DEBUG
    assert context.json_output is True
    assert context.settings.parser.max_workers == 2


def test_cli_context_validation() -> None:
    """Test that CliContext validates input values."""
    with pytest.raises(ValidationError):
        CliContext(verbose=-1)

    with pytest.raises(ValidationError):
        CliContext(log_level="INVALID")


def test_cli_context_get_effective_log_level() -> None:
    """Verbose mode forces DEBUG, otherwise the chosen level applies."""
    assert CliContext(verbose=1, log_level=LogLevel.ERROR).get_effective_log_level() == "DEBUG"
    assert CliContext(log_level=LogLevel.WARNING).get_effective_log_level() == "WARNING"


def test_cli_context_is_json_output_enabled() -> None:
    """Test the is_json_output_enabled method."""
    assert CliContext(json_output=True).is_json_output_enabled()
    assert not CliContext().is_json_output_enabled()


def test_context_var_roundtrip() -> None:
    """Test setting, reading and clearing the global context."""
    context = CliContext(verbose=1)
    set_cli_context(context)
    assert get_cli_context() is context

    clear_cli_context()
    with pytest.raises(RuntimeError, match="not been initialized"):
        get_cli_context()
