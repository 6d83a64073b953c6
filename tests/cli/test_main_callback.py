"""
Test main callback function.

This test ensures that the main callback function correctly processes
common options, loads settings and sets up the CLI context.
"""

import logging
from pathlib import Path

import pytest
import typer

from fansubparser.cli.common.context import LogLevel, get_cli_context
from fansubparser.cli.typer_app import main_callback
from fansubparser.shared.errors import ApplicationError


def test_main_callback_direct() -> None:
    """Test that main_callback directly sets the context correctly."""
    main_callback(verbose=2, log_level=LogLevel.DEBUG, json_output=True, version=False)

    context = get_cli_context()
    assert context.verbose == 2
    assert context.log_level == LogLevel.DEBUG
    assert context.json_output is True


def test_main_callback_verbose_override() -> None:
    """Test that verbose mode overrides log level to DEBUG."""
    main_callback(verbose=1, log_level=LogLevel.INFO, json_output=False, version=False)

    context = get_cli_context()
    assert context.is_verbose() is True
    assert context.get_effective_log_level() == "DEBUG"
    assert logging.getLogger().level == logging.DEBUG


def test_main_callback_configures_log_level() -> None:
    """The root logger follows the chosen level."""
    main_callback(verbose=0, log_level=LogLevel.WARNING, json_output=False, version=False)
    assert logging.getLogger().level == logging.WARNING


def test_main_callback_version_handling() -> None:
    """Test that the version option exits before anything else."""
    with pytest.raises(typer.Exit):
        main_callback(verbose=0, log_level=LogLevel.INFO, json_output=False, version=True)


def test_main_callback_loads_config(tmp_path: Path) -> None:
    """A --config file feeds the settings stored on the context."""
    config = tmp_path / "fansubparser.toml"
    config.write_text("[parser]\nmax_workers = 3\nenable_profiling = true\n", encoding="utf-8")

    main_callback(
        verbose=0,
        log_level=LogLevel.INFO,
        json_output=False,
        version=False,
        config=config,
    )

    settings = get_cli_context().settings
    assert settings.parser.max_workers == 3
    assert settings.parser.enable_profiling is True


def test_main_callback_invalid_config(tmp_path: Path) -> None:
    """Invalid configuration raises before the context is set."""
    config = tmp_path / "fansubparser.toml"
    config.write_text("[parser]\nmax_workers = 0\n", encoding="utf-8")

    with pytest.raises(ApplicationError):
        main_callback(
            verbose=0,
            log_level=LogLevel.INFO,
            json_output=False,
            version=False,
            config=config,
        )
    with pytest.raises(RuntimeError):
        get_cli_context()
