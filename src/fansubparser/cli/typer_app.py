"""
fansubparser Typer CLI Application

Commands:
- parse: parse names given on the command line
- batch: parse a text file (or stdin) with one name per line
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from fansubparser.cli.common.context import CliContext, LogLevel, get_cli_context, set_cli_context
from fansubparser.cli.common.error_handler import handle_cli_error
from fansubparser.cli.common.options import (
    config_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from fansubparser.cli.parse_handler import handle_batch_command, handle_parse_command
from fansubparser.config.loader import load_settings
from fansubparser.core.logging import setup_logging
from fansubparser.shared.constants import CLICommands, CLIDefaults, CLIHelp, ParserDefaults

# Version information
__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


def main_callback(
    verbose: int,
    log_level: LogLevel,
    json_output: bool,
    version: bool,
    config: Path | None = None,
) -> None:
    """
    Process the common options before any command runs.

    Loads settings, configures logging and stores the CLI context.

    Args:
        verbose: Verbosity level (count-based)
        log_level: Logging level (enum-based)
        json_output: Whether to output in JSON format
        version: Whether to show version information
        config: Optional TOML configuration file
    """
    if version:
        version_callback(value=True)

    settings = load_settings(config)
    context = CliContext(
        verbose=verbose,
        log_level=log_level,
        json_output=json_output,
        settings=settings,
    )
    setup_logging(
        log_level=context.get_effective_log_level(),
        settings=settings.logging,
    )
    set_cli_context(context)


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
    invoke_without_command=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.INFO,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,
    config: Annotated[Path | None, config_option] = None,
) -> None:
    """Main CLI callback with error handling."""
    try:
        main_callback(verbose, log_level, json_output, version, config)
    except typer.Exit:
        raise
    except Exception as e:
        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


def _json_output_enabled() -> bool:
    try:
        return get_cli_context().is_json_output_enabled()
    except RuntimeError:
        return False


@app.command(CLICommands.PARSE, help=CLIHelp.PARSE_HELP)
def parse_command_typer(
    names: Annotated[list[str], typer.Argument(help=CLIHelp.PARSE_NAMES_HELP)],
) -> None:
    """
    Parse one or more file or directory names.

    Examples:
        fansubparser parse "[HorribleSubs] Working!!! - 07 [720p].mkv"

        fansubparser --json parse "[Coalgirls]_Cross_Ange_01-03_(1280x720_Blu-ray_FLAC)"
    """
    try:
        exit_code = handle_parse_command(names)
    except Exception as e:
        exit_code = handle_cli_error(e, CLICommands.PARSE, json_output=_json_output_enabled())
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)


@app.command(CLICommands.BATCH, help=CLIHelp.BATCH_HELP)
def batch_command_typer(
    source: Annotated[str, typer.Argument(help=CLIHelp.BATCH_SOURCE_HELP)],
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            min=1,
            max=ParserDefaults.MAX_WORKERS_LIMIT,
            help=CLIHelp.WORKERS_HELP,
        ),
    ] = None,
    profile: Annotated[bool, typer.Option("--profile", help=CLIHelp.PROFILE_HELP)] = False,
) -> None:
    """
    Parse every line of a text file (use '-' for stdin).

    Examples:
        fansubparser batch names.txt --workers 8

        ls /media/anime | fansubparser --json batch -
    """
    try:
        exit_code = handle_batch_command(source, workers, profile=profile)
    except Exception as e:
        exit_code = handle_cli_error(e, CLICommands.BATCH, json_output=_json_output_enabled())
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)
