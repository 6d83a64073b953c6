"""
Reusable Typer Options Module

Common option definitions shared by the main callback.

The options include:
- verbose: Verbosity level (count-based)
- log_level: Logging level (enum-based)
- json_output: JSON output mode (flag-based)
- version: Print the version and exit
- config: TOML configuration file
"""

from __future__ import annotations

import typer

from fansubparser.shared.constants import CLIHelp

# Verbose option - count-based for multiple -v flags
verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)


# Log level option - enum-based with case-insensitive choices
log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO.",
)


# JSON output option - flag-based
json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of human-readable format.",
)


# Version option - for main app only
version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    is_eager=True,
)


config_option = typer.Option(
    "--config",
    "-c",
    help=CLIHelp.CONFIG_HELP,
    dir_okay=False,
)
