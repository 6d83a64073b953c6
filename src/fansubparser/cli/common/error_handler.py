"""
CLI Error Handling Utilities

Maps any exception raised by a command to a CliError, logs it and prints it
either as plain text on stderr or as a JSON error envelope on stdout.
"""

from __future__ import annotations

import logging
from typing import Any

import typer

from fansubparser.cli.json_formatter import format_json_output
from fansubparser.shared.constants import CLIDefaults
from fansubparser.shared.errors import (
    ApplicationError,
    CliError,
    DomainError,
    ErrorCode,
    InfrastructureError,
    create_cli_error,
    create_cli_output_error,
)

logger = logging.getLogger(__name__)


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context = _create_error_context(error, command, json_output=json_output)
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, error_context, json_output=json_output)

    return cli_error.exit_code


def _create_error_context(
    error: BaseException,
    command: str,
    *,
    json_output: bool,
) -> dict[str, Any]:
    """Create structured error context for logging."""
    return {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }


def _map_error_to_cli_error(
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    if isinstance(error, ApplicationError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Application error: {error.message}",
            command=command,
            original_error=error,
            code=error.code,
        )

    if isinstance(error, InfrastructureError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Infrastructure error: {error.message}",
            command=command,
            original_error=error,
            code=error.code,
        )

    if isinstance(error, DomainError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Invalid input: {error.message}",
            command=command,
            original_error=error,
            code=error.code,
        )

    # Handle file system errors
    if isinstance(error, OSError):
        error_context["error_category"] = "file_system"
        return create_cli_error(
            message=f"File system error: {error}",
            command=command,
            original_error=error,
        )

    # Handle user interrupts
    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
            code=ErrorCode.CLI_COMMAND_INTERRUPTED,
        )

    # Handle unexpected errors
    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error if isinstance(error, Exception) else None,
    )


def _log_error(
    error: BaseException,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Log the error with structured context."""
    if isinstance(error, KeyboardInterrupt):
        logger.warning(
            "Command interrupted: %s",
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, (ApplicationError, InfrastructureError, DomainError)):
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )
    else:
        logger.exception(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )


def _output_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    """Output error message in appropriate format."""
    if json_output:
        _output_json_error(cli_error, error, command, error_context)
    else:
        typer.echo(f"Error: {cli_error.message}", err=True)


def _output_json_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> None:
    """Output error in JSON format."""
    try:
        error_output = format_json_output(
            success=False,
            command=command,
            errors=[cli_error.message],
            data={
                "error_code": cli_error.code.value,
                "error_type": type(error).__name__,
                "exit_code": cli_error.exit_code,
                "context": error_context,
            },
        )
        typer.echo(error_output.decode("utf-8"))
    except (OSError, UnicodeError) as output_error:
        _handle_json_output_error(output_error, command, cli_error, error_context)


def _handle_json_output_error(
    output_error: Exception,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Handle JSON output error with fallback to stderr."""
    cli_output_error = create_cli_output_error(
        message=f"Failed to format JSON output: {output_error}",
        command=command,
        output_type="json",
        original_error=output_error,
    )
    logger.exception(
        "JSON output error: %s",
        cli_output_error.message,
        extra={"context": error_context},
    )
    typer.echo(f"Error: {cli_error.message}", err=True)
    typer.echo(f"JSON output failed: {cli_output_error.message}", err=True)
