"""fansubparser Error Handling Module

This module defines the structured errors raised by the outer surfaces of
fansubparser (configuration loading, batch input files, the CLI).

The grammar core never raises: an unrecognised name is an absent result and
a failed sub-grammar is a ``Failure`` value. Everything that can go wrong
around it follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

from fansubparser.shared.constants import CLIDefaults

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for fansubparser."""

    # File System Errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    FILE_READ_ERROR = "FILE_READ_ERROR"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Configuration Errors
    CONFIG_INVALID = "CONFIG_INVALID"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_COMMAND_INTERRUPTED = "CLI_COMMAND_INTERRUPTED"
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContextModel:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so the context always serializes cleanly.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            object.__setattr__(
                self, "additional_data", _coerce_primitives(self.additional_data)
            )

    def safe_dict(self, *, mask_keys: tuple[str, ...] = ()) -> dict[str, Any]:
        """Export context as dict.

        Args:
            mask_keys: Fields to exclude from output.

        Returns:
            Dictionary with the set fields and a guaranteed additional_data key.

        Example:
            >>> ErrorContext(file_path="/names.txt").safe_dict()
            {'file_path': '/names.txt', 'additional_data': {}}
        """
        data: dict[str, Any] = {}
        if self.file_path is not None and "file_path" not in mask_keys:
            data["file_path"] = self.file_path
        if self.operation is not None and "operation" not in mask_keys:
            data["operation"] = self.operation

        if self.additional_data is not None and "additional_data" not in mask_keys:
            data["additional_data"] = self.additional_data
        else:
            data["additional_data"] = {}

        return data


ErrorContext = ErrorContextModel


class FansubParserError(Exception):
    """Base exception class for all fansubparser errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize FansubParserError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging and JSON output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(FansubParserError):
    """Domain-specific errors.

    Raised when a request to the parser is meaningless, for example a batch
    that contains no names at all.
    """


class InfrastructureError(FansubParserError):
    """Infrastructure-related errors.

    Raised when reading configuration or input files from disk fails.
    """


class ApplicationError(FansubParserError):
    """Application-level errors.

    Typically related to configuration or command handling.
    """


class CliError(ApplicationError):
    """CLI-specific error with an exit code and the failing command."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = CLIDefaults.EXIT_ERROR,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


def create_file_not_found_error(
    file_path: str,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> InfrastructureError:
    """Create a file not found error with context."""
    return InfrastructureError(
        ErrorCode.FILE_NOT_FOUND,
        f"File not found: {file_path}",
        ErrorContext(file_path=file_path, operation=operation),
        original_error,
    )


def create_file_read_error(
    file_path: str,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> InfrastructureError:
    """Create a file read error, using PERMISSION_DENIED where it applies."""
    if isinstance(original_error, PermissionError):
        code, message = ErrorCode.PERMISSION_DENIED, f"Permission denied: {file_path}"
    else:
        code, message = ErrorCode.FILE_READ_ERROR, f"Could not read file: {file_path}"
    return InfrastructureError(
        code,
        message,
        ErrorContext(file_path=file_path, operation=operation),
        original_error,
    )


def create_validation_error(
    message: str,
    field: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> DomainError:
    """Create a validation error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"field": field} if field else None
    )
    return DomainError(
        ErrorCode.VALIDATION_ERROR,
        message,
        ErrorContext(operation=operation, additional_data=additional_data),
        original_error,
    )


def create_config_error(
    message: str,
    file_path: str | None = None,
    error_count: int | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create an invalid-configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"error_count": error_count} if error_count is not None else None
    )
    return ApplicationError(
        ErrorCode.CONFIG_INVALID,
        message,
        ErrorContext(
            file_path=file_path,
            operation="load_settings",
            additional_data=additional_data,
        ),
        original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = CLIDefaults.EXIT_ERROR,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    return CliError(
        code,
        message,
        ErrorContext(operation=operation, additional_data=additional_data),
        original_error,
        command,
        exit_code,
    )


def create_cli_output_error(
    message: str,
    command: str | None = None,
    output_type: str | None = None,
    original_error: Exception | None = None,
) -> CliError:
    """Create a CLI output error with context."""
    additional_data: dict[str, PrimitiveContextValue] = {}
    if command is not None:
        additional_data["command"] = command
    if output_type is not None:
        additional_data["output_type"] = output_type

    return CliError(
        ErrorCode.CLI_OUTPUT_ERROR,
        message,
        ErrorContext(
            operation="cli_output",
            additional_data=additional_data if additional_data else None,
        ),
        original_error,
        command,
        exit_code=CLIDefaults.EXIT_ERROR,
    )
