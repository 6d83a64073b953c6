"""Tests for CLI error handling."""

from __future__ import annotations

import orjson
import pytest

from fansubparser.cli.common.error_handler import handle_cli_error
from fansubparser.shared.errors import (
    ErrorCode,
    create_cli_error,
    create_config_error,
    create_file_not_found_error,
    create_validation_error,
)


class TestHandleCliError:
    """Mapping, exit codes and plain-text output."""

    def test_application_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Application errors keep their message and exit with 1."""
        error = create_config_error("Invalid configuration in app.toml", file_path="app.toml")

        exit_code = handle_cli_error(error, "parse")

        assert exit_code == 1
        captured = capsys.readouterr()
        assert "Error: Application error: Invalid configuration in app.toml" in captured.err
        assert captured.out == ""

    def test_infrastructure_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        error = create_file_not_found_error("names.txt", operation="read_names")

        assert handle_cli_error(error, "batch") == 1
        assert "Infrastructure error: File not found: names.txt" in capsys.readouterr().err

    def test_domain_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        error = create_validation_error("No names to parse in -", field="source")

        assert handle_cli_error(error, "batch") == 1
        assert "Invalid input: No names to parse in -" in capsys.readouterr().err

    def test_cli_error_passes_through(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A CliError keeps its own exit code."""
        error = create_cli_error("bad arguments", command="parse", exit_code=3)

        assert handle_cli_error(error, "parse") == 3
        assert "Error: bad arguments" in capsys.readouterr().err

    def test_os_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert handle_cli_error(OSError("disk gone"), "batch") == 1
        assert "File system error: disk gone" in capsys.readouterr().err

    def test_keyboard_interrupt(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Interrupts exit with 130."""
        assert handle_cli_error(KeyboardInterrupt(), "batch") == 130
        assert "interrupted" in capsys.readouterr().err

    def test_unexpected_error_is_logged(
        self,
        capsys: pytest.CaptureFixture[str],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Unexpected errors are logged at error level."""
        with caplog.at_level("ERROR", logger="fansubparser.cli.common.error_handler"):
            exit_code = handle_cli_error(ValueError("boom"), "parse")

        assert exit_code == 1
        assert "Unexpected error: boom" in capsys.readouterr().err
        assert "CLI error in parse: Unexpected error: boom" in caplog.text


class TestJsonErrorOutput:
    """Error envelopes in JSON mode."""

    def test_json_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The envelope carries the code, the type and the exit code."""
        error = create_file_not_found_error("names.txt")

        exit_code = handle_cli_error(error, "batch", json_output=True)

        payload = orjson.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert payload["success"] is False
        assert payload["command"] == "batch"
        assert payload["errors"] == ["Infrastructure error: File not found: names.txt"]
        assert payload["data"]["error_code"] == ErrorCode.FILE_NOT_FOUND.value
        assert payload["data"]["error_type"] == "InfrastructureError"
        assert payload["data"]["exit_code"] == 1
        assert payload["data"]["context"]["command"] == "batch"

    def test_json_interrupt(self, capsys: pytest.CaptureFixture[str]) -> None:
        handle_cli_error(KeyboardInterrupt(), "batch", json_output=True)

        payload = orjson.loads(capsys.readouterr().out)
        assert payload["data"]["error_code"] == ErrorCode.CLI_COMMAND_INTERRUPTED.value
        assert payload["data"]["exit_code"] == 130
