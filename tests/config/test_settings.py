"""Tests for settings models and the TOML settings loader."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from fansubparser.config import LoggingSettings, ParserSettings, Settings, load_settings
from fansubparser.shared.constants import LogConfig, ParserDefaults
from fansubparser.shared.errors import ApplicationError, ErrorCode, InfrastructureError


class TestSettingsModels:
    """Defaults and validation."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.logging.level == LogConfig.DEFAULT_LEVEL
        assert settings.logging.file is None
        assert settings.parser.enable_memoization is True
        assert settings.parser.enable_profiling is False
        assert settings.parser.max_workers == ParserDefaults.MAX_WORKERS

    def test_log_level_is_normalised(self) -> None:
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError, match="Invalid log level"):
            LoggingSettings(level="LOUD")

    @pytest.mark.parametrize("workers", [0, ParserDefaults.MAX_WORKERS_LIMIT + 1])
    def test_worker_bounds(self, workers: int) -> None:
        with pytest.raises(ValidationError):
            ParserSettings(max_workers=workers)

    def test_cache_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ParserSettings(cache_max_entries=0)


class TestEnvironment:
    """FANSUBPARSER_ environment variables."""

    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FANSUBPARSER_PARSER__MAX_WORKERS", "8")
        monkeypatch.setenv("FANSUBPARSER_LOGGING__LEVEL", "warning")

        settings = Settings()

        assert settings.parser.max_workers == 8
        assert settings.logging.level == "WARNING"

    def test_empty_env_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FANSUBPARSER_PARSER__MAX_WORKERS", "")
        assert Settings().parser.max_workers == ParserDefaults.MAX_WORKERS


class TestLoadSettings:
    """Loading settings from TOML files."""

    def test_without_path(self) -> None:
        assert load_settings() == Settings()

    def test_dedicated_file(self, tmp_path: Path) -> None:
        config = tmp_path / "fansubparser.toml"
        config.write_text(
            '[logging]\nlevel = "DEBUG"\nfile = "logs/fansubparser.log"\n'
            "[parser]\nmax_workers = 2\nenable_memoization = false\n",
            encoding="utf-8",
        )

        settings = load_settings(config)

        assert settings.logging.level == "DEBUG"
        assert settings.logging.file == "logs/fansubparser.log"
        assert settings.parser.max_workers == 2
        assert settings.parser.enable_memoization is False

    def test_pyproject_table(self, tmp_path: Path) -> None:
        """Settings are read from [tool.fansubparser] in a pyproject file."""
        config = tmp_path / "pyproject.toml"
        config.write_text(
            '[project]\nname = "demo"\n\n[tool.fansubparser.parser]\nenable_profiling = true\n',
            encoding="utf-8",
        )

        assert load_settings(config).parser.enable_profiling is True

    def test_pyproject_without_table(self, tmp_path: Path) -> None:
        """Other tools' tables leave the defaults in place."""
        config = tmp_path / "pyproject.toml"
        config.write_text("[tool.black]\nline-length = 100\n", encoding="utf-8")

        assert load_settings(config) == Settings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InfrastructureError) as exc_info:
            load_settings(tmp_path / "nope.toml")

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND
        assert exc_info.value.context.operation == "load_settings"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config = tmp_path / "broken.toml"
        config.write_text("[parser\n", encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(config)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID
        assert exc_info.value.original_error is not None

    def test_invalid_values(self, tmp_path: Path) -> None:
        config = tmp_path / "fansubparser.toml"
        config.write_text('[parser]\nmax_workers = 0\n[logging]\nlevel = "LOUD"\n', encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(config)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID
        assert exc_info.value.context.additional_data == {"error_count": 2}
