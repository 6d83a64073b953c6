"""fansubparser Settings Configuration Model.

Settings are read from ``FANSUBPARSER_`` environment variables and, through
:func:`fansubparser.config.loader.load_settings`, from the
``[tool.fansubparser]`` table of a TOML file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fansubparser.shared.constants import LogConfig, ParserDefaults


class LoggingSettings(BaseModel):
    """Logging configuration.

    This class manages the log level, the format and the optional
    rotating log file.
    """

    level: str = Field(default=LogConfig.DEFAULT_LEVEL, description="Logging level")
    file: str | None = Field(default=None, description="Log file path; no file logging when unset")
    max_bytes: int = Field(
        default=LogConfig.MAX_BYTES,
        gt=0,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        default=LogConfig.BACKUP_COUNT,
        ge=0,
        description="Number of backup log files to keep",
    )
    format: str = Field(default=LogConfig.FORMAT, description="Log format string")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalise the level name and reject unknown levels."""
        level = v.upper()
        if level not in LogConfig.VALID_LEVELS:
            msg = f"Invalid log level: {v}. Must be one of {', '.join(LogConfig.VALID_LEVELS)}"
            raise ValueError(msg)
        return level


class ParserSettings(BaseModel):
    """Parser behaviour: memoization, profiling and batch concurrency."""

    enable_memoization: bool = Field(default=True, description="Cache grammar results per name")
    cache_max_entries: int = Field(
        default=ParserDefaults.CACHE_MAX_ENTRIES,
        gt=0,
        description="Maximum number of memoized grammar results",
    )
    enable_profiling: bool = Field(default=False, description="Record per-grammar timings")
    max_workers: int = Field(
        default=ParserDefaults.MAX_WORKERS,
        ge=1,
        le=ParserDefaults.MAX_WORKERS_LIMIT,
        description="Worker threads for batch parsing",
    )


class Settings(BaseSettings):
    """Top-level settings grouping every configuration domain."""

    model_config = SettingsConfigDict(
        env_prefix="FANSUBPARSER_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    parser: ParserSettings = Field(default_factory=ParserSettings)
