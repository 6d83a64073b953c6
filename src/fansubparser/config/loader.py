"""Settings loader.

Reads settings from a TOML file, either a dedicated configuration file or a
``pyproject.toml`` carrying a ``[tool.fansubparser]`` table. Environment
variables still override values that the file leaves unset.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from fansubparser.config.settings import Settings
from fansubparser.shared.errors import create_config_error, create_file_not_found_error

logger = logging.getLogger(__name__)

TOOL_TABLE = "tool"
TOOL_NAME = "fansubparser"


def _settings_section(document: dict[str, Any]) -> dict[str, Any]:
    """Pick the fansubparser table out of a parsed TOML document."""
    if TOOL_TABLE in document:
        section = document[TOOL_TABLE].get(TOOL_NAME, {})
        return section if isinstance(section, dict) else {}
    return document


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. A file with a ``[tool]``
            table is read from ``[tool.fansubparser]``; any other file is
            read as a whole. Without a path only environment variables and
            defaults apply.

    Returns:
        Settings instance.

    Raises:
        InfrastructureError: If the file does not exist.
        ApplicationError: If the file is not valid TOML or fails validation
            (``CONFIG_INVALID``).
    """
    if config_path is None:
        return Settings()

    path = Path(config_path)
    if not path.is_file():
        raise create_file_not_found_error(str(path), operation="load_settings")

    try:
        with path.open("rb") as f:
            document = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise create_config_error(
            f"Invalid TOML in {path}: {e}",
            file_path=str(path),
            original_error=e,
        ) from e

    section = _settings_section(document)
    try:
        settings = Settings(**section)
    except ValidationError as e:
        raise create_config_error(
            f"Invalid configuration in {path}: {e.error_count()} validation error(s)",
            file_path=str(path),
            error_count=e.error_count(),
            original_error=e,
        ) from e

    logger.debug("Loaded settings from %s", path)
    return settings
