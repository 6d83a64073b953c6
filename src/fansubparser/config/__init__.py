"""fansubparser Configuration Module

- Settings: top-level configuration, with LoggingSettings and ParserSettings
- load_settings: read settings from a TOML file or the environment
"""

from __future__ import annotations

from .loader import load_settings
from .settings import LoggingSettings, ParserSettings, Settings

__all__ = [
    "LoggingSettings",
    "ParserSettings",
    "Settings",
    "load_settings",
]
