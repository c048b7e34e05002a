"""Configuration for the tzkit command-line tool and logging.

Library functions never read configuration; they take explicit arguments.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import FormatOptions
from .validation import is_valid_time_zone

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ("1", "true", "yes", "on")
FALSY_VALUES = ("0", "false", "no", "off")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def parse_env_file(path: Path) -> dict[str, str]:
    """Parse a .env file and return key-value pairs.

    Args:
        path: Path to .env file

    Returns:
        Dictionary of key-value pairs from the .env file.
        Empty dict if file doesn't exist or cannot be read.

    Note:
        - Skips empty lines and comments (lines starting with #)
        - Strips quotes (both single and double) from values
        - Handles KEY=VALUE format with optional whitespace
    """
    if not path.exists():
        return {}

    result: dict[str, str] = {}

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("Failed to read .env file (continuing): %s", str(path), exc_info=True)
        return {}

    for raw_line in content.splitlines():
        line = raw_line.strip()

        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip().strip('"').strip("'")

        if key:
            result[key] = val

    return result


def _parse_bool(name: str, raw: str) -> Optional[bool]:
    lowered = raw.strip().lower()
    if lowered in TRUTHY_VALUES:
        return True
    if lowered in FALSY_VALUES:
        return False
    logger.warning("Invalid %s=%r; ignoring", name, raw)
    return None


class TzkitSettings(BaseModel):
    """Resolved settings for the CLI."""

    log_level: str = Field(default="WARNING", description="Root log level")
    debug: bool = Field(default=False, description="Enable DEBUG logging for tzkit modules")
    default_timezone: str = Field(default="UTC", description="Zone used when none is given")
    is_24_hour: bool = True
    date_separator: str = "-"
    time_separator: str = ":"

    model_config = ConfigDict(frozen=True)

    def format_options(self, return_iso: bool = True) -> FormatOptions:
        """Build FormatOptions from the configured presentation defaults."""
        return FormatOptions(
            return_iso=return_iso,
            is_24_hour=self.is_24_hour,
            date_separator=self.date_separator,
            time_separator=self.time_separator,
        )


class ConfigManager:
    """Manages tzkit configuration from environment variables and .env files."""

    def __init__(self, env_file_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            env_file_path: Optional path to .env file (defaults to .env in current directory)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Load .env file and set environment variables.

        Only sets variables that are not already in the environment.

        Returns:
            List of environment variable keys that were loaded from .env file
        """
        if not self.env_file_path.exists():
            logger.debug("No .env file found at %s", self.env_file_path)
            return []

        parsed = parse_env_file(self.env_file_path)

        set_keys = []
        for key, val in parsed.items():
            if key not in os.environ:
                os.environ[key] = val
                set_keys.append(key)

        if set_keys:
            logger.debug("Loaded .env defaults for keys: %s", ", ".join(set_keys))

        return set_keys

    def build_settings_from_env(self) -> TzkitSettings:
        """Build settings from environment variables.

        Recognizes:
        - TZKIT_LOG_LEVEL -> 'log_level' (DEBUG, INFO, WARNING, ERROR)
        - TZKIT_DEBUG -> 'debug' (truthy/falsy)
        - TZKIT_DEFAULT_TIMEZONE -> 'default_timezone' (must be a registry identifier)
        - TZKIT_24_HOUR -> 'is_24_hour' (truthy/falsy)
        - TZKIT_DATE_SEPARATOR -> 'date_separator'
        - TZKIT_TIME_SEPARATOR -> 'time_separator'

        Invalid values are logged and ignored.
        """
        cfg: dict[str, Any] = {}

        log_level = os.environ.get("TZKIT_LOG_LEVEL")
        if log_level:
            if log_level.strip().upper() in LOG_LEVELS:
                cfg["log_level"] = log_level.strip().upper()
            else:
                logger.warning("Invalid TZKIT_LOG_LEVEL=%r; ignoring", log_level)

        debug = os.environ.get("TZKIT_DEBUG")
        if debug:
            parsed_debug = _parse_bool("TZKIT_DEBUG", debug)
            if parsed_debug is not None:
                cfg["debug"] = parsed_debug

        default_tz = os.environ.get("TZKIT_DEFAULT_TIMEZONE")
        if default_tz:
            if is_valid_time_zone(default_tz):
                cfg["default_timezone"] = default_tz
            else:
                logger.warning("Invalid TZKIT_DEFAULT_TIMEZONE=%r; ignoring", default_tz)

        clock_24 = os.environ.get("TZKIT_24_HOUR")
        if clock_24:
            parsed_clock = _parse_bool("TZKIT_24_HOUR", clock_24)
            if parsed_clock is not None:
                cfg["is_24_hour"] = parsed_clock

        date_sep = os.environ.get("TZKIT_DATE_SEPARATOR")
        if date_sep:
            cfg["date_separator"] = date_sep

        time_sep = os.environ.get("TZKIT_TIME_SEPARATOR")
        if time_sep:
            cfg["time_separator"] = time_sep

        return TzkitSettings(**cfg)

    def load_settings(self) -> TzkitSettings:
        """Load .env file and build settings from environment.

        This is the main entry point for loading configuration.
        """
        self.load_env_file()
        return self.build_settings_from_env()
