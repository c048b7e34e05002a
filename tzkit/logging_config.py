"""
Central logging configuration for tzkit.

Sets the root and package logger levels, with environment overrides for
troubleshooting.
"""

import logging
import os
from typing import Optional

PACKAGE_LOGGERS = (
    "tzkit",
    "tzkit.registry",
    "tzkit.lookup",
    "tzkit.validation",
    "tzkit.conversion",
    "tzkit.clock",
    "tzkit.config",
)


def configure_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    default_level: int = logging.INFO,
    level_override: Optional[int] = None,
) -> None:
    """
    Configure logging levels for tzkit.

    Args:
        debug_mode: Whether to enable debug logging for tzkit modules
        force_debug: Override debug mode setting (None to use env var detection)
        default_level: Root level when neither debug mode nor TZKIT_LOG_LEVEL applies
        level_override: Explicit root level (e.g. from --log-level); beats TZKIT_LOG_LEVEL

    Environment Variables:
        TZKIT_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        TZKIT_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("TZKIT_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("TZKIT_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else default_level
    if level_override is not None:
        root_level = level_override
    elif env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    package_level = logging.DEBUG if final_debug else root_level
    for logger_name in PACKAGE_LOGGERS:
        logging.getLogger(logger_name).setLevel(package_level)

    if final_debug:
        root_logger.debug("Debug logging enabled for tzkit modules")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}

    for logger_name in PACKAGE_LOGGERS:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)

    return status
