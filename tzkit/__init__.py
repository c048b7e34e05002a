"""tzkit - list IANA time zones, convert date-times between them, format the results.

Time zone rules come from the standard library's ``zoneinfo`` (backed by the
``tzdata`` package where the host has no zone database). The package adds the
bundled zone/region tables, lookups over them, and presentation options.
"""

__version__ = "1.0.0"

from typing import Optional

from .conversion import (
    add_time_to_date,
    convert_between_time_zones,
    convert_date_time,
    convert_to_utc,
    convert_utc_to_local,
    convert_utc_to_time_zone,
    format_date_time,
    get_current_time_in_time_zone,
    get_local_time_zone,
    get_time_difference_between_time_zones,
)
from .exceptions import (
    InvalidDateFormatError,
    InvalidFormatOptionsError,
    InvalidTimeZoneError,
    InvalidUnitError,
    RegistryLoadError,
    TimezoneUtilityError,
)
from .lookup import (
    get_entry_by_value,
    get_label_from_value,
    get_regions,
    get_value_from_label,
    list_by_country,
    list_by_region,
    list_labels_only,
    list_timezones,
    list_values_only,
)
from .models import ConversionError, ConversionResult, FormatOptions, TimeZoneEntry
from .registry import Registry, get_registry, load_registry
from .validation import ZoneName, is_iso_datetime, is_valid_time_zone


def _init_logging(level_name: Optional[str]) -> None:
    """Initialize root logging to stream to console.

    Installs a colorized stderr handler when the root logger has none, then sets
    the root level from ``level_name`` (case-insensitive, default WARNING).
    The TZKIT_DEBUG environment variable (truthy values: "1", "true", "yes",
    "on") forces DEBUG.
    """
    import logging
    import os
    import sys

    from colorlog import ColoredFormatter

    debug_env = os.environ.get("TZKIT_DEBUG", "")
    if debug_env.strip().lower() in ("1", "true", "yes", "on"):
        level_name = "DEBUG"

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        # HH:MM:SS  LEVEL   logger.name: message
        fmt = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
        log_colors = {
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        }
        handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S", log_colors=log_colors))
        root.addHandler(handler)

    level = logging.WARNING
    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), logging.WARNING)
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )


__all__ = [
    "ConversionError",
    "ConversionResult",
    "FormatOptions",
    "InvalidDateFormatError",
    "InvalidFormatOptionsError",
    "InvalidTimeZoneError",
    "InvalidUnitError",
    "Registry",
    "RegistryLoadError",
    "TimeZoneEntry",
    "TimezoneUtilityError",
    "ZoneName",
    "__version__",
    "add_time_to_date",
    "convert_between_time_zones",
    "convert_date_time",
    "convert_to_utc",
    "convert_utc_to_local",
    "convert_utc_to_time_zone",
    "format_date_time",
    "get_current_time_in_time_zone",
    "get_entry_by_value",
    "get_label_from_value",
    "get_local_time_zone",
    "get_registry",
    "get_regions",
    "get_time_difference_between_time_zones",
    "get_value_from_label",
    "is_iso_datetime",
    "is_valid_time_zone",
    "list_by_country",
    "list_by_region",
    "list_labels_only",
    "list_timezones",
    "list_values_only",
    "load_registry",
]
