"""Validation of zone identifiers and ISO 8601 date-time strings."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from dateutil import parser as date_parser

from .exceptions import InvalidTimeZoneError
from .registry import Registry, get_registry

logger = logging.getLogger(__name__)

# YYYY-MM-DDTHH:mm:ss[.fraction][Z|+HH:MM|-HH:MM]
ISO_DATETIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?$"
)


def is_valid_time_zone(zone: Any, registry: Optional[Registry] = None) -> bool:
    """Return True if ``zone`` is exactly one of the registry's identifiers."""
    reg = registry if registry is not None else get_registry()
    return zone in reg


def is_iso_datetime(value: Any) -> bool:
    """Return True if ``value`` is a ``YYYY-MM-DDTHH:mm:ss`` style timestamp.

    The string must match the narrow pattern (optional fraction and optional
    ``Z`` or ``±HH:MM`` suffix) and also name a real calendar date and time, so
    "2023-02-30T10:00:00" is rejected.
    """
    if not isinstance(value, str) or not ISO_DATETIME_PATTERN.match(value):
        return False
    try:
        date_parser.isoparse(value)
    except (ValueError, OverflowError):
        logger.debug("Rejected out-of-range ISO date-time %r", value)
        return False
    return True


class ZoneName(str):
    """A zone identifier known to be present in the registry.

    Only ``ZoneName.parse`` should be used to construct instances, so holding a
    ZoneName is proof the identifier was validated.
    """

    __slots__ = ()

    @classmethod
    def parse(cls, value: Any, registry: Optional[Registry] = None) -> ZoneName:
        """Validate ``value`` and wrap it.

        Raises:
            InvalidTimeZoneError: If the identifier is not in the registry
        """
        if isinstance(value, cls):
            return value
        if not is_valid_time_zone(value, registry):
            logger.debug("Rejected unknown time zone identifier %r", value)
            raise InvalidTimeZoneError(f"Unknown time zone: {value!r}")
        return cls(value)
