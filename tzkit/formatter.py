"""Rendering of resolved date-times.

All output is locale-fixed and numeric with two-digit padding: ISO output is
year-month-day, display output is day/month/year. The host locale is never
consulted.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from .exceptions import InvalidFormatOptionsError
from .models import FormatOptions

logger = logging.getLogger(__name__)

OptionsLike = Union[FormatOptions, Mapping[str, Any], None]

# Applied in order; substituted digits never contain another token.
PATTERN_TOKENS: tuple[tuple[str, str], ...] = (
    ("yyyy", "{year:04d}"),
    ("MM", "{month:02d}"),
    ("dd", "{day:02d}"),
    ("HH", "{hour:02d}"),
    ("mm", "{minute:02d}"),
    ("ss", "{second:02d}"),
)


def format_options(options: OptionsLike = None, **overrides: Any) -> FormatOptions:
    """Coerce ``options`` into a FormatOptions instance.

    Accepts an existing FormatOptions, a mapping using either snake_case or the
    camelCase aliases (``returnISO``, ``is24Hour``, ``dateSeparator``,
    ``timeSeparator``), or None for the defaults. Keyword overrides win.

    Raises:
        InvalidFormatOptionsError: If the options or overrides fail validation
    """
    try:
        if isinstance(options, FormatOptions):
            base = options.model_dump()
        elif options is None:
            base = {}
        elif isinstance(options, Mapping):
            base = FormatOptions.model_validate(dict(options)).model_dump()
        else:
            raise InvalidFormatOptionsError(
                f"Format options must be FormatOptions or a mapping, got {options!r}"
            )
        base.update({key: value for key, value in overrides.items() if value is not None})
        return FormatOptions.model_validate(base)
    except ValidationError as exc:
        raise InvalidFormatOptionsError(f"Invalid format options: {exc}") from exc


def format_offset(dt: datetime.datetime) -> str:
    """Return the UTC offset of an aware datetime as ``±HH:MM``."""
    offset = dt.utcoffset() or datetime.timedelta(0)
    total_minutes = int(offset.total_seconds() // 60)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_iso(dt: datetime.datetime, include_offset: bool = False) -> str:
    """Render wall-clock fields as ``YYYY-MM-DDTHH:mm:ss``."""
    rendered = (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )
    if include_offset:
        rendered += format_offset(dt)
    return rendered


def format_iso_utc(dt: datetime.datetime) -> str:
    """Render an instant as UTC ``YYYY-MM-DDTHH:mm:ss.sssZ``.

    Naive datetimes are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.UTC)
    dt = dt.astimezone(datetime.UTC)
    millis = dt.microsecond // 1000
    return f"{format_iso(dt)}.{millis:03d}Z"


def format_display(dt: datetime.datetime, options: FormatOptions) -> str:
    """Render ``DD-MM-YYYY, HH:mm:ss`` with configurable separators and clock."""
    date_part = options.date_separator.join(
        (f"{dt.day:02d}", f"{dt.month:02d}", f"{dt.year:04d}")
    )

    if options.is_24_hour:
        hour = dt.hour
        suffix = ""
    else:
        hour = dt.hour % 12 or 12
        suffix = " AM" if dt.hour < 12 else " PM"

    time_part = options.time_separator.join(
        (f"{hour:02d}", f"{dt.minute:02d}", f"{dt.second:02d}")
    )
    return f"{date_part}, {time_part}{suffix}"


def render(dt: datetime.datetime, options: Optional[FormatOptions] = None) -> str:
    """Render wall-clock fields of ``dt`` according to ``options``."""
    opts = options or FormatOptions()
    if opts.return_iso:
        return format_iso(dt, include_offset=opts.include_offset)
    rendered = format_display(dt, opts)
    if opts.include_offset:
        rendered += f" {format_offset(dt)}"
    return rendered


def apply_pattern(dt: datetime.datetime, pattern: str) -> str:
    """Substitute ``yyyy MM dd HH mm ss`` tokens in ``pattern`` with fields of ``dt``.

    Examples:
        >>> apply_pattern(datetime.datetime(2023, 10, 10, 9, 5, 3), "dd/MM/yyyy HH:mm")
        '10/10/2023 09:05'
    """
    fields = {
        "year": dt.year,
        "month": dt.month,
        "day": dt.day,
        "hour": dt.hour,
        "minute": dt.minute,
        "second": dt.second,
    }
    result = pattern
    for token, template in PATTERN_TOKENS:
        result = result.replace(token, template.format(**fields))
    return result
