"""Conversion engine: moving date-times between time zones.

All timezone rules come from ``zoneinfo``; this module only decides which wall
clock fields or instants to hand to it. Public functions never raise for bad
input. They return a ``ConversionResult`` whose ``error`` is one of the
``ConversionError`` codes.
"""

from __future__ import annotations

import datetime
import functools
import logging
from collections.abc import Callable
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

from . import clock
from .exceptions import InvalidDateFormatError, InvalidUnitError, TimezoneUtilityError
from .formatter import OptionsLike, apply_pattern, format_iso_utc, format_options, render
from .models import ConversionError, ConversionResult, FormatOptions
from .validation import ZoneName, is_iso_datetime

logger = logging.getLogger(__name__)

DateTimeInput = Union[str, datetime.datetime]

TIME_UNITS = frozenset({"hours", "minutes", "days"})


def conversion_boundary(func: Callable[..., str]) -> Callable[..., ConversionResult]:
    """Wrap a string-producing conversion so failures become ConversionResult values.

    Package exceptions map onto their own code. Anything else raised by the
    calendar library (out-of-range arithmetic, unreadable zone data) is logged
    and reported as an invalid date.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> ConversionResult:
        try:
            return ConversionResult.ok(func(*args, **kwargs))
        except TimezoneUtilityError as exc:
            code = exc.code or ConversionError.INVALID_DATE_FORMAT
            logger.debug("%s rejected input: %s", func.__name__, exc)
            return ConversionResult.fail(code)
        except Exception as exc:
            logger.warning("%s failed in calendar library: %s", func.__name__, exc, exc_info=True)
            return ConversionResult.fail(ConversionError.INVALID_DATE_FORMAT)

    return wrapper


def parse_datetime_input(value: Any) -> datetime.datetime:
    """Parse a string or datetime into a datetime (naive or aware as given).

    Strings must pass ``is_iso_datetime``; other forms dateutil would accept
    (week dates, date-only, space separator) are rejected.

    Raises:
        InvalidDateFormatError: If the value is not an ISO 8601 date-time
    """
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateFormatError(f"Unsupported date-time value: {value!r}")
    text = value.strip()
    if not is_iso_datetime(text):
        raise InvalidDateFormatError(f"Not a YYYY-MM-DDTHH:mm:ss date-time: {value!r}")
    try:
        return date_parser.isoparse(text)
    except (ValueError, OverflowError) as exc:
        raise InvalidDateFormatError(f"Unparseable date-time {value!r}: {exc}") from exc


def as_instant(value: Any) -> datetime.datetime:
    """Parse ``value`` as an absolute instant in UTC; naive input is taken to be UTC."""
    dt = parse_datetime_input(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.UTC)
    return dt.astimezone(datetime.UTC)


def _wall_clock(dt: datetime.datetime) -> datetime.datetime:
    return dt.replace(tzinfo=None)


def zone_offset_at(reference: datetime.datetime, zone: ZoneName) -> datetime.timedelta:
    """Return the offset of ``zone`` at ``reference`` by comparing wall clocks.

    ``reference`` is a naive datetime read as UTC. The offset is what the zone's
    clock shows at that instant minus the UTC clock, so it is positive east of
    Greenwich.
    """
    instant = reference.replace(tzinfo=datetime.UTC)
    shown = _wall_clock(instant.astimezone(ZoneInfo(zone)))
    return shown - reference


def wall_time_to_instant(wall: datetime.datetime, zone: ZoneName) -> datetime.datetime:
    """Resolve naive wall-clock fields observed in ``zone`` into an aware UTC instant.

    The offset is first sampled at the fields read as UTC. If the zone's offset
    at the resulting candidate differs (the fields sit within one offset of a
    DST transition), it is sampled again at the candidate.
    """
    wall = _wall_clock(wall)
    offset = zone_offset_at(wall, zone)
    candidate = wall - offset

    corrected = zone_offset_at(candidate, zone)
    if corrected != offset:
        candidate = wall - corrected

    return candidate.replace(tzinfo=datetime.UTC)


def _render_in_zone(instant: datetime.datetime, zone: ZoneName, options: FormatOptions) -> str:
    return render(instant.astimezone(ZoneInfo(zone)), options)


@conversion_boundary
def convert_to_utc(
    date_time: DateTimeInput, source_zone: str, options: OptionsLike = None
) -> str:
    """Read the wall-clock fields of ``date_time`` in ``source_zone`` and express them in UTC.

    Any offset attached to the input is discarded; only its fields are used.
    ISO output is ``YYYY-MM-DDTHH:mm:ss.sssZ``.

    Examples:
        >>> str(convert_to_utc("2023-10-10T10:00:00", "America/New_York"))
        '2023-10-10T14:00:00.000Z'
    """
    zone = ZoneName.parse(source_zone)
    opts = format_options(options)
    instant = wall_time_to_instant(parse_datetime_input(date_time), zone)

    if opts.return_iso:
        return format_iso_utc(instant)
    return render(instant, opts)


@conversion_boundary
def convert_utc_to_time_zone(
    utc_date_time: DateTimeInput, target_zone: str, options: OptionsLike = None
) -> str:
    """Render an absolute instant as the wall clock of ``target_zone``.

    Examples:
        >>> str(convert_utc_to_time_zone("2023-10-10T10:00:00Z", "America/New_York"))
        '2023-10-10T06:00:00'
    """
    zone = ZoneName.parse(target_zone)
    opts = format_options(options)
    return _render_in_zone(as_instant(utc_date_time), zone, opts)


def _convert_between(
    date_time: DateTimeInput, from_zone: str, to_zone: str, options: OptionsLike
) -> str:
    source = ZoneName.parse(from_zone)
    target = ZoneName.parse(to_zone)
    opts = format_options(options)

    instant = wall_time_to_instant(parse_datetime_input(date_time), source)
    return _render_in_zone(instant, target, opts)


@conversion_boundary
def convert_between_time_zones(
    date_time: DateTimeInput,
    from_zone: str,
    to_zone: str,
    options: OptionsLike = None,
) -> str:
    """Convert wall-clock fields observed in ``from_zone`` to the wall clock of ``to_zone``."""
    return _convert_between(date_time, from_zone, to_zone, options)


@conversion_boundary
def convert_date_time(
    date_time: DateTimeInput,
    source_zone: str,
    target_zone: str,
    is_24_hour: Optional[bool] = None,
) -> str:
    """Shorthand for convert_between_time_zones.

    Without ``is_24_hour`` the result is ISO; passing it selects the display
    layout with a 24-hour or 12-hour clock.
    """
    if is_24_hour is None:
        options: OptionsLike = None
    else:
        options = {"return_iso": False, "is_24_hour": is_24_hour}
    return _convert_between(date_time, source_zone, target_zone, options)


def get_current_time_in_time_zone(target_zone: str, options: OptionsLike = None) -> ConversionResult:
    """Render the current instant in ``target_zone``."""
    return convert_utc_to_time_zone(clock.now_utc(), target_zone, options)


@conversion_boundary
def get_time_difference_between_time_zones(
    date_time: DateTimeInput, from_zone: str, to_zone: str
) -> str:
    """Return the offset difference ``to_zone - from_zone`` at the given instant.

    The result reads "+H hours M minutes" or "-H hours M minutes" and only holds
    for that instant, since either zone may change offset on other dates.

    Examples:
        >>> str(get_time_difference_between_time_zones("2023-01-15T12:00:00Z", "UTC", "Asia/Calcutta"))
        '+5 hours 30 minutes'
    """
    source = ZoneName.parse(from_zone)
    target = ZoneName.parse(to_zone)
    instant = as_instant(date_time)

    from_wall = _wall_clock(instant.astimezone(ZoneInfo(source)))
    to_wall = _wall_clock(instant.astimezone(ZoneInfo(target)))
    difference_ms = int((to_wall - from_wall).total_seconds() * 1000)

    magnitude = abs(difference_ms)
    hours = magnitude // 3_600_000
    minutes = (magnitude % 3_600_000) // 60_000
    sign = "+" if difference_ms >= 0 else "-"
    return f"{sign}{hours} hours {minutes} minutes"


@conversion_boundary
def add_time_to_date(date_time: DateTimeInput, amount: int, unit: str) -> str:
    """Shift an instant by a signed whole number of hours, minutes or days.

    Examples:
        >>> str(add_time_to_date("2023-01-01T00:00:00Z", 24, "hours"))
        '2023-01-02T00:00:00.000Z'
    """
    instant = as_instant(date_time)

    if unit not in TIME_UNITS:
        raise InvalidUnitError(f"Unsupported time unit: {unit!r}")
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidDateFormatError(f"Amount must be an integer, got {amount!r}")

    shifted = instant + datetime.timedelta(**{unit: amount})
    return format_iso_utc(shifted)


@conversion_boundary
def convert_utc_to_local(utc_date_time: DateTimeInput, options: OptionsLike = None) -> str:
    """Render an absolute instant in the host's local time zone.

    Defaults to ISO output with the local offset appended.
    """
    opts = FormatOptions(include_offset=True) if options is None else format_options(options)
    instant = as_instant(utc_date_time)
    local_zone = ZoneInfo(clock.get_local_time_zone())
    return render(instant.astimezone(local_zone), opts)


@conversion_boundary
def format_date_time(
    date_time: DateTimeInput,
    pattern: Union[str, OptionsLike] = None,
    zone: str = "UTC",
) -> str:
    """Render an instant in ``zone``.

    A string ``pattern`` is a ``yyyy-MM-dd HH:mm:ss`` style template; anything
    else is taken as presentation options, as for the other conversions.

    Examples:
        >>> str(format_date_time("2023-10-10T10:00:00Z", "dd.MM.yyyy HH:mm", "Asia/Tokyo"))
        '10.10.2023 19:00'
        >>> str(format_date_time("2023-10-10T10:00:00Z", {"returnISO": False, "dateSeparator": "/"}))
        '10/10/2023, 10:00:00'
    """
    target = ZoneName.parse(zone)
    opts = None if isinstance(pattern, str) else format_options(pattern)
    local = as_instant(date_time).astimezone(ZoneInfo(target))
    if opts is None:
        return apply_pattern(local, pattern)
    return render(local, opts)


def get_local_time_zone() -> str:
    """Return the host's IANA time zone name."""
    return clock.get_local_time_zone()
