"""Exception hierarchy for tzkit.

These exceptions are raised inside the package (zone parsing, date parsing,
registry loading) and translated into failed ``ConversionResult`` values at the
public API boundary, so callers of the conversion functions never see them.
Code that works with the lower-level helpers directly (``ZoneName.parse``,
``parse_datetime_input``) can catch them.
"""

from __future__ import annotations

from .models import ConversionError


class TimezoneUtilityError(Exception):
    """Base exception for all tzkit errors.

    Subclasses set ``code`` to the ``ConversionError`` reported to callers when
    the exception reaches a public conversion function.
    """

    code: ConversionError | None = None


class InvalidTimeZoneError(TimezoneUtilityError):
    """Zone identifier is not present in the registry.

    Raised when:
    - The identifier is empty or not a string
    - The identifier is not an exact, case-sensitive registry value
    """

    code = ConversionError.INVALID_TIME_ZONE


class InvalidDateFormatError(TimezoneUtilityError):
    """Input could not be parsed into a valid date-time.

    Raised when:
    - A string is not parseable as ISO 8601
    - The value is neither a string nor a datetime
    - The calendar library rejects the resulting date (out of range)
    """

    code = ConversionError.INVALID_DATE_FORMAT


class InvalidFormatOptionsError(InvalidDateFormatError):
    """Presentation options could not be coerced into FormatOptions.

    Raised when:
    - A mapping holds values of the wrong type (e.g. ``returnISO="maybe"``)
    - The options are neither FormatOptions, a mapping nor None
    """


class InvalidUnitError(TimezoneUtilityError):
    """Unit passed to add_time_to_date is not hours, minutes or days."""

    code = ConversionError.INVALID_UNIT


class RegistryLoadError(TimezoneUtilityError):
    """Bundled time zone tables are missing or malformed."""
