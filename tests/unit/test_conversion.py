"""Unit tests for tzkit.conversion module."""

import datetime
from unittest.mock import patch

import pytest

from tzkit.conversion import (
    add_time_to_date,
    as_instant,
    convert_between_time_zones,
    convert_date_time,
    convert_to_utc,
    convert_utc_to_local,
    convert_utc_to_time_zone,
    format_date_time,
    get_current_time_in_time_zone,
    get_time_difference_between_time_zones,
    parse_datetime_input,
    wall_time_to_instant,
)
from tzkit.exceptions import InvalidDateFormatError
from tzkit.models import ConversionError, ConversionResult, FormatOptions
from tzkit.validation import ZoneName

pytestmark = pytest.mark.unit

INVALID_ZONE_CALLS = [
    pytest.param(lambda: convert_to_utc("2023-10-10T10:00:00", "Invalid/Zone"), id="to_utc"),
    pytest.param(
        lambda: convert_utc_to_time_zone("2023-10-10T10:00:00Z", "Invalid/Zone"), id="from_utc"
    ),
    pytest.param(
        lambda: convert_between_time_zones("2023-10-10T10:00:00", "Invalid/Zone", "UTC"),
        id="between_source",
    ),
    pytest.param(
        lambda: convert_between_time_zones("2023-10-10T10:00:00", "UTC", "Invalid/Zone"),
        id="between_target",
    ),
    pytest.param(
        lambda: convert_date_time("2023-10-10T10:00:00", "UTC", "Invalid/Zone"), id="date_time"
    ),
    pytest.param(lambda: get_current_time_in_time_zone("Invalid/Zone"), id="current"),
    pytest.param(
        lambda: get_time_difference_between_time_zones(
            "2023-10-10T10:00:00Z", "UTC", "Invalid/Zone"
        ),
        id="difference",
    ),
    pytest.param(
        lambda: format_date_time("2023-10-10T10:00:00Z", "yyyy", "Invalid/Zone"), id="pattern"
    ),
]


class TestInputParsing:
    """Tests for the date-time parsing helpers."""

    def test_parse_string(self):
        """ISO strings are parsed by dateutil."""
        assert parse_datetime_input("2023-10-10T10:00:00") == datetime.datetime(2023, 10, 10, 10)

    def test_parse_passes_datetime_through(self):
        """Datetime values are returned unchanged."""
        value = datetime.datetime(2023, 10, 10, 10, tzinfo=datetime.UTC)

        assert parse_datetime_input(value) is value

    def test_parse_date_becomes_midnight(self):
        """Plain dates are read as midnight."""
        assert parse_datetime_input(datetime.date(2023, 10, 10)) == datetime.datetime(2023, 10, 10)

    @pytest.mark.parametrize("value", ["invalid-date", "", "   ", None, 1696932000])
    def test_parse_rejects_garbage(self, value):
        """Unparseable input raises InvalidDateFormatError."""
        with pytest.raises(InvalidDateFormatError):
            parse_datetime_input(value)

    @pytest.mark.parametrize(
        "value",
        [
            "2023-W41-2T10:00:00",
            "2023-283T10:00:00",
            "2023-10-10",
            "2023-10-10 10:00:00",
            "20231010T100000",
        ],
    )
    def test_parse_follows_iso_detection_policy(self, value):
        """Forms dateutil would read but is_iso_datetime rejects are invalid."""
        with pytest.raises(InvalidDateFormatError):
            parse_datetime_input(value)

    def test_as_instant_reads_naive_as_utc(self):
        """Naive input is interpreted as UTC."""
        assert as_instant("2023-10-10T10:00:00") == datetime.datetime(
            2023, 10, 10, 10, tzinfo=datetime.UTC
        )

    def test_as_instant_normalizes_offsets(self):
        """Offset input is normalized to UTC."""
        assert as_instant("2023-10-10T10:00:00+05:30") == datetime.datetime(
            2023, 10, 10, 4, 30, tzinfo=datetime.UTC
        )


class TestWallTimeResolution:
    """Tests for resolving wall-clock fields to instants."""

    def test_simple_resolution(self):
        """Fields far from a transition resolve with the single sampled offset."""
        instant = wall_time_to_instant(
            datetime.datetime(2023, 7, 15, 12), ZoneName.parse("Europe/London")
        )

        assert instant == datetime.datetime(2023, 7, 15, 11, tzinfo=datetime.UTC)

    def test_correction_after_spring_forward(self):
        """Fields just after a DST start are corrected with a second sample."""
        instant = wall_time_to_instant(
            datetime.datetime(2023, 3, 12, 3, 30), ZoneName.parse("America/New_York")
        )

        assert instant == datetime.datetime(2023, 3, 12, 7, 30, tzinfo=datetime.UTC)

    def test_attached_offset_is_ignored(self):
        """Only the wall-clock fields matter."""
        zone = ZoneName.parse("America/New_York")
        aware = datetime.datetime(2023, 10, 10, 10, tzinfo=datetime.timezone.utc)

        assert wall_time_to_instant(aware, zone) == wall_time_to_instant(
            datetime.datetime(2023, 10, 10, 10), zone
        )


class TestConvertToUtc:
    """Tests for convert_to_utc."""

    def test_new_york_to_utc(self):
        """EDT wall clock moves four hours forward."""
        result = convert_to_utc("2023-10-10T10:00:00", "America/New_York")

        assert result.success
        assert result.value == "2023-10-10T14:00:00.000Z"

    def test_attached_offset_is_discarded(self):
        """Input offsets do not change the interpretation."""
        result = convert_to_utc("2023-10-10T10:00:00+05:00", "America/New_York")

        assert result.value == "2023-10-10T14:00:00.000Z"

    def test_half_hour_zone(self):
        """Fractional offsets are honored."""
        assert convert_to_utc("2023-10-10T10:00:00", "Asia/Calcutta").value == (
            "2023-10-10T04:30:00.000Z"
        )

    def test_spring_forward_gap_neighbour(self):
        """Fields right after the DST jump resolve to the post-transition offset."""
        result = convert_to_utc("2023-03-12T03:30:00", "America/New_York")

        assert result.value == "2023-03-12T07:30:00.000Z"

    def test_display_output(self):
        """Non-ISO options render the UTC fields in the display layout."""
        result = convert_to_utc("2023-10-10T10:00:00", "America/New_York", {"returnISO": False})

        assert result.value == "10-10-2023, 14:00:00"

    def test_invalid_date(self):
        """Unparseable dates yield the invalid-date code."""
        result = convert_to_utc("invalid-date", "America/New_York")

        assert result.error is ConversionError.INVALID_DATE_FORMAT
        assert result.error_message == "Invalid date format."

    def test_zone_checked_before_date(self):
        """A bad zone is reported even when the date is also bad."""
        result = convert_to_utc("invalid-date", "Invalid/Zone")

        assert result.error is ConversionError.INVALID_TIME_ZONE


class TestConvertUtcToTimeZone:
    """Tests for convert_utc_to_time_zone."""

    def test_utc_to_new_york(self):
        """UTC instant rendered as New York wall clock."""
        result = convert_utc_to_time_zone("2023-10-10T10:00:00Z", "America/New_York")

        assert result.value == "2023-10-10T06:00:00"

    def test_naive_string_is_utc(self):
        """Strings without offset are UTC."""
        assert convert_utc_to_time_zone("2023-10-10T10:00:00", "Asia/Tokyo").value == (
            "2023-10-10T19:00:00"
        )

    def test_datetime_input(self):
        """Datetime objects are accepted."""
        result = convert_utc_to_time_zone(datetime.datetime(2023, 10, 10, 10), "America/New_York")

        assert result.value == "2023-10-10T06:00:00"

    def test_custom_separators(self):
        """Display options control the separators."""
        result = convert_utc_to_time_zone(
            "2023-10-10T10:00:00Z",
            "UTC",
            {"returnISO": False, "dateSeparator": "/", "timeSeparator": "-"},
        )

        assert "10/10/2023" in result.value
        assert "10-00-00" in result.value

    def test_twelve_hour_clock(self):
        """12-hour display appends the meridiem."""
        result = convert_utc_to_time_zone(
            "2023-10-10T20:00:00Z", "UTC", FormatOptions(return_iso=False, is_24_hour=False)
        )

        assert result.value == "10-10-2023, 08:00:00 PM"

    def test_round_trip_through_utc(self):
        """Rendering in a zone then reading back in that zone returns the instant."""
        for zone in ("America/New_York", "Asia/Calcutta", "Asia/Katmandu", "America/St_Johns", "UTC"):
            local = convert_utc_to_time_zone("2023-07-15T12:00:00Z", zone).value
            assert convert_to_utc(local, zone).value == "2023-07-15T12:00:00.000Z"


class TestConvertBetweenTimeZones:
    """Tests for zone-to-zone conversion."""

    def test_new_york_to_tokyo(self):
        """EDT to JST is thirteen hours ahead."""
        result = convert_between_time_zones(
            "2023-10-10T10:00:00", "America/New_York", "Asia/Tokyo"
        )

        assert result.value == "2023-10-10T23:00:00"

    def test_same_zone_is_identity(self):
        """Converting into the same zone keeps the fields."""
        result = convert_between_time_zones("2023-10-10T10:00:00", "Europe/Paris", "Europe/Paris")

        assert result.value == "2023-10-10T10:00:00"

    def test_convert_date_time_iso_by_default(self):
        """Shorthand defaults to ISO output."""
        assert convert_date_time("2023-10-10T10:00:00", "UTC", "America/New_York").value == (
            "2023-10-10T06:00:00"
        )

    def test_convert_date_time_clock_selection(self):
        """Passing the clock flag selects the display layout."""
        twelve = convert_date_time("2023-10-10T10:00:00", "UTC", "America/New_York", False)
        twenty_four = convert_date_time("2023-10-10T10:00:00", "UTC", "America/New_York", True)

        assert twelve.value == "10-10-2023, 06:00:00 AM"
        assert twenty_four.value == "10-10-2023, 06:00:00"


class TestTimeDifference:
    """Tests for offset differences."""

    def test_same_zone(self):
        """Identical zones differ by nothing."""
        result = get_time_difference_between_time_zones("2023-10-10T10:00:00Z", "UTC", "UTC")

        assert result.value == "+0 hours 0 minutes"

    def test_positive_and_negative(self):
        """Sign follows to_zone minus from_zone."""
        instant = "2023-10-10T10:00:00Z"

        assert get_time_difference_between_time_zones(instant, "America/New_York", "UTC").value == (
            "+4 hours 0 minutes"
        )
        assert get_time_difference_between_time_zones(instant, "UTC", "America/New_York").value == (
            "-4 hours 0 minutes"
        )

    def test_fractional_negative_offset(self):
        """Minutes are reported separately from hours."""
        result = get_time_difference_between_time_zones(
            "2023-01-15T12:00:00Z", "UTC", "America/St_Johns"
        )

        assert result.value == "-3 hours 30 minutes"

    def test_difference_depends_on_instant(self):
        """DST changes the difference across the year."""
        winter = get_time_difference_between_time_zones("2023-01-15T12:00:00Z", "UTC", "Europe/Paris")
        summer = get_time_difference_between_time_zones("2023-07-15T12:00:00Z", "UTC", "Europe/Paris")

        assert winter.value == "+1 hours 0 minutes"
        assert summer.value == "+2 hours 0 minutes"

    def test_invalid_date(self):
        """Bad dates yield the invalid-date code."""
        result = get_time_difference_between_time_zones("nope", "UTC", "Asia/Tokyo")

        assert result.error is ConversionError.INVALID_DATE_FORMAT


class TestAddTimeToDate:
    """Tests for date arithmetic."""

    def test_add_hours(self):
        """Twenty-four hours crosses into the next day."""
        assert add_time_to_date("2023-01-01T00:00:00Z", 24, "hours").value == (
            "2023-01-02T00:00:00.000Z"
        )

    def test_subtract_minutes(self):
        """Negative amounts move backwards."""
        assert add_time_to_date("2023-01-01T00:00:00Z", -30, "minutes").value == (
            "2022-12-31T23:30:00.000Z"
        )

    def test_add_days(self):
        """Days are fixed 24-hour spans on the UTC timeline."""
        assert add_time_to_date("2023-03-11T12:00:00Z", 1, "days").value == (
            "2023-03-12T12:00:00.000Z"
        )

    def test_invalid_unit(self):
        """Units outside hours, minutes and days are rejected."""
        result = add_time_to_date("2023-01-01T00:00:00Z", 1, "weeks")

        assert result.error is ConversionError.INVALID_UNIT
        assert result.error_message == "Invalid time unit provided."

    def test_date_checked_before_unit(self):
        """A bad date wins over a bad unit."""
        result = add_time_to_date("invalid-date", 1, "weeks")

        assert result.error is ConversionError.INVALID_DATE_FORMAT

    @pytest.mark.parametrize("amount", [1.5, "1", True, None])
    def test_non_integer_amount(self, amount):
        """Amounts must be plain integers."""
        result = add_time_to_date("2023-01-01T00:00:00Z", amount, "hours")

        assert result.error is ConversionError.INVALID_DATE_FORMAT

    def test_out_of_range_result(self):
        """Arithmetic beyond the calendar range is an invalid date."""
        result = add_time_to_date("9999-12-31T23:00:00Z", 2, "days")

        assert result.error is ConversionError.INVALID_DATE_FORMAT


class TestCurrentAndLocal:
    """Tests for clock-dependent conversions."""

    def test_current_time_uses_clock_override(self, monkeypatch):
        """TZKIT_TEST_TIME pins the current instant."""
        monkeypatch.setenv("TZKIT_TEST_TIME", "2023-10-10T10:00:00Z")

        result = get_current_time_in_time_zone("Asia/Tokyo")

        assert result.value == "2023-10-10T19:00:00"

    def test_current_time_with_options(self, monkeypatch):
        """Options are forwarded to the renderer."""
        monkeypatch.setenv("TZKIT_TEST_TIME", "2023-10-10T10:00:00Z")

        result = get_current_time_in_time_zone("UTC", {"returnISO": False})

        assert result.value == "10-10-2023, 10:00:00"

    def test_convert_utc_to_local_appends_offset(self):
        """Local rendering defaults to ISO with the local offset."""
        with patch("tzkit.clock.get_local_time_zone", return_value="Asia/Tokyo"):
            result = convert_utc_to_local("2023-10-10T10:00:00Z")

        assert result.value == "2023-10-10T19:00:00+09:00"

    def test_convert_utc_to_local_with_options(self):
        """Explicit options replace the offset default."""
        with patch("tzkit.clock.get_local_time_zone", return_value="America/New_York"):
            result = convert_utc_to_local("2023-10-10T10:00:00Z", {"returnISO": False})

        assert result.value == "10-10-2023, 06:00:00"

    def test_convert_utc_to_local_invalid_date(self):
        """Bad dates yield the invalid-date code."""
        assert convert_utc_to_local("garbage").error is ConversionError.INVALID_DATE_FORMAT


class TestFormatDateTime:
    """Tests for pattern formatting."""

    def test_pattern_in_zone(self):
        """Tokens are filled from the target zone's wall clock."""
        result = format_date_time("2023-10-10T10:00:00Z", "yyyy/MM/dd HH:mm", "America/New_York")

        assert result.value == "2023/10/10 06:00"

    def test_defaults_to_utc(self):
        """Without a zone the UTC wall clock is used."""
        assert format_date_time("2023-10-10T10:00:00Z", "HH:mm:ss").value == "10:00:00"

    def test_display_options_instead_of_pattern(self):
        """Options render the fixed display layout with the given separators."""
        result = format_date_time(
            "2023-10-10T10:00:00Z",
            {"returnISO": False, "dateSeparator": "/", "timeSeparator": "-"},
            "UTC",
        )

        assert result.success
        assert "10/10/2023" in result.value
        assert "10-00-00" in result.value

    def test_format_options_object_in_zone(self):
        """FormatOptions instances are accepted as well."""
        result = format_date_time(
            "2023-10-10T10:00:00Z", FormatOptions(return_iso=False, is_24_hour=False), "Asia/Tokyo"
        )

        assert result.value == "10-10-2023, 07:00:00 PM"

    def test_no_pattern_gives_iso(self):
        """Without a pattern the result is ISO."""
        assert format_date_time("2023-10-10T10:00:00Z").value == "2023-10-10T10:00:00"

    def test_unusable_pattern(self):
        """Values that are neither patterns nor options are rejected."""
        assert format_date_time("2023-10-10T10:00:00Z", 42).error is (
            ConversionError.INVALID_DATE_FORMAT
        )


class TestBoundary:
    """Tests that conversion functions never raise."""

    @pytest.mark.parametrize("call", INVALID_ZONE_CALLS)
    def test_invalid_zone_everywhere(self, call):
        """Every zone-taking function reports an unknown zone as a result."""
        result = call()

        assert isinstance(result, ConversionResult)
        assert result.success is False
        assert result.error is ConversionError.INVALID_TIME_ZONE
        assert result.error_message == "Invalid timezone provided."

    def test_unexpected_library_errors_become_invalid_date(self):
        """Errors outside the package hierarchy are logged and mapped."""
        with patch("tzkit.conversion.as_instant", side_effect=OverflowError("too far")):
            result = convert_utc_to_time_zone("2023-10-10T10:00:00Z", "UTC")

        assert result.error is ConversionError.INVALID_DATE_FORMAT

    def test_wrapped_function_keeps_name(self):
        """The boundary decorator preserves metadata."""
        assert convert_to_utc.__name__ == "convert_to_utc"

    @pytest.mark.parametrize(
        "call",
        [
            pytest.param(lambda: convert_to_utc("2023-W41-2T10:00:00", "UTC"), id="to_utc_week"),
            pytest.param(
                lambda: convert_utc_to_time_zone("2023-283T10:00:00", "UTC"), id="from_utc_ordinal"
            ),
            pytest.param(
                lambda: convert_between_time_zones("2023-10-10", "UTC", "Asia/Tokyo"),
                id="between_date_only",
            ),
            pytest.param(
                lambda: get_time_difference_between_time_zones("2023-10-10 10:00:00", "UTC", "UTC"),
                id="difference_space",
            ),
            pytest.param(lambda: add_time_to_date("20231010T100000", 1, "hours"), id="add_basic"),
        ],
    )
    def test_non_iso_strings_are_invalid_dates(self, call):
        """Conversions accept exactly what is_iso_datetime accepts."""
        assert call().error is ConversionError.INVALID_DATE_FORMAT

    def test_convert_date_time_bad_clock_flag(self):
        """A non-boolean clock flag is reported, not raised."""
        result = convert_date_time("2023-10-10T10:00:00", "UTC", "Asia/Tokyo", "x")

        assert isinstance(result, ConversionResult)
        assert result.error is ConversionError.INVALID_DATE_FORMAT

    def test_convert_date_time_zone_checked_first(self):
        """An unknown zone wins over a bad clock flag."""
        result = convert_date_time("2023-10-10T10:00:00", "UTC", "Invalid/Zone", "x")

        assert result.error is ConversionError.INVALID_TIME_ZONE

    @pytest.mark.parametrize("options", [{"returnISO": "maybe"}, "notamapping", 3])
    def test_bad_options_are_input_errors(self, options, caplog):
        """Rejected options become an invalid-date result without a library warning."""
        with caplog.at_level("WARNING", logger="tzkit.conversion"):
            result = convert_to_utc("2023-10-10T10:00:00", "UTC", options)

        assert result.error is ConversionError.INVALID_DATE_FORMAT
        assert "calendar library" not in caplog.text
