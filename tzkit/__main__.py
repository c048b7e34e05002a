"""Command-line entry for tzkit.

Examples:
  python -m tzkit list --region europe --values
  python -m tzkit convert 2023-10-10T10:00:00 --from UTC --to America/New_York
  python -m tzkit now --zone Asia/Tokyo --no-iso --12h
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Optional

from . import __version__, _init_logging
from .config import ConfigManager, TzkitSettings
from .conversion import (
    add_time_to_date,
    convert_between_time_zones,
    convert_to_utc,
    convert_utc_to_time_zone,
    get_current_time_in_time_zone,
    get_local_time_zone,
    get_time_difference_between_time_zones,
)
from .logging_config import configure_logging
from .lookup import get_regions, list_by_country, list_by_region, list_timezones
from .models import ConversionResult, FormatOptions

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONVERSION_FAILED = 1


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the tzkit CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="tzkit",
        description="List IANA time zones and convert date-times between them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tzkit list --country japan                          # Zones for a country
  tzkit convert 2023-10-10T10:00:00 --from UTC --to Asia/Tokyo
  tzkit diff 2023-10-10T10:00:00Z --from UTC --to America/New_York
  tzkit add 2023-01-01T00:00:00Z 24 hours
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING, or from TZKIT_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--iso",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Print ISO 8601 output (default) or the display layout with --no-iso",
    )
    parser.add_argument(
        "--12h",
        dest="twelve_hour",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="12-hour (--12h) or 24-hour (--no-12h) clock; default from TZKIT_24_HOUR",
    )
    parser.add_argument("--date-sep", metavar="SEP", help="Date separator for the display layout")
    parser.add_argument("--time-sep", metavar="SEP", help="Time separator for the display layout")

    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="List time zones")
    list_filter = list_parser.add_mutually_exclusive_group()
    list_filter.add_argument("--region", help="Substring of the zone label, e.g. 'Europe'")
    list_filter.add_argument("--country", help="Substring of the country name")
    list_fields = list_parser.add_mutually_exclusive_group()
    list_fields.add_argument("--values", action="store_true", help="Print identifiers only")
    list_fields.add_argument("--labels", action="store_true", help="Print labels only")

    sub.add_parser("regions", help="List region names")

    convert_parser = sub.add_parser("convert", help="Convert wall-clock time between zones")
    convert_parser.add_argument("datetime")
    convert_parser.add_argument("--from", dest="from_zone", required=True)
    convert_parser.add_argument("--to", dest="to_zone", required=True)

    to_utc_parser = sub.add_parser("to-utc", help="Convert a zone's wall-clock time to UTC")
    to_utc_parser.add_argument("datetime")
    to_utc_parser.add_argument("--zone")

    from_utc_parser = sub.add_parser("from-utc", help="Render a UTC instant in a zone")
    from_utc_parser.add_argument("datetime")
    from_utc_parser.add_argument("--zone")

    now_parser = sub.add_parser("now", help="Current time in a zone")
    now_parser.add_argument("--zone")

    diff_parser = sub.add_parser("diff", help="Offset difference between two zones at a date")
    diff_parser.add_argument("datetime")
    diff_parser.add_argument("--from", dest="from_zone", required=True)
    diff_parser.add_argument("--to", dest="to_zone", required=True)

    add_parser = sub.add_parser("add", help="Add hours, minutes or days to a date")
    add_parser.add_argument("datetime")
    add_parser.add_argument("amount", type=int)
    add_parser.add_argument("unit")

    sub.add_parser("local", help="Print the host's time zone")

    return parser


def _build_options(args: argparse.Namespace, settings: TzkitSettings) -> FormatOptions:
    base = settings.format_options(return_iso=args.iso)
    return base.model_copy(
        update={
            key: value
            for key, value in {
                "is_24_hour": None if args.twelve_hour is None else not args.twelve_hour,
                "date_separator": args.date_sep,
                "time_separator": args.time_sep,
            }.items()
            if value is not None
        }
    )


def _emit(result: ConversionResult) -> int:
    if result.success:
        print(result.value)
        return EXIT_OK
    print(result.error_message, file=sys.stderr)
    return EXIT_CONVERSION_FAILED


def _run_list(args: argparse.Namespace) -> int:
    if args.region:
        entries = list_by_region(args.region)
    elif args.country:
        entries = list_by_country(args.country)
    else:
        entries = list_timezones()

    for entry in entries:
        if args.values:
            print(entry.value)
        elif args.labels:
            print(entry.label)
        else:
            print(json.dumps(entry.to_dict(), ensure_ascii=False))
    return EXIT_OK


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse ``argv`` and execute one command, returning the exit status."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    settings = ConfigManager().load_settings()
    level_name = args.log_level or settings.log_level
    _init_logging(level_name)
    configure_logging(
        force_debug=True if settings.debug else None,
        default_level=getattr(logging, level_name),
        level_override=getattr(logging, args.log_level) if args.log_level else None,
    )
    logger.debug("Running command %s with settings %s", args.command, settings)

    options = _build_options(args, settings)
    zone = getattr(args, "zone", None) or settings.default_timezone

    if args.command == "list":
        return _run_list(args)
    if args.command == "regions":
        for region in get_regions():
            print(region)
        return EXIT_OK
    if args.command == "local":
        print(get_local_time_zone())
        return EXIT_OK
    if args.command == "convert":
        return _emit(convert_between_time_zones(args.datetime, args.from_zone, args.to_zone, options))
    if args.command == "to-utc":
        return _emit(convert_to_utc(args.datetime, zone, options))
    if args.command == "from-utc":
        return _emit(convert_utc_to_time_zone(args.datetime, zone, options))
    if args.command == "now":
        return _emit(get_current_time_in_time_zone(zone, options))
    if args.command == "diff":
        return _emit(
            get_time_difference_between_time_zones(args.datetime, args.from_zone, args.to_zone)
        )
    if args.command == "add":
        return _emit(add_time_to_date(args.datetime, args.amount, args.unit))

    parser.error(f"unknown command {args.command!r}")
    return 2


def main() -> None:
    """Run the tzkit CLI and exit with its status."""
    sys.exit(run())


if __name__ == "__main__":
    main()
