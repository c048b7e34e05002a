"""Current-time provider and host time zone detection."""

from __future__ import annotations

import datetime
import logging
import os
import time
from pathlib import Path
from typing import ClassVar, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

TEST_TIME_ENV = "TZKIT_TEST_TIME"
FALLBACK_TIMEZONE = "UTC"
LOCALTIME_PATH = Path("/etc/localtime")


def _is_loadable_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


class TimezoneDetector:
    """Detects the host's IANA time zone using several fallback strategies."""

    # Abbreviations reported by time.tzname that map unambiguously enough to a zone
    TZ_ABBREV_MAP: ClassVar[dict[str, str]] = {
        "UTC": "UTC",
        "GMT": "UTC",
        "PST": "America/Los_Angeles",
        "PDT": "America/Los_Angeles",
        "MST": "America/Denver",
        "MDT": "America/Denver",
        "CST": "America/Chicago",
        "CDT": "America/Chicago",
        "EST": "America/New_York",
        "EDT": "America/New_York",
        "AKST": "America/Anchorage",
        "AKDT": "America/Anchorage",
        "HST": "Pacific/Honolulu",
        "CET": "Europe/Paris",
        "CEST": "Europe/Paris",
        "EET": "Europe/Helsinki",
        "EEST": "Europe/Helsinki",
        "IST": "Asia/Kolkata",
        "JST": "Asia/Tokyo",
        "KST": "Asia/Seoul",
        "AEST": "Australia/Sydney",
        "AEDT": "Australia/Sydney",
    }

    def __init__(self, localtime_path: Path = LOCALTIME_PATH):
        self.localtime_path = localtime_path

    def from_tz_env(self) -> Optional[str]:
        """Return the TZ environment variable when it names a loadable zone."""
        tz_env = os.environ.get("TZ", "").strip()
        if tz_env.startswith(":"):
            tz_env = tz_env[1:]
        if tz_env and _is_loadable_zone(tz_env):
            return tz_env
        return None

    def from_localtime_link(self) -> Optional[str]:
        """Derive the zone name from an /etc/localtime symlink into a zoneinfo tree."""
        try:
            if not self.localtime_path.is_symlink():
                return None
            target = str(self.localtime_path.resolve())
        except OSError:
            logger.debug("Could not resolve %s", self.localtime_path, exc_info=True)
            return None

        marker = "zoneinfo/"
        index = target.rfind(marker)
        if index < 0:
            return None
        name = target[index + len(marker) :]
        # posix/ and right/ are alternate trees of the same database
        for prefix in ("posix/", "right/"):
            if name.startswith(prefix):
                name = name[len(prefix) :]
        return name if _is_loadable_zone(name) else None

    def from_abbreviation(self) -> Optional[str]:
        """Map the process's current zone abbreviation to an IANA name."""
        abbrev = time.tzname[time.daylight] if time.daylight else time.tzname[0]
        return self.TZ_ABBREV_MAP.get(abbrev)

    def get_local_timezone(self) -> str:
        """Return the host time zone as an IANA identifier, or "UTC" if undetectable."""
        for strategy in (self.from_tz_env, self.from_localtime_link, self.from_abbreviation):
            try:
                detected = strategy()
            except Exception as e:
                logger.warning("Time zone detection via %s failed: %s", strategy.__name__, e)
                continue
            if detected:
                logger.debug("Detected local time zone %s via %s", detected, strategy.__name__)
                return detected

        logger.warning("Could not detect local time zone, falling back to %s", FALLBACK_TIMEZONE)
        return FALLBACK_TIMEZONE


class TimeProvider:
    """Provides the current instant with a test-time override."""

    def now_utc(self) -> datetime.datetime:
        """Return the current UTC time with tzinfo.

        Can be overridden via the TZKIT_TEST_TIME environment variable, an ISO 8601
        string such as "2025-10-27T08:20:00-07:00". Naive values are taken as UTC.
        """
        test_time = os.environ.get(TEST_TIME_ENV)
        if test_time:
            try:
                dt = date_parser.isoparse(test_time)
                if dt.tzinfo is not None:
                    return dt.astimezone(datetime.UTC)
                return dt.replace(tzinfo=datetime.UTC)
            except (ValueError, OverflowError) as e:
                logger.warning("Failed to parse %s=%r: %s", TEST_TIME_ENV, test_time, e)

        return datetime.datetime.now(datetime.UTC)


# Singleton instances for global use
_detector = TimezoneDetector()
_time_provider = TimeProvider()


def now_utc() -> datetime.datetime:
    """Get current UTC time (convenience function)."""
    return _time_provider.now_utc()


def get_local_time_zone() -> str:
    """Get the host's IANA time zone name (convenience function)."""
    return _detector.get_local_timezone()
