"""Shared fixtures for tzkit tests."""

import os
from collections.abc import Generator
from typing import Any

import pytest

from tzkit.models import TimeZoneEntry
from tzkit.registry import Registry, get_registry

TZKIT_ENV_VARS = (
    "TZKIT_TEST_TIME",
    "TZKIT_LOG_LEVEL",
    "TZKIT_DEBUG",
    "TZKIT_DEFAULT_TIMEZONE",
    "TZKIT_24_HOUR",
    "TZKIT_DATE_SEPARATOR",
    "TZKIT_TIME_SEPARATOR",
)


def pytest_configure(config: Any) -> None:
    config.addinivalue_line("markers", "unit: fast tests with no external resources")


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Remove tzkit environment variables so host settings cannot leak into tests."""
    for name in TZKIT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    # ConfigManager.load_env_file writes os.environ directly
    for name in TZKIT_ENV_VARS:
        os.environ.pop(name, None)


@pytest.fixture(autouse=True)
def reset_query_cache() -> Generator[None, Any, None]:
    """Give every test an empty filter cache on the shared registry."""
    get_registry().query_cache.clear()
    yield
    get_registry().query_cache.clear()


@pytest.fixture
def small_registry() -> Registry:
    """A hand-built registry with a few zones and no bundled data."""
    entries = [
        TimeZoneEntry(
            label="Europe/Paris (GMT+01:00)",
            value="Europe/Paris",
            country="France",
            phoneCode="+33",
            utcOffset="+01:00",
        ),
        TimeZoneEntry(
            label="America/New York (GMT-05:00)",
            value="America/New_York",
            country="United States",
            phoneCode="+1",
            utcOffset="-05:00",
        ),
        TimeZoneEntry(
            label="America/Chicago (GMT-06:00)",
            value="America/Chicago",
            country="United States",
            phoneCode="+1",
            utcOffset="-06:00",
        ),
        TimeZoneEntry(label="UTC (GMT+00:00)", value="UTC", utcOffset="+00:00"),
    ]
    return Registry(entries, ["America", "Europe"])
