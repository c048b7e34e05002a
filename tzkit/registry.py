"""Registry of bundled time zone and region tables.

The tables are read once from package data and never mutated. A process-wide
instance is created lazily by ``get_registry()``; tests and embedders can build
their own ``Registry`` from explicit sequences and pass it to the lookup
functions.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable
from importlib import resources
from typing import Any, Optional

from pydantic import ValidationError

from .cache import QueryCache
from .exceptions import RegistryLoadError
from .models import TimeZoneEntry

logger = logging.getLogger(__name__)

DATA_PACKAGE = "tzkit.data"
TIMEZONES_FILE = "timezones.json"
REGIONS_FILE = "regions.json"


class Registry:
    """Immutable view over the time zone entries and region names."""

    def __init__(self, entries: Iterable[TimeZoneEntry], regions: Iterable[str]):
        self._entries: tuple[TimeZoneEntry, ...] = tuple(entries)
        self._regions: tuple[str, ...] = tuple(regions)

        seen: set[str] = set()
        for entry in self._entries:
            if entry.value in seen:
                raise RegistryLoadError(f"Duplicate time zone value in registry: {entry.value}")
            seen.add(entry.value)

        self._values: frozenset[str] = frozenset(seen)
        self.query_cache: QueryCache[TimeZoneEntry] = QueryCache()

    @property
    def entries(self) -> tuple[TimeZoneEntry, ...]:
        return self._entries

    @property
    def regions(self) -> tuple[str, ...]:
        return self._regions

    @property
    def values(self) -> frozenset[str]:
        """Set of zone identifiers, for membership tests."""
        return self._values

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and value in self._values

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]], regions: Iterable[str]) -> Registry:
        """Build a registry from raw JSON-style records.

        Raises:
            RegistryLoadError: If any record fails validation
        """
        entries = []
        for index, record in enumerate(records):
            try:
                entries.append(TimeZoneEntry.model_validate(record))
            except ValidationError as exc:
                raise RegistryLoadError(f"Invalid time zone record at index {index}: {exc}") from exc
        return cls(entries, regions)


def _read_json(name: str) -> Any:
    try:
        text = resources.files(DATA_PACKAGE).joinpath(name).read_text(encoding="utf-8")
        return json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        raise RegistryLoadError(f"Failed to read bundled data file {name}: {exc}") from exc


def load_registry() -> Registry:
    """Load the bundled tables into a new Registry.

    Raises:
        RegistryLoadError: If a data file is missing or malformed
    """
    records = _read_json(TIMEZONES_FILE)
    regions = _read_json(REGIONS_FILE)

    if not isinstance(records, list) or not isinstance(regions, list):
        raise RegistryLoadError("Bundled data files must contain JSON arrays")
    if not all(isinstance(region, str) for region in regions):
        raise RegistryLoadError("Region table must contain only strings")

    registry = Registry.from_records(records, regions)
    logger.debug(
        "Loaded time zone registry: %d zones, %d regions", len(registry), len(registry.regions)
    )
    return registry


_registry: Optional[Registry] = None
_registry_lock = threading.Lock()


def get_registry() -> Registry:
    """Return the process-wide registry, loading it on first use."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = load_registry()
    return _registry
