"""Read-only queries over the time zone registry.

Every function accepts an optional ``registry`` so tests can run against a
small hand-built table; by default the bundled process-wide registry is used.
Filter results are tuples in registry order and are memoized per normalized
search term in the registry's query cache.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .models import TimeZoneEntry
from .registry import Registry, get_registry

logger = logging.getLogger(__name__)

REGION_NAMESPACE = "region"
COUNTRY_NAMESPACE = "country"


def _resolve(registry: Optional[Registry]) -> Registry:
    return registry if registry is not None else get_registry()


def _normalize_search_term(term: Any) -> Optional[str]:
    """Lower-case and trim a search term; None for empty or non-string input."""
    if not isinstance(term, str):
        return None
    normalized = term.strip().lower()
    return normalized or None


def list_timezones(registry: Optional[Registry] = None) -> tuple[TimeZoneEntry, ...]:
    """Return every time zone entry in source order."""
    return _resolve(registry).entries


def list_values_only(registry: Optional[Registry] = None) -> list[str]:
    """Return the zone identifiers in source order."""
    return [entry.value for entry in _resolve(registry).entries]


def list_labels_only(registry: Optional[Registry] = None) -> list[str]:
    """Return the display labels in source order."""
    return [entry.label for entry in _resolve(registry).entries]


def list_by_region(region: Any, registry: Optional[Registry] = None) -> tuple[TimeZoneEntry, ...]:
    """Return entries whose label contains ``region`` (case-insensitive, trimmed).

    Empty or non-string input yields an empty tuple. Matching is a plain
    substring test, so "arctic" also matches the Antarctica zones.
    """
    term = _normalize_search_term(region)
    if term is None:
        return ()

    reg = _resolve(registry)
    return reg.query_cache.get_or_compute(
        REGION_NAMESPACE,
        term,
        lambda: tuple(entry for entry in reg.entries if term in entry.label.lower()),
    )


def list_by_country(country: Any, registry: Optional[Registry] = None) -> tuple[TimeZoneEntry, ...]:
    """Return entries whose country contains ``country`` (case-insensitive, trimmed).

    Entries without a country (such as ``UTC``) never match.
    """
    term = _normalize_search_term(country)
    if term is None:
        return ()

    reg = _resolve(registry)
    return reg.query_cache.get_or_compute(
        COUNTRY_NAMESPACE,
        term,
        lambda: tuple(
            entry for entry in reg.entries if entry.country and term in entry.country.lower()
        ),
    )


def get_entry_by_value(value: str, registry: Optional[Registry] = None) -> Optional[TimeZoneEntry]:
    """Return the first entry whose identifier equals ``value``, or None."""
    for entry in _resolve(registry).entries:
        if entry.value == value:
            return entry
    return None


def get_label_from_value(value: str, registry: Optional[Registry] = None) -> Optional[str]:
    entry = get_entry_by_value(value, registry)
    return entry.label if entry else None


def get_value_from_label(label: str, registry: Optional[Registry] = None) -> Optional[str]:
    for entry in _resolve(registry).entries:
        if entry.label == label:
            return entry.value
    return None


def get_regions(registry: Optional[Registry] = None) -> tuple[str, ...]:
    """Return the region names in source order."""
    return _resolve(registry).regions
