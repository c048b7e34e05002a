"""Bundled time zone and region tables."""
