"""Voyatek trip-planning client: API client, response normalizer and view state."""

__version__ = "1.0.0"
