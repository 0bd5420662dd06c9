"""
Bundled country reference data used by the destination picker.

Loaded once on first use and read-only afterwards. A missing or malformed file
is not fatal: the provider simply has no countries.
"""

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from voyatek.config import settings
from voyatek.models import Country

logger = logging.getLogger(__name__)

_countries_adapter = TypeAdapter(List[Country])


class CountryProvider:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else settings.countries_file
        self._countries: Optional[List[Country]] = None

    @property
    def countries(self) -> List[Country]:
        if self._countries is None:
            self._countries = self._load()
        return self._countries

    def _load(self) -> List[Country]:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            logger.warning(f"{self.path.name} could not be read: {e}")
            return []
        try:
            countries = _countries_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Failed to decode {self.path.name}: {e.error_count()} error(s)")
            return []
        logger.info(f"Loaded {len(countries)} countries from {self.path.name}")
        return countries

    def search(self, text: str) -> List[Country]:
        """
        Case-insensitive match on name or ISO code, or on dial code with any '+' dropped.
        Empty text returns every country.
        """
        query = (text or "").strip()
        if not query:
            return list(self.countries)
        needle = query.casefold()
        dial_needle = needle.replace("+", "")
        return [
            c for c in self.countries
            if needle in c.name.casefold()
            or needle in c.code.casefold()
            or (dial_needle and dial_needle in c.dial_code.casefold())
        ]

    def by_code(self, code: str) -> Optional[Country]:
        code = code.upper()
        for country in self.countries:
            if country.code == code:
                return country
        return None


_provider: Optional[CountryProvider] = None


def get_country_provider() -> CountryProvider:
    global _provider
    if _provider is None:
        _provider = CountryProvider()
    return _provider
