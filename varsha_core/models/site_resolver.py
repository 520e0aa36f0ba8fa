"""
SITE RESOLVER
Maps a free-text location and postal code onto one reference city record
Graceful degradation: an approximate city is always returned, never an error
"""

import logging
from typing import Optional, Sequence

from varsha_core.config.settings import DEFAULT_CITY, PINCODE_PREFIX_LENGTH
from varsha_core.data_sources import CityRecord
from varsha_core.utils.core import ReferenceDataError

logger = logging.getLogger(__name__)


class SiteResolver:
    """
    Resolution order:
    1. pincode prefix (first 3 digits) - first match wins
    2. case-insensitive substring match of location against city / state, both directions
    3. default city, else the first table entry
    """

    def __init__(self, cities: Sequence[CityRecord], default_city: str = DEFAULT_CITY):
        if not cities:
            raise ReferenceDataError("Cannot resolve sites against an empty city table")
        self.logger = logging.getLogger(__name__)
        self.cities = tuple(cities)
        self.default_city = default_city

    def resolve(self, location: str, pincode: str) -> CityRecord:
        city = self._match_pincode(pincode)
        if city is not None:
            self.logger.info(f"Resolved pincode {pincode} to {city.city}, {city.state}")
            return city

        city = self._match_location(location)
        if city is not None:
            self.logger.info(f"Resolved location '{location}' to {city.city}, {city.state}")
            return city

        city = self._fallback()
        self.logger.warning(
            f"No city matched location '{location}' / pincode {pincode} - "
            f"using {city.city} reference data"
        )
        return city

    def _match_pincode(self, pincode: str) -> Optional[CityRecord]:
        prefix = (pincode or '')[:PINCODE_PREFIX_LENGTH]
        if len(prefix) < PINCODE_PREFIX_LENGTH:
            return None

        for city in self.cities:
            if city.pincode.startswith(prefix):
                return city
        return None

    def _match_location(self, location: str) -> Optional[CityRecord]:
        query = (location or '').strip().lower()
        if not query:
            return None

        for city in self.cities:
            name = city.city.lower()
            state = city.state.lower()
            if name in query or query in name or state in query or query in state:
                return city
        return None

    def _fallback(self) -> CityRecord:
        for city in self.cities:
            if city.city == self.default_city:
                return city
        return self.cities[0]
