"""
Amadeus Location Provider - Airport & City Search adapter.
"""

import logging
from typing import Any, Dict, List, Optional

from src.flight_search.adapters.data_providers.amadeus_client import AmadeusClient
from src.flight_search.exceptions import LocationProviderError, ProviderError
from src.flight_search.ports.location_provider import (
    MIN_KEYWORD_LENGTH,
    LocationProvider,
)
from src.flight_search.schemas.location import Location, LocationType

logger = logging.getLogger(__name__)

LOCATIONS_PATH = "/v1/reference-data/locations"


class AmadeusLocationProvider(LocationProvider):
    """Location lookup backed by the Amadeus Airport & City Search API."""

    def __init__(self, client: AmadeusClient, limit: int = 20) -> None:
        self._client = client
        self._limit = limit

    @property
    def name(self) -> str:
        return "Amadeus"

    async def search_locations(self, keyword: str) -> List[Location]:
        keyword = keyword.strip()
        if len(keyword) < MIN_KEYWORD_LENGTH:
            return []

        try:
            payload = await self._client.get(
                LOCATIONS_PATH,
                {
                    "keyword": keyword,
                    "subType": "AIRPORT,CITY",
                    "page[limit]": self._limit,
                },
            )
        except ProviderError as e:
            raise LocationProviderError(e.message, e.status_code) from e

        locations = [
            loc
            for loc in (self._parse_location(raw) for raw in payload.get("data", []) or [])
            if loc is not None
        ]
        logger.debug("Found %d locations for %r", len(locations), keyword)
        return locations

    @staticmethod
    def _parse_location(raw: Dict[str, Any]) -> Optional[Location]:
        code = raw.get("iataCode")
        if not code:
            return None

        address = raw.get("address", {}) or {}
        name = raw.get("name", "") or code
        try:
            location_type = LocationType(raw.get("subType", "AIRPORT"))
        except ValueError:
            location_type = LocationType.AIRPORT

        return Location(
            code=code,
            name=name,
            city=address.get("cityName") or name,
            country=address.get("countryName", "") or "",
            country_code=address.get("countryCode", "") or "",
            type=location_type,
        )
