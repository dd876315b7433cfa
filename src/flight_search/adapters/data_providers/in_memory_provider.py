"""
In-memory providers for demos and tests.

Serve a fixed list of flights or locations without any network access.
"""

from datetime import date
from typing import List, Optional, Sequence

from src.flight_search.exceptions import FlightProviderError
from src.flight_search.ports.flight_search_provider import FlightSearchProvider
from src.flight_search.ports.location_provider import (
    MIN_KEYWORD_LENGTH,
    LocationProvider,
)
from src.flight_search.schemas.flight import Flight
from src.flight_search.schemas.location import Location
from src.flight_search.schemas.search import CabinClass


class InMemoryFlightProvider(FlightSearchProvider):
    """
    Flight provider returning flights from a fixed list.

    Flights are matched on departure/arrival airport codes and departure
    date. Setting ``error`` makes every search fail with that message.
    """

    def __init__(
        self, flights: Sequence[Flight] = (), error: Optional[str] = None
    ) -> None:
        self._flights = tuple(flights)
        self.error = error
        self.calls = 0

    @property
    def name(self) -> str:
        return "In-memory"

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        passengers: int = 1,
        cabin_class: CabinClass = CabinClass.ECONOMY,
        return_date: Optional[date] = None,
    ) -> List[Flight]:
        self.calls += 1
        if self.error:
            raise FlightProviderError(self.error)

        return [
            f
            for f in self._flights
            if f.departure.airport.code == origin
            and f.arrival.airport.code == destination
            and f.departure_time.date() == departure_date
        ]


class InMemoryLocationProvider(LocationProvider):
    """Location provider matching code, name, city or country substrings."""

    def __init__(self, locations: Sequence[Location] = ()) -> None:
        self._locations = tuple(locations)

    @property
    def name(self) -> str:
        return "In-memory"

    async def search_locations(self, keyword: str) -> List[Location]:
        needle = keyword.strip().casefold()
        if len(needle) < MIN_KEYWORD_LENGTH:
            return []
        return [
            loc
            for loc in self._locations
            if any(
                needle in field.casefold()
                for field in (loc.code, loc.name, loc.city, loc.country)
            )
        ]
