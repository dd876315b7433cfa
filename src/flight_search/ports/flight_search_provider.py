"""
Flight Search Provider port interface.

Defines the abstract contract for data sources that return priced
flight offers for a query. Implementations handle the specifics of
each backend (Amadeus REST API, in-memory fixtures, ...).
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.flight_search.schemas.flight import Flight
from src.flight_search.schemas.search import CabinClass


class FlightSearchProvider(ABC):
    """
    Abstract interface for flight search providers.

    Implementations:
    - AmadeusFlightProvider: Amadeus Flight Offers Search API
    - InMemoryFlightProvider: Fixed flight list for demos and tests
    """

    @abstractmethod
    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        passengers: int = 1,
        cabin_class: CabinClass = CabinClass.ECONOMY,
        return_date: Optional[date] = None,
    ) -> List[Flight]:
        """
        Return flights matching the query.

        Args:
            origin: Origin airport/city IATA code.
            destination: Destination airport/city IATA code.
            departure_date: Outbound date.
            passengers: Number of adult passengers.
            cabin_class: Requested cabin.
            return_date: Inbound date for round trips (optional).

        Returns:
            List of Flight records (possibly empty).

        Raises:
            FlightProviderError: If the provider fails; the message is
                suitable for display.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Human-readable name of this provider.

        Returns:
            Provider identifier (e.g., "Amadeus", "In-memory").
        """
        ...
