"""
Location Provider port interface.

Defines the contract for airport/city lookups used by autocomplete.
"""

from abc import ABC, abstractmethod
from typing import List

from src.flight_search.schemas.location import Location

MIN_KEYWORD_LENGTH = 2


class LocationProvider(ABC):
    """
    Abstract interface for location lookup providers.

    Keywords shorter than MIN_KEYWORD_LENGTH never reach the backend.
    """

    @abstractmethod
    async def search_locations(self, keyword: str) -> List[Location]:
        """
        Return airports and cities matching a free-text keyword.

        Args:
            keyword: User input (at least two characters to query).

        Returns:
            Matching Location records, unranked.

        Raises:
            LocationProviderError: If the backend fails. Callers degrade
                this to an empty result.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name."""
        ...
