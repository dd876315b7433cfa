"""
Location schemas for airport/city autocomplete.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class LocationType(Enum):
    """Kind of location returned by the lookup provider."""

    AIRPORT = "AIRPORT"
    CITY = "CITY"


@dataclass(frozen=True)
class Location:
    """
    Airport or city record returned by autocomplete.

    Ephemeral: fetched per (debounced) keystroke and never cached.
    """

    code: str
    name: str
    city: str
    country: str
    country_code: str = ""
    type: LocationType = LocationType.AIRPORT


@dataclass(frozen=True)
class RankedLocations:
    """
    Output of the country relevance ranker.

    Attributes:
        ranked: Locations in display order (possibly narrowed).
        matched_country: Country the query strongly matched, if any.
        scores: Final relevance score per country.
    """

    ranked: tuple[Location, ...] = ()
    matched_country: Optional[str] = None
    scores: Dict[str, int] = field(default_factory=dict)


# Shown before the user has typed enough to search
POPULAR_AIRPORTS: tuple[Location, ...] = (
    Location("JFK", "John F Kennedy International Airport", "New York", "United States", "US"),
    Location("LAX", "Los Angeles International Airport", "Los Angeles", "United States", "US"),
    Location("LHR", "London Heathrow Airport", "London", "United Kingdom", "GB"),
    Location("CDG", "Charles de Gaulle Airport", "Paris", "France", "FR"),
    Location("DXB", "Dubai International Airport", "Dubai", "United Arab Emirates", "AE"),
    Location("ORD", "O'Hare International Airport", "Chicago", "United States", "US"),
)
