"""
Data provider adapters for flight and location sources.
"""

from src.flight_search.adapters.data_providers.amadeus_client import AmadeusClient
from src.flight_search.adapters.data_providers.amadeus_flight_provider import (
    AmadeusFlightProvider,
)
from src.flight_search.adapters.data_providers.amadeus_location_provider import (
    AmadeusLocationProvider,
)
from src.flight_search.adapters.data_providers.in_memory_provider import (
    InMemoryFlightProvider,
    InMemoryLocationProvider,
)

__all__ = [
    "AmadeusClient",
    "AmadeusFlightProvider",
    "AmadeusLocationProvider",
    "InMemoryFlightProvider",
    "InMemoryLocationProvider",
]
