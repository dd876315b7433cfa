"""
Port interfaces for Flight Search.

Ports define the abstract interfaces that the core uses to talk to
external systems (flight offers, location lookup, language model).
This follows the Ports and Adapters (Hexagonal) architecture pattern.
"""

from src.flight_search.ports.flight_search_provider import FlightSearchProvider
from src.flight_search.ports.intent_extractor import IntentExtractor
from src.flight_search.ports.location_provider import (
    MIN_KEYWORD_LENGTH,
    LocationProvider,
)

__all__ = [
    "FlightSearchProvider",
    "IntentExtractor",
    "LocationProvider",
    "MIN_KEYWORD_LENGTH",
]
