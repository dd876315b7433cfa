"""
Schema definitions for Flight Search.

Immutable dataclasses for flights, search parameters, filters and
locations; a Pandera contract for the flight DataFrame; a pydantic
model for language-model intent output.
"""

from .flight import (
    Airline,
    Airport,
    Flight,
    FlightEndpoint,
    FlightFrame,
    FlightFrameSchema,
    Segment,
)
from .intent import FlightSearchIntent
from .location import Location, LocationType, RankedLocations
from .search import (
    DEFAULT_MAX_PRICE,
    CabinClass,
    FilterKey,
    FilterState,
    SearchParams,
    SortKey,
    TimeRange,
)

__all__ = [
    # Flight schemas
    "Airline",
    "Airport",
    "Flight",
    "FlightEndpoint",
    "Segment",
    "FlightFrame",
    "FlightFrameSchema",
    # Search and filters
    "DEFAULT_MAX_PRICE",
    "CabinClass",
    "FilterKey",
    "FilterState",
    "SearchParams",
    "SortKey",
    "TimeRange",
    # Locations
    "Location",
    "LocationType",
    "RankedLocations",
    # Intent
    "FlightSearchIntent",
]
