"""
Shared fixtures for flight search tests.

Provides a flight factory so individual tests only spell out the
fields they care about.
"""

from datetime import timedelta
from typing import Callable

import pytest

from src.flight_search.schemas.flight import (
    Airline,
    Airport,
    Flight,
    FlightEndpoint,
    parse_timestamp,
)
from src.flight_search.schemas.location import Location, LocationType

AIRLINE_NAMES = {
    "AF": "Air France",
    "BA": "British Airways",
    "DL": "Delta Air Lines",
    "LH": "Lufthansa",
}


def build_flight(
    id: str = "F1",
    price: float = 100.0,
    stops: int = 0,
    airline: str = "AF",
    departure_at: str = "2026-07-01T08:00:00",
    duration: int = 420,
    origin: str = "JFK",
    destination: str = "CDG",
    currency: str = "EUR",
) -> Flight:
    """Create a Flight without segments; arrival is departure + duration."""
    arrival_at = (parse_timestamp(departure_at) + timedelta(minutes=duration)).isoformat()
    carrier = Airline(code=airline, name=AIRLINE_NAMES.get(airline, airline))
    return Flight(
        id=id,
        price=price,
        currency=currency,
        airline=carrier,
        flight_number=f"{airline}{100 + len(id)}",
        departure=FlightEndpoint(Airport(code=origin), departure_at),
        arrival=FlightEndpoint(Airport(code=destination), arrival_at),
        duration=duration,
        stops=stops,
    )


@pytest.fixture
def anyio_backend():
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def make_flight() -> Callable[..., Flight]:
    """Factory fixture for Flight records."""
    return build_flight


@pytest.fixture
def make_location() -> Callable[..., Location]:
    """Factory fixture for Location records."""

    def _make(
        code: str,
        city: str,
        country: str,
        type: LocationType = LocationType.AIRPORT,
    ) -> Location:
        return Location(
            code=code,
            name=f"{city} Airport",
            city=city,
            country=country,
            type=type,
        )

    return _make


@pytest.fixture
def sample_flights(make_flight) -> list[Flight]:
    """Five flights JFK -> CDG on 2026-07-01 with varied shape."""
    return [
        make_flight("F1", price=120.0, stops=0, airline="AF", departure_at="2026-07-01T08:00:00", duration=420),
        make_flight("F2", price=95.0, stops=1, airline="DL", departure_at="2026-07-01T13:30:00", duration=600),
        make_flight("F3", price=300.0, stops=0, airline="AF", departure_at="2026-07-01T19:15:00", duration=410),
        make_flight("F4", price=95.0, stops=2, airline="LH", departure_at="2026-07-01T06:45:00", duration=780),
        make_flight("F5", price=500.0, stops=0, airline="BA", departure_at="2026-07-01T02:10:00", duration=400),
    ]
