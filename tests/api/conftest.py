"""
Fixtures for HTTP API tests.

Builds the app with injected fakes so no request leaves the process.
"""

from unittest.mock import AsyncMock

import httpx
import pytest

from src.api.flights_api import create_app
from src.flight_search.config import Settings
from src.flight_search.schemas.intent import FlightSearchIntent


@pytest.fixture
def mock_flight_provider(sample_flights) -> AsyncMock:
    provider = AsyncMock()
    provider.name = "mock"
    provider.search_flights = AsyncMock(return_value=sample_flights)
    return provider


@pytest.fixture
def mock_location_provider(make_location) -> AsyncMock:
    provider = AsyncMock()
    provider.search_locations = AsyncMock(
        return_value=[
            make_location("NCE", "Nice", "France"),
            make_location("FRA", "Frankfurt", "Germany"),
            make_location("CDG", "Paris", "France"),
        ]
    )
    return provider


@pytest.fixture
def mock_intent_extractor() -> AsyncMock:
    extractor = AsyncMock()
    extractor.extract_intent = AsyncMock(
        return_value=FlightSearchIntent.model_validate(
            {"origin": "NYC", "destination": "LON", "departureDate": "2026-01-23"}
        )
    )
    extractor.generate_response = AsyncMock(return_value="Where would you like to go?")
    return extractor


@pytest.fixture
def app(mock_flight_provider, mock_location_provider, mock_intent_extractor):
    return create_app(
        settings=Settings(),
        flight_provider=mock_flight_provider,
        location_provider=mock_location_provider,
        intent_extractor=mock_intent_extractor,
    )


@pytest.fixture
async def api_client(app):
    """Async client talking to the app in-process."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
