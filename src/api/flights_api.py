"""
HTTP API for the flight search engine.

Thin FastAPI layer over the providers: flight offers, ranked location
autocomplete and the natural-language assistant. Collaborators are
injected through ``create_app`` so tests can swap in fakes.

Run with:
    uvicorn src.api.flights_api:app --reload
"""

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.flight_search.adapters.data_providers import (
    AmadeusClient,
    AmadeusFlightProvider,
    AmadeusLocationProvider,
)
from src.flight_search.adapters.intent import OpenRouterIntentExtractor
from src.flight_search.config import Settings
from src.flight_search.exceptions import (
    FlightSearchError,
    LocationProviderError,
    ProviderError,
)
from src.flight_search.ports import (
    FlightSearchProvider,
    IntentExtractor,
    LocationProvider,
)
from src.flight_search.ports.location_provider import MIN_KEYWORD_LENGTH
from src.flight_search.schemas.intent import TRAVEL_CLASS_TO_CABIN
from src.flight_search.schemas.search import CabinClass
from src.flight_search.services.relevance_service import rank_by_country_relevance

logger = logging.getLogger(__name__)


# --- Pydantic Schemas (The JSON Contract) ---
# Read straight from the frozen dataclasses; field names go out in camelCase.


class _CamelSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class AirlineSchema(_CamelSchema):
    code: str
    name: str
    logo: str = ""


class AirportSchema(_CamelSchema):
    code: str
    city: str = ""
    name: str = ""
    country: str = ""


class EndpointSchema(_CamelSchema):
    airport: AirportSchema
    at: str


class SegmentSchema(_CamelSchema):
    id: str
    flight_number: str
    airline: AirlineSchema
    departure: EndpointSchema
    arrival: EndpointSchema
    duration: int


class FlightSchema(_CamelSchema):
    id: str
    price: float
    currency: str
    airline: AirlineSchema
    flight_number: str
    departure: EndpointSchema
    arrival: EndpointSchema
    duration: int
    stops: int
    segments: List[SegmentSchema]


class FlightsResponse(_CamelSchema):
    flights: List[FlightSchema]


class LocationSchema(_CamelSchema):
    code: str
    name: str
    city: str
    country: str
    country_code: str = ""
    type: str


class LocationsResponse(_CamelSchema):
    locations: List[LocationSchema]
    matched_country: Optional[str] = None


class AIRequest(BaseModel):
    query: Optional[str] = None
    action: str = "extract"
    context: Optional[str] = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _parse_cabin(value: str) -> Optional[CabinClass]:
    """Accept display names ("Premium Economy") and codes ("PREMIUM_ECONOMY")."""
    try:
        return CabinClass(value)
    except ValueError:
        return TRAVEL_CLASS_TO_CABIN.get(value.strip().upper().replace(" ", "_"))


def _parse_date(value: Optional[str]) -> Optional[date]:
    # Clients may send a full ISO timestamp; only the calendar date matters
    if not value:
        return None
    return date.fromisoformat(value[:10])


def create_app(
    settings: Optional[Settings] = None,
    flight_provider: Optional[FlightSearchProvider] = None,
    location_provider: Optional[LocationProvider] = None,
    intent_extractor: Optional[IntentExtractor] = None,
) -> FastAPI:
    """
    Build the API application.

    Collaborators not passed in are constructed from ``settings``
    (read from the environment if omitted). The intent extractor is
    only built when an OpenRouter key is configured.
    """
    settings = settings or Settings.from_env()

    amadeus_client: Optional[AmadeusClient] = None
    if flight_provider is None or location_provider is None:
        amadeus_client = AmadeusClient.from_settings(settings)
        flight_provider = flight_provider or AmadeusFlightProvider(
            amadeus_client, max_offers=settings.max_offers
        )
        location_provider = location_provider or AmadeusLocationProvider(amadeus_client)

    if intent_extractor is None and settings.has_openrouter_key:
        intent_extractor = OpenRouterIntentExtractor.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if amadeus_client is not None:
            await amadeus_client.close()
        if isinstance(intent_extractor, OpenRouterIntentExtractor):
            await intent_extractor.close()

    app = FastAPI(title="Flight Search API", lifespan=lifespan)

    # Enable CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/api/flights", response_model=FlightsResponse)
    async def get_flights(
        origin: Optional[str] = None,
        destination: Optional[str] = None,
        departure: Optional[str] = Query(None, alias="date"),
        passengers: int = 1,
        cabin: str = Query(CabinClass.ECONOMY.value, alias="cabinClass"),
        return_on: Optional[str] = Query(None, alias="returnDate"),
    ):
        """
        Search flight offers.

        Fares are per passenger in the base cabin; clients scale them
        with the pricing rules.
        """
        if not origin or not destination or not departure:
            return _error(400, "Missing required parameters: origin, destination, date")

        try:
            departure_date = _parse_date(departure)
            return_date = _parse_date(return_on)
        except ValueError:
            return _error(400, "Dates must be in YYYY-MM-DD format")

        cabin_class = _parse_cabin(cabin)
        if cabin_class is None:
            return _error(400, f"Unknown cabin class: {cabin}")

        try:
            flights = await flight_provider.search_flights(
                origin=origin.upper(),
                destination=destination.upper(),
                departure_date=departure_date,
                passengers=max(passengers, 1),
                cabin_class=cabin_class,
                return_date=return_date,
            )
        except ProviderError as e:
            logger.error("Flight search failed: %s", e)
            return _error(502, e.message or "Failed to fetch flights")

        return FlightsResponse.model_validate(
            {"flights": flights}, from_attributes=True
        )

    @app.get("/api/locations", response_model=LocationsResponse)
    async def get_locations(keyword: Optional[str] = None):
        """
        Airport and city autocomplete, ranked by country relevance.

        Lookup failures degrade to an empty list.
        """
        keyword = (keyword or "").strip()
        if len(keyword) < MIN_KEYWORD_LENGTH:
            return LocationsResponse(locations=[])

        try:
            locations = await location_provider.search_locations(keyword)
        except LocationProviderError as e:
            logger.warning("Location lookup failed for %r: %s", keyword, e)
            return LocationsResponse(locations=[])

        ranked = rank_by_country_relevance(locations, keyword)
        return LocationsResponse(
            locations=[
                LocationSchema(
                    code=loc.code,
                    name=loc.name,
                    city=loc.city,
                    country=loc.country,
                    country_code=loc.country_code,
                    type=loc.type.value,
                )
                for loc in ranked.ranked
            ],
            matched_country=ranked.matched_country,
        )

    @app.post("/api/ai")
    async def ai_assistant(request: AIRequest):
        """
        Natural-language assistant.

        ``extract`` returns a structured search intent, ``chat`` a
        conversational reply.
        """
        if not request.query:
            return _error(400, "Query is required")
        if request.action not in ("extract", "chat"):
            return _error(400, 'Invalid action. Use "extract" or "chat"')
        if intent_extractor is None:
            return _error(500, "OPENROUTER_API_KEY is not set in environment variables")

        try:
            if request.action == "extract":
                intent = await intent_extractor.extract_intent(request.query)
                return {"intent": intent.model_dump(mode="json", by_alias=True)}
            response = await intent_extractor.generate_response(
                request.query, request.context
            )
            return {"response": response}
        except FlightSearchError as e:
            logger.error("AI request failed: %s", e)
            return _error(500, str(e) or "Failed to process AI request")

    return app


app = create_app()
