"""
Amadeus Flight Provider - Flight Offers Search to Flight adapter.

Queries the Amadeus Flight Offers Search API and maps each offer's
outbound itinerary into a Flight record.
"""

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

from src.flight_search.adapters.data_providers.amadeus_client import AmadeusClient
from src.flight_search.exceptions import FlightProviderError, ProviderError
from src.flight_search.ports.flight_search_provider import FlightSearchProvider
from src.flight_search.schemas.flight import (
    Airline,
    Airport,
    Flight,
    FlightEndpoint,
    Segment,
)
from src.flight_search.schemas.search import CabinClass

logger = logging.getLogger(__name__)

FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"
AIRLINE_LOGO_URL = "https://pic.avs.io/al/64/64/{code}.png"

_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?)?$"
)


def parse_duration_minutes(duration: Optional[str]) -> Optional[int]:
    """
    Parse an ISO 8601 duration into total minutes.

    Examples:
        >>> parse_duration_minutes("PT2H30M")
        150
        >>> parse_duration_minutes("P1DT2H")
        1560
        >>> parse_duration_minutes("bogus") is None
        True
    """
    if not duration:
        return None
    match = _DURATION_RE.match(duration)
    if not match:
        return None
    days = int(match.group("days") or 0)
    hours = int(match.group("hours") or 0)
    minutes = int(match.group("minutes") or 0)
    return days * 1440 + hours * 60 + minutes


def airline_logo(code: str) -> str:
    return AIRLINE_LOGO_URL.format(code=code)


class AmadeusFlightProvider(FlightSearchProvider):
    """
    Flight search provider backed by Amadeus Flight Offers Search.

    Fares are requested for one adult in the default cabin: the result
    is the base fare that the pricing service scales by passenger count
    and cabin class, so one provider query serves every passenger/cabin
    combination.

    Attributes:
        _client: Authenticated Amadeus client.
        _max_offers: Upper bound on offers per query.
    """

    def __init__(self, client: AmadeusClient, max_offers: int = 50) -> None:
        """
        Initialize the provider.

        Args:
            client: Amadeus REST client.
            max_offers: Maximum offers requested per search.
        """
        self._client = client
        self._max_offers = max_offers

    @property
    def name(self) -> str:
        return "Amadeus"

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
        Fetch offers from Amadeus and map them to Flight records.

        Raises:
            FlightProviderError: If the Amadeus call fails.
        """
        params: Dict[str, Any] = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date.isoformat(),
            "adults": 1,
            "max": self._max_offers,
        }
        if return_date is not None:
            params["returnDate"] = return_date.isoformat()

        logger.debug(
            "Searching %s->%s on %s (%d pax, %s priced client-side)",
            origin,
            destination,
            departure_date,
            passengers,
            cabin_class.value,
        )

        try:
            payload = await self._client.get(FLIGHT_OFFERS_PATH, params)
        except ProviderError as e:
            raise FlightProviderError(
                e.message or "Failed to fetch flights", e.status_code
            ) from e

        flights = self.parse_offers(payload)
        logger.info(
            "Loaded %d flights from Amadeus for %s->%s", len(flights), origin, destination
        )
        return flights

    def parse_offers(self, payload: Dict[str, Any]) -> List[Flight]:
        """
        Map a Flight Offers Search response to Flight records.

        Offers that cannot be parsed are skipped and logged.
        """
        if not isinstance(payload, dict):
            raise FlightProviderError("Unexpected flight offers response format")

        dictionaries = payload.get("dictionaries", {}) or {}
        carriers: Dict[str, str] = dictionaries.get("carriers", {}) or {}
        locations: Dict[str, Dict[str, Any]] = dictionaries.get("locations", {}) or {}

        flights: List[Flight] = []
        for offer in payload.get("data", []) or []:
            try:
                flights.append(self._parse_offer(offer, carriers, locations))
            except (AttributeError, KeyError, TypeError, ValueError, IndexError) as e:
                offer_id = offer.get("id") if isinstance(offer, dict) else offer
                logger.warning("Skipping unparseable offer %s: %s", offer_id, e)
        return flights

    def _parse_offer(
        self,
        offer: Dict[str, Any],
        carriers: Dict[str, str],
        locations: Dict[str, Dict[str, Any]],
    ) -> Flight:
        itinerary = offer["itineraries"][0]
        raw_segments = itinerary["segments"]
        if not raw_segments:
            raise ValueError("itinerary has no segments")

        segments = [
            self._parse_segment(seg, index, carriers, locations)
            for index, seg in enumerate(raw_segments)
        ]

        validating = offer.get("validatingAirlineCodes") or []
        airline_code = validating[0] if validating else segments[0].airline.code

        price = offer["price"]
        return Flight.from_segments(
            id=str(offer["id"]),
            price=float(price.get("grandTotal") or price["total"]),
            currency=price.get("currency", "EUR"),
            segments=segments,
            airline=self._airline(airline_code, carriers),
        )

    def _parse_segment(
        self,
        segment: Dict[str, Any],
        index: int,
        carriers: Dict[str, str],
        locations: Dict[str, Dict[str, Any]],
    ) -> Segment:
        carrier_code = segment["carrierCode"]
        departure = segment["departure"]
        arrival = segment["arrival"]

        departure_end = FlightEndpoint(
            airport=self._airport(departure["iataCode"], locations),
            at=departure["at"],
        )
        arrival_end = FlightEndpoint(
            airport=self._airport(arrival["iataCode"], locations),
            at=arrival["at"],
        )

        duration = parse_duration_minutes(segment.get("duration"))
        if duration is None:
            elapsed = arrival_end.time - departure_end.time
            duration = max(int(elapsed.total_seconds() // 60), 0)

        return Segment(
            id=str(segment.get("id", index)),
            flight_number=f"{carrier_code}{segment.get('number', '')}",
            airline=self._airline(carrier_code, carriers),
            departure=departure_end,
            arrival=arrival_end,
            duration=duration,
        )

    @staticmethod
    def _airline(code: str, carriers: Dict[str, str]) -> Airline:
        name = carriers.get(code, code)
        # Amadeus dictionaries spell carriers in capitals
        if name.isupper() and len(name) > 3:
            name = name.title()
        return Airline(code=code, name=name, logo=airline_logo(code))

    @staticmethod
    def _airport(code: str, locations: Dict[str, Dict[str, Any]]) -> Airport:
        info = locations.get(code, {}) or {}
        return Airport(
            code=code,
            city=info.get("cityCode", ""),
            country=info.get("countryCode", ""),
        )
