"""
Tests for flight, search and intent schemas.

Tests cover:
- Flight construction from segments (stops, duration, layovers)
- Timestamp parsing
- SearchParams merging and completeness
- FilterState factory and single-field updates
- Lenient parsing of language-model intent output
"""

from datetime import date

import pytest
from dataclasses import FrozenInstanceError

from src.flight_search.schemas.flight import (
    Airline,
    Airport,
    Flight,
    FlightEndpoint,
    Segment,
    minutes_between,
    parse_timestamp,
)
from src.flight_search.schemas.intent import FlightSearchIntent
from src.flight_search.schemas.search import (
    DEFAULT_MAX_PRICE,
    CabinClass,
    FilterKey,
    FilterState,
    SearchParams,
    TimeRange,
)


def make_segment(id, origin, destination, dep, arr, duration, carrier="AF"):
    return Segment(
        id=id,
        flight_number=f"{carrier}{id}",
        airline=Airline(code=carrier, name=carrier),
        departure=FlightEndpoint(Airport(code=origin), dep),
        arrival=FlightEndpoint(Airport(code=destination), arr),
        duration=duration,
    )


# =============================================================================
# FLIGHT TESTS
# =============================================================================


class TestFlightFromSegments:
    """Tests for Flight.from_segments."""

    def test_two_leg_itinerary(self):
        segments = [
            make_segment("1", "JFK", "CDG", "2026-07-01T18:00:00", "2026-07-02T07:30:00", 450),
            make_segment("2", "CDG", "NCE", "2026-07-02T09:00:00", "2026-07-02T10:30:00", 90),
        ]

        flight = Flight.from_segments("X1", 480.0, "EUR", segments)

        assert flight.stops == 1
        assert flight.layovers == [90]
        assert flight.duration == 450 + 90 + 90
        assert flight.departure.airport.code == "JFK"
        assert flight.arrival.airport.code == "NCE"
        assert flight.flight_number == "AF1"
        assert not flight.is_direct

    def test_single_segment_is_direct(self):
        segments = [
            make_segment("1", "JFK", "LHR", "2026-07-01T08:00:00", "2026-07-01T20:00:00", 420)
        ]

        flight = Flight.from_segments("X2", 300.0, "USD", segments)

        assert flight.stops == 0
        assert flight.is_direct
        assert flight.duration == 420
        assert flight.layovers == []

    def test_explicit_airline_overrides_first_segment(self):
        segments = [
            make_segment("1", "JFK", "LHR", "2026-07-01T08:00:00", "2026-07-01T20:00:00", 420)
        ]

        flight = Flight.from_segments(
            "X3", 300.0, "USD", segments, airline=Airline("BA", "British Airways")
        )

        assert flight.airline.code == "BA"

    def test_requires_segments(self):
        with pytest.raises(ValueError):
            Flight.from_segments("X4", 100.0, "EUR", [])

    def test_flight_is_immutable(self, make_flight):
        flight = make_flight()
        with pytest.raises(FrozenInstanceError):
            flight.price = 1.0


class TestTimestamps:
    """Tests for timestamp helpers."""

    def test_parse_utc_suffix(self):
        assert parse_timestamp("2026-07-01T08:00:00Z").utcoffset().total_seconds() == 0

    def test_parse_keeps_wall_clock_hour(self):
        assert parse_timestamp("2026-07-01T23:15:00+09:00").hour == 23

    def test_minutes_between(self):
        assert minutes_between("2026-07-01T22:00:00", "2026-07-02T01:30:00") == 210


# =============================================================================
# SEARCH PARAMS AND FILTER STATE TESTS
# =============================================================================


class TestSearchParams:
    """Tests for SearchParams."""

    def test_defaults(self):
        params = SearchParams()

        assert params.passengers == 1
        assert params.cabin_class is CabinClass.ECONOMY
        assert not params.is_complete

    def test_merge_is_shallow_and_keeps_other_fields(self):
        params = SearchParams(origin="JFK", passengers=3)

        merged = params.merge(destination="LHR", departure_date=date(2026, 7, 1))

        assert merged.origin == "JFK"
        assert merged.passengers == 3
        assert merged.is_complete
        assert params.destination == ""

    def test_merge_rejects_unknown_fields(self):
        with pytest.raises(TypeError):
            SearchParams().merge(airline="AF")


class TestFilterState:
    """Tests for FilterState."""

    def test_defaults(self):
        filters = FilterState()

        assert filters.max_price == DEFAULT_MAX_PRICE
        assert filters.stops is None
        assert filters.airlines == frozenset()
        assert filters.time_range is TimeRange.ALL

    def test_create_freezes_collections(self):
        filters = FilterState.create(stops=[0, 1], airlines=["AF"])

        assert filters.stops == frozenset({0, 1})
        assert filters.airlines == frozenset({"AF"})

    @pytest.mark.parametrize(
        "key, value, attr, expected",
        [
            (FilterKey.MAX_PRICE, 250, "max_price", 250.0),
            (FilterKey.STOPS, [0], "stops", frozenset({0})),
            (FilterKey.STOPS, None, "stops", None),
            (FilterKey.AIRLINES, ["BA", "AF"], "airlines", frozenset({"AF", "BA"})),
            (FilterKey.TIME_RANGE, "evening", "time_range", TimeRange.EVENING),
        ],
    )
    def test_with_value(self, key, value, attr, expected):
        updated = FilterState().with_value(key, value)
        assert getattr(updated, attr) == expected

    def test_with_value_leaves_original_untouched(self):
        filters = FilterState()
        filters.with_value(FilterKey.MAX_PRICE, 10)
        assert filters.max_price == DEFAULT_MAX_PRICE


# =============================================================================
# INTENT TESTS
# =============================================================================


class TestFlightSearchIntent:
    """Tests for FlightSearchIntent parsing."""

    def test_parses_camel_case_payload(self):
        intent = FlightSearchIntent.model_validate(
            {
                "origin": "nyc",
                "destination": "LON",
                "departureDate": "2026-01-23",
                "adults": 2,
                "travelClass": "BUSINESS",
                "intent": "search",
                "preferences": ["direct flights"],
            }
        )

        assert intent.departure_date == date(2026, 1, 23)
        assert intent.cabin_class is CabinClass.BUSINESS
        assert intent.preferences == ["direct flights"]

    def test_default_intent(self):
        intent = FlightSearchIntent()

        assert intent.intent == "search"
        assert intent.adults == 1
        assert intent.to_search_params_update() == {}

    def test_lenient_fields(self):
        intent = FlightSearchIntent.model_validate(
            {
                "departureDate": "next friday",
                "adults": 0,
                "intent": "book",
                "preferences": "cheapest",
                "unexpected": True,
            }
        )

        assert intent.departure_date is None
        assert intent.adults == 1
        assert intent.intent == "search"
        assert intent.preferences == ["cheapest"]

    def test_unknown_travel_class_has_no_cabin(self):
        assert FlightSearchIntent(travel_class="COACH").cabin_class is None

    def test_search_params_update(self):
        intent = FlightSearchIntent.model_validate(
            {
                "origin": " jfk ",
                "destination": "cdg",
                "departureDate": "2026-07-01",
                "adults": 3,
                "travelClass": "premium economy",
            }
        )

        assert intent.to_search_params_update() == {
            "origin": "JFK",
            "destination": "CDG",
            "departure_date": date(2026, 7, 1),
            "passengers": 3,
            "cabin_class": CabinClass.PREMIUM_ECONOMY,
        }
