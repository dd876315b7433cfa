"""
Filter service module for applying user-selected filters and sort order.

Provides pure functions that narrow an already-fetched flight list by
the sidebar selections and order it by the chosen sort key. Prices are
always compared as effective prices for the current search parameters.
"""

from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence

from src.flight_search.schemas.flight import Flight
from src.flight_search.schemas.search import (
    CabinClass,
    FilterState,
    SearchParams,
    SortKey,
    TimeRange,
)
from src.flight_search.services.pricing_service import effective_price

__all__ = [
    "TIME_RANGE_HOURS",
    "apply_filters",
    "filter_flight",
    "sort_flights",
]

# Half-open hour windows [start, end); hours 0-4 belong to no named bucket
TIME_RANGE_HOURS: Dict[TimeRange, range] = {
    TimeRange.MORNING: range(5, 12),
    TimeRange.AFTERNOON: range(12, 18),
    TimeRange.EVENING: range(18, 24),
}

MULTI_STOP_BUCKET = 2


def _stop_bucket(stops: int) -> int:
    return min(stops, MULTI_STOP_BUCKET)


def _matches_price(flight: Flight, max_price: float, params: SearchParams) -> bool:
    return effective_price(flight, params.passengers, params.cabin_class) <= max_price


def _matches_stops(flight: Flight, stops: Optional[FrozenSet[int]]) -> bool:
    if not stops:
        return True
    allowed = {_stop_bucket(s) for s in stops}
    return _stop_bucket(flight.stops) in allowed


def _matches_airlines(flight: Flight, airlines: FrozenSet[str]) -> bool:
    if not airlines:
        return True
    return flight.airline.code in airlines


def _matches_time_range(flight: Flight, time_range: TimeRange) -> bool:
    if time_range is TimeRange.ALL:
        return True
    return flight.departure_time.hour in TIME_RANGE_HOURS[time_range]


def filter_flight(flight: Flight, filters: FilterState, params: SearchParams) -> bool:
    """
    Check a single flight against every active filter.

    Args:
        flight: Flight to test.
        filters: Current filter selections.
        params: Search parameters supplying passengers and cabin class.

    Returns:
        True if the flight passes all filters.
    """
    return (
        _matches_price(flight, filters.max_price, params)
        and _matches_stops(flight, filters.stops)
        and _matches_airlines(flight, filters.airlines)
        and _matches_time_range(flight, filters.time_range)
    )


def apply_filters(
    flights: Sequence[Flight],
    filters: FilterState,
    params: SearchParams,
) -> List[Flight]:
    """
    Apply user-selected filters to the flight list.

    Args:
        flights: The complete flight list for the current search.
        filters: FilterState containing all user selections.
        params: Current search parameters (pricing basis).

    Returns:
        Flights matching all criteria, in their original order.
    """
    return [f for f in flights if filter_flight(f, filters, params)]


def _sort_key_function(
    sort_key: SortKey, params: SearchParams
) -> Callable[[Flight], Any]:
    if sort_key is SortKey.PRICE:
        return lambda f: effective_price(f, params.passengers, params.cabin_class)
    if sort_key is SortKey.DURATION:
        return lambda f: f.duration
    if sort_key is SortKey.DEPARTURE:
        # Wall-clock time as written; offsets are dropped so mixed zones compare
        return lambda f: f.departure_time.replace(tzinfo=None)
    if sort_key is SortKey.STOPS:
        return lambda f: f.stops
    raise ValueError(f"Unknown sort key: {sort_key!r}")


def sort_flights(
    flights: Sequence[Flight],
    sort_key: SortKey,
    params: Optional[SearchParams] = None,
) -> List[Flight]:
    """
    Order flights by the chosen key (ascending, stable).

    Args:
        flights: Flights to order; the input is not modified.
        sort_key: Price, duration, departure or stops.
        params: Pricing basis for price sorting. Defaults to one Economy
            passenger, which orders identically to the base fare.

    Returns:
        New list in sorted order; ties keep their relative order.
    """
    params = params or SearchParams(passengers=1, cabin_class=CabinClass.ECONOMY)
    return sorted(flights, key=_sort_key_function(SortKey(sort_key), params))
