"""
Insights service for the filter sidebar and price chart header.

Derives airline facets, the observed price range and price summary
statistics from the current result set.
"""

import math
from collections import Counter
from typing import Dict, List, Optional, Sequence, TypedDict

import pandas as pd

from src.flight_search.schemas.flight import Flight
from src.flight_search.schemas.search import SearchParams
from src.flight_search.services.pricing_service import effective_price

__all__ = [
    "AirlineOption",
    "PriceRange",
    "PriceTrendSummary",
    "get_airline_options",
    "get_price_range",
    "get_price_trend_summary",
]

# Slider bounds before any flights are loaded
EMPTY_PRICE_RANGE = (0, 3000)


class AirlineOption(TypedDict):
    """Airline checkbox entry."""

    code: str
    name: str
    count: int


class PriceRange(TypedDict):
    """Price slider bounds."""

    min: int
    max: int


class PriceTrendSummary(TypedDict):
    """Headline numbers above the price chart."""

    lowest: float
    average: float
    highest: float
    count: int


def get_airline_options(flights: Sequence[Flight]) -> List[AirlineOption]:
    """
    Unique airlines in the result set, most frequent first.

    Args:
        flights: Complete (unfiltered) flight list.

    Returns:
        AirlineOption entries; ties keep first-seen order.
    """
    counts = Counter(f.airline.code for f in flights)
    names: Dict[str, str] = {}
    for flight in flights:
        names.setdefault(flight.airline.code, flight.airline.name)

    ordered = sorted(names, key=lambda code: -counts[code])
    return [
        AirlineOption(code=code, name=names[code], count=counts[code])
        for code in ordered
    ]


def get_price_range(flights: Sequence[Flight], params: SearchParams) -> PriceRange:
    """
    Floor of the lowest and ceiling of the highest effective price.

    Args:
        flights: Complete flight list.
        params: Pricing basis.

    Returns:
        PriceRange; (0, 3000) when there are no flights.
    """
    if not flights:
        low, high = EMPTY_PRICE_RANGE
        return PriceRange(min=low, max=high)

    prices = [effective_price(f, params.passengers, params.cabin_class) for f in flights]
    return PriceRange(min=math.floor(min(prices)), max=math.ceil(max(prices)))


def get_price_trend_summary(df: pd.DataFrame) -> Optional[PriceTrendSummary]:
    """
    Lowest, average and highest effective price of a flight frame.

    Args:
        df: Frame from ``chart_service.build_flight_frame``.

    Returns:
        PriceTrendSummary, or None if the frame is empty.
    """
    if df.empty:
        return None

    prices = df["effective_price"]
    return PriceTrendSummary(
        lowest=float(prices.min()),
        average=round(float(prices.mean()), 2),
        highest=float(prices.max()),
        count=int(len(df)),
    )
