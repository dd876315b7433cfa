"""
Pricing service module.

The provider returns a single base fare per flight; multi-passenger and
cabin-class economics are approximated here.
"""

import math
from typing import Dict, Iterable, Union

from src.flight_search.schemas.flight import Flight
from src.flight_search.schemas.search import CabinClass

__all__ = [
    "CABIN_MULTIPLIERS",
    "cabin_multiplier",
    "effective_price",
    "max_effective_price",
]

CABIN_MULTIPLIERS: Dict[CabinClass, float] = {
    CabinClass.ECONOMY: 1.0,
    CabinClass.PREMIUM_ECONOMY: 1.35,
    CabinClass.BUSINESS: 1.9,
    CabinClass.FIRST: 2.6,
}


def cabin_multiplier(cabin_class: Union[CabinClass, str, None]) -> float:
    """
    Fare multiplier for a cabin class.

    Accepts the enum or its display value ("Premium Economy"); anything
    unknown prices as Economy.
    """
    if not isinstance(cabin_class, CabinClass):
        try:
            cabin_class = CabinClass(cabin_class)
        except ValueError:
            return 1.0
    return CABIN_MULTIPLIERS.get(cabin_class, 1.0)


def effective_price(
    flight: Flight,
    passengers: int,
    cabin_class: Union[CabinClass, str, None],
) -> float:
    """
    Total price for a flight given passenger count and cabin class.

    Args:
        flight: Flight carrying the base fare.
        passengers: Passenger count, floored to 1.
        cabin_class: Cabin class (unknown values price as Economy).

    Returns:
        ``flight.price * max(passengers, 1) * cabin_multiplier(cabin_class)``.
    """
    return flight.price * max(passengers, 1) * cabin_multiplier(cabin_class)


def max_effective_price(
    flights: Iterable[Flight],
    passengers: int,
    cabin_class: Union[CabinClass, str, None],
) -> float:
    """Ceiling of the highest effective price, or 0 for no flights."""
    prices = [effective_price(f, passengers, cabin_class) for f in flights]
    if not prices:
        return 0.0
    return float(math.ceil(max(prices)))
