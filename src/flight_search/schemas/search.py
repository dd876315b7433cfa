"""
Search parameter and filter schemas.

Closed enumerations for cabin classes, time-of-day buckets, sort keys
and filter keys, plus the immutable SearchParams and FilterState records.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import FrozenSet, Iterable, Optional

DEFAULT_MAX_PRICE = 2000.0


class CabinClass(Enum):
    """Fixed cabin-class enumeration used for fare scaling."""

    ECONOMY = "Economy"
    PREMIUM_ECONOMY = "Premium Economy"
    BUSINESS = "Business"
    FIRST = "First"


class TimeRange(Enum):
    """Departure time-of-day bucket."""

    ALL = "all"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class SortKey(Enum):
    """Ordering applied to the filtered flight list."""

    PRICE = "price"
    DURATION = "duration"
    DEPARTURE = "departure"
    STOPS = "stops"


class FilterKey(Enum):
    """Fields of FilterState a user can change."""

    MAX_PRICE = "max_price"
    STOPS = "stops"
    AIRLINES = "airlines"
    TIME_RANGE = "time_range"


@dataclass(frozen=True)
class SearchParams:
    """
    The active flight query.

    Created empty at session start and replaced field-by-field through
    ``merge``; never deleted.
    """

    origin: str = ""
    destination: str = ""
    departure_date: Optional[date] = None
    return_date: Optional[date] = None
    passengers: int = 1
    cabin_class: CabinClass = CabinClass.ECONOMY

    @property
    def is_complete(self) -> bool:
        """Whether origin, destination and departure date are all set."""
        return bool(self.origin and self.destination and self.departure_date)

    def merge(self, **changes) -> "SearchParams":
        """Return a copy with the given fields replaced (shallow merge)."""
        return replace(self, **changes)


@dataclass(frozen=True)
class FilterState:
    """
    User-chosen narrowing of results.

    Attributes:
        max_price: Ceiling on effective price.
        stops: None for no restriction, else the allowed stop counts
            (any value >= 2 stands for "2 or more").
        airlines: Allowed airline codes (empty = no restriction).
        time_range: Departure time-of-day bucket.
    """

    max_price: float = DEFAULT_MAX_PRICE
    stops: Optional[FrozenSet[int]] = None
    airlines: FrozenSet[str] = field(default_factory=frozenset)
    time_range: TimeRange = TimeRange.ALL

    @classmethod
    def create(
        cls,
        max_price: float = DEFAULT_MAX_PRICE,
        stops: Optional[Iterable[int]] = None,
        airlines: Optional[Iterable[str]] = None,
        time_range: TimeRange = TimeRange.ALL,
    ) -> "FilterState":
        """
        Factory method converting mutable collections to frozensets.

        Args:
            max_price: Ceiling on effective price.
            stops: Allowed stop counts, or None for all.
            airlines: Allowed airline codes.
            time_range: Departure bucket.

        Returns:
            FilterState instance.
        """
        return cls(
            max_price=max_price,
            stops=frozenset(stops) if stops is not None else None,
            airlines=frozenset(airlines or ()),
            time_range=time_range,
        )

    def with_value(self, key: FilterKey, value) -> "FilterState":
        """Return a copy with one filter replaced, normalizing collections."""
        if key is FilterKey.MAX_PRICE:
            return replace(self, max_price=float(value))
        if key is FilterKey.STOPS:
            return replace(
                self, stops=frozenset(value) if value is not None else None
            )
        if key is FilterKey.AIRLINES:
            return replace(self, airlines=frozenset(value or ()))
        if key is FilterKey.TIME_RANGE:
            return replace(self, time_range=TimeRange(value))
        raise ValueError(f"Unknown filter key: {key!r}")
