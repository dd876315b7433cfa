"""
Flight data schemas.

Defines the immutable flight records flowing from providers through
the pricing and filtering services, plus the Pandera contract for the
DataFrame form of a flight list used by the chart service.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

import pandera as pa
from pandera.typing import DataFrame, Series


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp as provided by the flight provider.

    The wall-clock time is kept as written: an offset, if present, is
    preserved on the result but never used to shift the hour.

    Args:
        value: Timestamp such as '2026-02-15T10:30:00' or '...Z'.

    Returns:
        Parsed datetime.
    """
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def minutes_between(start: str, end: str) -> int:
    """Whole minutes from one ISO timestamp to another."""
    delta = parse_timestamp(end) - parse_timestamp(start)
    return int(delta.total_seconds() // 60)


@dataclass(frozen=True)
class Airline:
    """Operating airline of a flight or segment."""

    code: str
    name: str
    logo: str = ""


@dataclass(frozen=True)
class Airport:
    """Airport descriptor attached to a departure or arrival."""

    code: str
    city: str = ""
    name: str = ""
    country: str = ""


@dataclass(frozen=True)
class FlightEndpoint:
    """
    One end of a flight or segment.

    Attributes:
        airport: Airport descriptor.
        at: ISO timestamp exactly as supplied by the provider.
    """

    airport: Airport
    at: str

    @property
    def time(self) -> datetime:
        """Parsed timestamp."""
        return parse_timestamp(self.at)


@dataclass(frozen=True)
class Segment:
    """
    Immutable representation of a single leg within a multi-leg flight.

    Never exists independently of its parent Flight.
    """

    id: str
    flight_number: str
    airline: Airline
    departure: FlightEndpoint
    arrival: FlightEndpoint
    duration: int  # minutes


@dataclass(frozen=True)
class Flight:
    """
    Immutable priced itinerary as received from the provider.

    Segments are ordered chronologically; a direct flight may carry a
    single segment or none at all. When segments are present, stops and
    duration are derived from them (see ``from_segments``).
    """

    id: str
    price: float
    currency: str
    airline: Airline
    flight_number: str
    departure: FlightEndpoint
    arrival: FlightEndpoint
    duration: int  # minutes
    stops: int
    segments: tuple[Segment, ...] = field(default_factory=tuple)

    @property
    def departure_time(self) -> datetime:
        return self.departure.time

    @property
    def arrival_time(self) -> datetime:
        return self.arrival.time

    @property
    def is_direct(self) -> bool:
        return self.stops == 0

    @property
    def layovers(self) -> List[int]:
        """Idle minutes between each segment's arrival and the next departure."""
        return [
            minutes_between(prev.arrival.at, nxt.departure.at)
            for prev, nxt in zip(self.segments, self.segments[1:])
        ]

    @classmethod
    def from_segments(
        cls,
        id: str,
        price: float,
        currency: str,
        segments: Sequence[Segment],
        airline: Optional[Airline] = None,
    ) -> "Flight":
        """
        Factory method to build a Flight whose shape comes from its segments.

        Stops are ``len(segments) - 1`` and duration is the sum of segment
        durations plus the layovers between them.

        Args:
            id: Unique flight identifier.
            price: Base fare for one passenger.
            currency: ISO currency code.
            segments: Chronologically ordered legs (at least one).
            airline: Headline airline. Defaults to the first segment's.

        Returns:
            Flight instance.
        """
        if not segments:
            raise ValueError("Flight must have at least one segment")

        first, last = segments[0], segments[-1]
        layover_minutes = sum(
            minutes_between(prev.arrival.at, nxt.departure.at)
            for prev, nxt in zip(segments, segments[1:])
        )

        return cls(
            id=id,
            price=price,
            currency=currency,
            airline=airline or first.airline,
            flight_number=first.flight_number,
            departure=first.departure,
            arrival=last.arrival,
            duration=sum(seg.duration for seg in segments) + layover_minutes,
            stops=len(segments) - 1,
            segments=tuple(segments),
        )


class FlightFrameSchema(pa.DataFrameModel):
    """
    Contract for the DataFrame form of a priced flight list.

    Built by the chart service from Flight records; validated once at
    that boundary, not per row.
    """

    flight_id: Series[str] = pa.Field(
        nullable=False,
        description="Provider flight identifier",
    )
    price: Series[float] = pa.Field(
        ge=0,
        description="Base fare for one passenger",
    )
    effective_price: Series[float] = pa.Field(
        ge=0,
        description="Fare scaled by passengers and cabin class",
    )
    airline_code: Series[str] = pa.Field(
        nullable=False,
        description="Airline IATA code (e.g., 'AF')",
    )
    stops: Series[int] = pa.Field(
        ge=0,
        description="Number of intermediate landings",
    )
    duration: Series[int] = pa.Field(
        ge=0,
        description="Total duration in minutes",
    )
    departure_at: Series[pa.DateTime] = pa.Field(
        nullable=False,
        description="Departure wall-clock time",
    )

    class Config:
        strict = False
        coerce = True
        name = "FlightFrameSchema"
        description = "Priced flight list for charts and summaries"


FlightFrame = DataFrame[FlightFrameSchema]
