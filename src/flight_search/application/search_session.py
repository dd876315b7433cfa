"""
SearchSession - state container for one flight search session.

Holds the search parameters, the unfiltered result set, the filter
selections and the sort order, and keeps the derived filtered view in
step with them. Constructed explicitly per session with its provider.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import pandas as pd
import plotly.graph_objects as go

from src.flight_search.exceptions import ProviderError, SearchValidationError
from src.flight_search.ports.flight_search_provider import FlightSearchProvider
from src.flight_search.schemas.flight import Flight
from src.flight_search.schemas.intent import FlightSearchIntent
from src.flight_search.schemas.search import (
    DEFAULT_MAX_PRICE,
    CabinClass,
    FilterKey,
    FilterState,
    SearchParams,
    SortKey,
)
from src.flight_search.services.chart_service import (
    build_flight_frame,
    create_price_trend_figure,
)
from src.flight_search.services.filter_service import apply_filters, sort_flights
from src.flight_search.services.insights_service import (
    AirlineOption,
    PriceRange,
    PriceTrendSummary,
    get_airline_options,
    get_price_range,
    get_price_trend_summary,
)
from src.flight_search.services.pricing_service import max_effective_price

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch flights"


@dataclass(frozen=True)
class PriceTrend:
    """Chart-ready view of the filtered flights."""

    frame: pd.DataFrame
    summary: Optional[PriceTrendSummary]
    figure: Optional[go.Figure]


class SearchSession:
    """
    Single source of truth for one search session.

    Example usage:
        >>> session = SearchSession(provider)
        >>> session.set_search_params(origin="JFK", destination="LHR",
        ...                           departure_date=date(2026, 7, 1))
        >>> await session.search_flights()
        >>> session.set_filter(FilterKey.STOPS, {0})
        >>> for flight in session.visible_flights:
        ...     print(flight.flight_number, flight.price)

    Every ``search_flights`` call takes a new sequence number; a response
    is applied only if no newer search was issued while it was in flight.

    Attributes:
        _provider: Flight search provider.
        _request_seq: Sequence number of the most recently issued search.
    """

    def __init__(self, provider: FlightSearchProvider) -> None:
        self._provider = provider

        self._search_params = SearchParams()
        self._all_flights: List[Flight] = []
        self._filtered_flights: List[Flight] = []
        self._filters = FilterState()
        self._sort_key = SortKey.PRICE
        self._is_loading = False
        self._error: Optional[str] = None

        self._request_seq = 0

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def search_params(self) -> SearchParams:
        return self._search_params

    @property
    def all_flights(self) -> List[Flight]:
        return list(self._all_flights)

    @property
    def filtered_flights(self) -> List[Flight]:
        return list(self._filtered_flights)

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_search_params(self, **changes: Any) -> None:
        """
        Shallow-merge changes into the search parameters.

        With flights loaded, the price ceiling is re-derived for the new
        pricing basis and the filters are re-applied.

        Raises:
            TypeError: If a field name is unknown.
            ValueError: If cabin_class is not a known cabin.
        """
        if "cabin_class" in changes and changes["cabin_class"] is not None:
            changes["cabin_class"] = CabinClass(changes["cabin_class"])

        self._search_params = self._search_params.merge(**changes)
        logger.debug("Search params updated: %s", changes)

        if self._all_flights:
            self._filters = self._filters.with_value(
                FilterKey.MAX_PRICE, self._price_ceiling()
            )
            self._recompute()

    async def search_flights(self) -> None:
        """
        Fetch flights for the current parameters.

        Incomplete parameters set a validation error without calling the
        provider. A provider failure stores its message and keeps the
        previously loaded flights; any other exception is logged and
        reported as a generic fetch failure.
        """
        self._request_seq += 1
        seq = self._request_seq
        self._is_loading = True
        self._error = None

        params = self._search_params
        if not params.is_complete:
            self._is_loading = False
            self._error = SearchValidationError().message
            logger.debug("Search rejected: incomplete params %s", params)
            return

        try:
            flights = await self._provider.search_flights(
                origin=params.origin,
                destination=params.destination,
                departure_date=params.departure_date,
                passengers=params.passengers,
                cabin_class=params.cabin_class,
                return_date=params.return_date,
            )
        except ProviderError as e:
            if self._is_superseded(seq):
                return
            logger.error("Flight search failed via %s: %s", self._provider.name, e)
            self._error = e.message or FETCH_FAILED_MESSAGE
            self._is_loading = False
            return
        except Exception:
            if self._is_superseded(seq):
                return
            logger.exception("Unexpected failure in %s search", self._provider.name)
            self._error = FETCH_FAILED_MESSAGE
            self._is_loading = False
            return

        if self._is_superseded(seq):
            return

        self._is_loading = False
        if not flights:
            self._all_flights = []
            self._filtered_flights = []
            logger.info(
                "No flights for %s->%s on %s",
                params.origin,
                params.destination,
                params.departure_date,
            )
            return

        self._all_flights = list(flights)
        self._filters = self._filters.with_value(
            FilterKey.MAX_PRICE, self._price_ceiling()
        )
        self._recompute()
        logger.info(
            "Loaded %d flights for %s->%s (%d after filters)",
            len(self._all_flights),
            params.origin,
            params.destination,
            len(self._filtered_flights),
        )

    def set_filter(self, key: Union[FilterKey, str], value: Any) -> None:
        """Replace one filter and recompute the filtered view."""
        self._filters = self._filters.with_value(FilterKey(key), value)
        self._recompute()

    def reset_filters(self) -> None:
        """Restore default filters, keeping the price ceiling of the loaded set."""
        max_price = self._price_ceiling() if self._all_flights else DEFAULT_MAX_PRICE
        self._filters = FilterState(max_price=max_price)
        self._recompute()

    def set_sort_key(self, key: Union[SortKey, str]) -> None:
        self._sort_key = SortKey(key)

    def apply_intent(self, intent: FlightSearchIntent) -> Dict[str, Any]:
        """
        Pre-fill search parameters from an extracted intent.

        Returns:
            The parameter changes that were applied (empty if none).
        """
        update = intent.to_search_params_update()
        if update:
            self.set_search_params(**update)
        return update

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def visible_flights(self) -> List[Flight]:
        """Filtered flights in the chosen sort order."""
        return sort_flights(self._filtered_flights, self._sort_key, self._search_params)

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        for flight in self._all_flights:
            if flight.id == flight_id:
                return flight
        return None

    @property
    def airline_options(self) -> List[AirlineOption]:
        return get_airline_options(self._all_flights)

    @property
    def price_range(self) -> PriceRange:
        return get_price_range(self._all_flights, self._search_params)

    @property
    def price_trend(self) -> PriceTrend:
        df = build_flight_frame(self._filtered_flights, self._search_params)
        return PriceTrend(
            frame=df,
            summary=get_price_trend_summary(df),
            figure=create_price_trend_figure(df),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _price_ceiling(self) -> float:
        return max_effective_price(
            self._all_flights,
            self._search_params.passengers,
            self._search_params.cabin_class,
        )

    def _recompute(self) -> None:
        self._filtered_flights = apply_filters(
            self._all_flights, self._filters, self._search_params
        )

    def _is_superseded(self, seq: int) -> bool:
        if seq == self._request_seq:
            return False
        logger.info(
            "Discarding response of search #%d (latest is #%d)", seq, self._request_seq
        )
        return True
