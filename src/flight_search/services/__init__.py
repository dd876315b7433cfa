"""
Domain services for Flight Search.

Pure functions over already-fetched data: pricing, relevance ranking,
filtering and sorting, result-set insights and chart building.
"""

from src.flight_search.services.chart_service import (
    build_flight_frame,
    create_price_trend_figure,
)
from src.flight_search.services.filter_service import (
    apply_filters,
    filter_flight,
    sort_flights,
)
from src.flight_search.services.insights_service import (
    get_airline_options,
    get_price_range,
    get_price_trend_summary,
)
from src.flight_search.services.pricing_service import (
    cabin_multiplier,
    effective_price,
    max_effective_price,
)
from src.flight_search.services.relevance_service import rank_by_country_relevance

__all__ = [
    # Pricing
    "cabin_multiplier",
    "effective_price",
    "max_effective_price",
    # Relevance
    "rank_by_country_relevance",
    # Filter & sort
    "apply_filters",
    "filter_flight",
    "sort_flights",
    # Insights
    "get_airline_options",
    "get_price_range",
    "get_price_trend_summary",
    # Charts
    "build_flight_frame",
    "create_price_trend_figure",
]
