"""
Application layer for Flight Search.

Stateful use cases composed from the services and ports: the search
session that owns results and filters, and debounced location lookup.
"""

from src.flight_search.application.location_autocomplete import LocationAutocomplete
from src.flight_search.application.search_session import PriceTrend, SearchSession

__all__ = ["LocationAutocomplete", "PriceTrend", "SearchSession"]
