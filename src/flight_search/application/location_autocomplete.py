"""
LocationAutocomplete - debounced, ranked airport/city lookup.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from src.flight_search.config import Settings
from src.flight_search.exceptions import LocationProviderError
from src.flight_search.ports.location_provider import (
    MIN_KEYWORD_LENGTH,
    LocationProvider,
)
from src.flight_search.schemas.location import POPULAR_AIRPORTS, RankedLocations
from src.flight_search.services.relevance_service import rank_by_country_relevance

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 150


class LocationAutocomplete:
    """
    Keystroke-driven location search.

    Each ``lookup`` waits out the debounce window and only queries the
    provider if no newer keystroke arrived meanwhile. Responses for
    superseded keystrokes are dropped, so results never go backwards.

    Attributes:
        _provider: Location lookup provider.
        _debounce_seconds: Quiet period before a lookup is sent.
        _sleep: Awaitable sleep (replaceable in tests).
        _latest: Sequence number of the newest keystroke.
    """

    def __init__(
        self,
        provider: LocationProvider,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self._debounce_seconds = max(debounce_ms, 0) / 1000.0
        self._sleep = sleep
        self._latest = 0

    @classmethod
    def from_settings(
        cls,
        provider: LocationProvider,
        settings: Settings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> "LocationAutocomplete":
        return cls(provider, debounce_ms=settings.autocomplete_debounce_ms, sleep=sleep)

    async def lookup(self, query: str) -> Optional[RankedLocations]:
        """
        Look up and rank locations for a keystroke.

        Args:
            query: Current text of the location input.

        Returns:
            Popular airports for queries shorter than two characters,
            an empty result if the provider fails, the ranked locations
            otherwise, or None if a newer keystroke superseded this one.
        """
        self._latest += 1
        seq = self._latest

        query = query.strip()
        if len(query) < MIN_KEYWORD_LENGTH:
            return RankedLocations(ranked=POPULAR_AIRPORTS)

        if self._debounce_seconds:
            await self._sleep(self._debounce_seconds)
        if seq != self._latest:
            logger.debug("Skipping lookup for %r: superseded before send", query)
            return None

        try:
            locations = await self._provider.search_locations(query)
        except LocationProviderError as e:
            if seq != self._latest:
                return None
            logger.warning("Location lookup failed for %r: %s", query, e)
            return RankedLocations()

        if seq != self._latest:
            logger.debug("Dropping stale lookup result for %r", query)
            return None

        return rank_by_country_relevance(locations, query)
