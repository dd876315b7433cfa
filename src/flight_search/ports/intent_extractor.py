"""
Intent Extractor port interface.

Defines the contract for turning a natural-language request into a
structured, advisory FlightSearchIntent.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.flight_search.schemas.intent import FlightSearchIntent


class IntentExtractor(ABC):
    """Abstract interface for natural-language intent extraction."""

    @abstractmethod
    async def extract_intent(self, query: str) -> FlightSearchIntent:
        """
        Extract structured search parameters from a free-text query.

        Malformed model output yields the default ``FlightSearchIntent()``
        rather than an error.

        Raises:
            IntentExtractionError: If the model API call itself fails.
        """
        ...

    @abstractmethod
    async def generate_response(
        self, query: str, context: Optional[str] = None
    ) -> str:
        """
        Produce a conversational reply guiding the user's search.

        Args:
            query: The user's message.
            context: Previous assistant message, if any.

        Raises:
            IntentExtractionError: If the model API call fails.
        """
        ...
