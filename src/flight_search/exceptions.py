"""
Custom exceptions for the flight search engine.

Provides a hierarchy of exceptions for clear error handling
at the boundary between the core and its external collaborators.
"""

from typing import Optional


class FlightSearchError(Exception):
    """Base exception for all flight search errors."""

    pass


class ConfigurationError(FlightSearchError):
    """Raised when a required setting (credential, endpoint) is missing."""

    def __init__(self, setting: str, message: str = "") -> None:
        self.setting = setting
        self.message = message or f"Missing required setting: {setting}"
        super().__init__(self.message)


class SearchValidationError(FlightSearchError):
    """Raised when search parameters are incomplete or invalid."""

    def __init__(
        self, message: str = "Please select origin, destination and date."
    ) -> None:
        self.message = message
        super().__init__(message)


class ProviderError(FlightSearchError):
    """Base exception for failures of an external data provider."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class FlightProviderError(ProviderError):
    """Raised when the flight search provider fails or returns an error status."""

    pass


class LocationProviderError(ProviderError):
    """Raised when the location lookup provider fails."""

    pass


class IntentExtractionError(ProviderError):
    """Raised when the language model API call fails."""

    pass
