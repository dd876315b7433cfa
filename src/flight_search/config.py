"""
Flight search configuration module.

Centralizes credentials, endpoints, timeouts and defaults used
by the adapters and the HTTP API. Values come from the environment
(optionally a .env file) and are frozen once loaded.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

AMADEUS_TEST_URL = "https://test.api.amadeus.com"
AMADEUS_PRODUCTION_URL = "https://api.amadeus.com"
OPENROUTER_API_URL = "https://openrouter.ai/api/v1"

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
)


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the flight search engine.

    Attributes:
        amadeus_client_id: Amadeus OAuth2 client id.
        amadeus_client_secret: Amadeus OAuth2 client secret.
        amadeus_env: "test" or "production".
        openrouter_api_key: OpenRouter API key for intent extraction.
        openrouter_model: Model identifier used for chat completions.
        site_url: Sent as HTTP-Referer to OpenRouter.
        request_timeout_seconds: Per-request timeout for outbound calls.
        autocomplete_debounce_ms: Debounce window for location lookups.
        max_offers: Maximum number of offers requested per search.
        cors_origins: Origins allowed by the HTTP API.
    """

    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_env: str = "test"
    openrouter_api_key: str = ""
    openrouter_model: str = "openai/gpt-oss-120b:free"
    site_url: str = "http://localhost:3000"
    request_timeout_seconds: float = 20.0
    autocomplete_debounce_ms: int = 150
    max_offers: int = 50
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @property
    def amadeus_base_url(self) -> str:
        """Amadeus host for the configured environment."""
        if self.amadeus_env == "production":
            return AMADEUS_PRODUCTION_URL
        return AMADEUS_TEST_URL

    @property
    def has_amadeus_credentials(self) -> bool:
        return bool(self.amadeus_client_id and self.amadeus_client_secret)

    @property
    def has_openrouter_key(self) -> bool:
        return bool(self.openrouter_api_key)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """
        Build settings from environment variables.

        Loads a .env file first (existing environment variables win).

        Args:
            dotenv_path: Explicit .env location. Defaults to dotenv's search.

        Returns:
            Frozen Settings instance.
        """
        load_dotenv(dotenv_path)

        cors_raw = os.getenv("CORS_ORIGINS", "")
        cors_origins = tuple(
            origin.strip() for origin in cors_raw.split(",") if origin.strip()
        ) or DEFAULT_CORS_ORIGINS

        settings = cls(
            amadeus_client_id=os.getenv("AMADEUS_CLIENT_ID", "").strip(),
            amadeus_client_secret=os.getenv("AMADEUS_CLIENT_SECRET", "").strip(),
            amadeus_env=os.getenv("AMADEUS_ENV", "test").strip().lower(),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", "").strip(),
            openrouter_model=os.getenv(
                "OPENROUTER_MODEL", "openai/gpt-oss-120b:free"
            ).strip(),
            site_url=os.getenv("SITE_URL", "http://localhost:3000").strip(),
            request_timeout_seconds=float(
                os.getenv("REQUEST_TIMEOUT_SECONDS", "20")
            ),
            autocomplete_debounce_ms=int(
                os.getenv("AUTOCOMPLETE_DEBOUNCE_MS", "150")
            ),
            max_offers=int(os.getenv("AMADEUS_MAX_OFFERS", "50")),
            cors_origins=cors_origins,
        )

        if not settings.has_amadeus_credentials:
            logger.warning(
                "AMADEUS_CLIENT_ID / AMADEUS_CLIENT_SECRET not set - flight and "
                "location lookups will fail"
            )
        if not settings.has_openrouter_key:
            logger.warning("OPENROUTER_API_KEY not set - AI search is disabled")

        return settings
