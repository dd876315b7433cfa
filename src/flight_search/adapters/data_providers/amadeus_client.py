"""
Amadeus REST client.

Async HTTP client for the Amadeus Self-Service APIs with OAuth2
client-credentials token caching. Shared by the flight and location
providers; constructed explicitly with its credentials.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from src.flight_search.config import Settings
from src.flight_search.exceptions import ProviderError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"

# Refresh the token this many seconds before it actually expires
TOKEN_EXPIRY_MARGIN_SECONDS = 60
DEFAULT_TOKEN_LIFETIME_SECONDS = 1799


def _error_detail(response: httpx.Response) -> str:
    """Best human-readable message from an Amadeus error body."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200]

    errors = payload.get("errors") if isinstance(payload, dict) else None
    if errors:
        first = errors[0]
        return first.get("detail") or first.get("title") or str(first)
    if isinstance(payload, dict) and payload.get("error_description"):
        return payload["error_description"]
    return response.text[:200]


class AmadeusClient:
    """
    Minimal Amadeus REST client with token caching.

    Attributes:
        _client_id: OAuth2 client id.
        _client_secret: OAuth2 client secret.
        _http: Async HTTP client bound to the Amadeus host.
        _access_token: Cached bearer token.
        _token_expires_at: Monotonic deadline of the cached token.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: str = "https://test.api.amadeus.com",
        timeout_seconds: float = 20.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize the Amadeus client.

        Args:
            client_id: Amadeus API key.
            client_secret: Amadeus API secret.
            base_url: Test or production host.
            timeout_seconds: Per-request timeout.
            http_client: Pre-built client (tests); created if None.
        """
        self._client_id = client_id
        self._client_secret = client_secret
        if not (client_id and client_secret):
            logger.warning("Amadeus credentials not set - requests will fail")

        self._http = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds, connect=5.0),
            headers={"Accept": "application/json"},
        )
        self._access_token: Optional[str] = None
        self._token_expires_at: float = 0.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "AmadeusClient":
        """Build a client from application settings."""
        return cls(
            client_id=settings.amadeus_client_id,
            client_secret=settings.amadeus_client_secret,
            base_url=settings.amadeus_base_url,
            timeout_seconds=settings.request_timeout_seconds,
        )

    @property
    def has_valid_token(self) -> bool:
        return bool(self._access_token) and time.monotonic() < (
            self._token_expires_at - TOKEN_EXPIRY_MARGIN_SECONDS
        )

    async def _fetch_token(self) -> str:
        """Request a new access token (client-credentials grant)."""
        if not (self._client_id and self._client_secret):
            raise ProviderError("Amadeus API credentials are not configured")

        try:
            response = await self._http.post(
                TOKEN_PATH,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"Network error while authenticating: {e}") from e

        if response.status_code != 200:
            detail = _error_detail(response)
            logger.error(
                "Amadeus token request failed: %d %s", response.status_code, detail
            )
            raise ProviderError(
                f"Amadeus authentication failed: {detail}", response.status_code
            )

        try:
            payload = response.json()
            access_token = payload["access_token"]
            expires_in = int(payload.get("expires_in", DEFAULT_TOKEN_LIFETIME_SECONDS))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Malformed Amadeus token response: %s", response.text[:200])
            raise ProviderError(
                f"Invalid authentication response: {e}", response.status_code
            ) from e

        self._access_token = access_token
        self._token_expires_at = time.monotonic() + expires_in
        logger.debug("Obtained Amadeus access token (expires in %ds)", expires_in)
        return self._access_token

    async def _auth_headers(self, force_refresh: bool = False) -> Dict[str, str]:
        if force_refresh or not self.has_valid_token:
            await self._fetch_token()
        return {"Authorization": f"Bearer {self._access_token}"}

    async def get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Perform an authenticated GET request.

        A 401 triggers one token refresh and retry.

        Args:
            path: API endpoint path (e.g., '/v2/shopping/flight-offers').
            params: Query parameters.

        Returns:
            Parsed JSON response.

        Raises:
            ProviderError: On network failure, error status or invalid JSON.
        """
        logger.debug("GET %s params=%s", path, params)
        try:
            response = await self._http.get(
                path, params=params, headers=await self._auth_headers()
            )
            if response.status_code == 401:
                logger.info("Amadeus token rejected, refreshing once")
                response = await self._http.get(
                    path,
                    params=params,
                    headers=await self._auth_headers(force_refresh=True),
                )
        except httpx.HTTPError as e:
            logger.error("Network error calling Amadeus %s: %s", path, e)
            raise ProviderError(f"Network error: {e}") from e

        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.error("Amadeus API error %d on %s: %s", response.status_code, path, detail)
            raise ProviderError(detail, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"Invalid JSON response: {e}", response.status_code
            ) from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if not self._http.is_closed:
            await self._http.aclose()
