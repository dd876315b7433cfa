"""
OpenRouter Intent Extractor - natural-language flight search assistant.

Calls the OpenRouter chat completions API to turn free text into a
FlightSearchIntent, or to produce a short conversational reply.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date
from typing import Any, Callable, Dict, List, Optional

import httpx
from pydantic import ValidationError

from src.flight_search.config import OPENROUTER_API_URL, Settings
from src.flight_search.exceptions import ConfigurationError, IntentExtractionError
from src.flight_search.ports.intent_extractor import IntentExtractor
from src.flight_search.schemas.intent import FlightSearchIntent

logger = logging.getLogger(__name__)

REASONING_MODEL = "openai/gpt-oss-120b:free"
APP_TITLE = "Flight Search Assistant"

EXTRACT_TEMPERATURE = 0.3
CHAT_TEMPERATURE = 0.8
MAX_TOKENS = 1000

DEFAULT_CHAT_REPLY = (
    "I can help you search for flights. Where would you like to go?"
)

_CODE_FENCE_RE = re.compile(r"```(?:json)?\n?")

EXTRACT_SYSTEM_PROMPT = """You are a flight search assistant. Extract structured flight search parameters from natural language queries.

Current date: {today}

Respond ONLY with a valid JSON object (no markdown, no code blocks) with these fields:
- origin: departure city/airport code (if mentioned)
- destination: arrival city/airport code (if mentioned)
- departureDate: YYYY-MM-DD format (if mentioned, convert relative dates like "next week" to actual dates)
- returnDate: YYYY-MM-DD format (if mentioned)
- adults: number of passengers (default 1)
- travelClass: "ECONOMY", "PREMIUM_ECONOMY", "BUSINESS", or "FIRST" (if mentioned)
- intent: "search" (specific search), "explore" (general browsing), or "recommend" (asking for suggestions)
- preferences: array of strings like ["direct flights", "cheapest", "fastest", "morning departure"]

Examples:
Query: "I want to fly from New York to London next Friday"
Response: {{"origin":"NYC","destination":"LON","departureDate":"2026-01-23","adults":1,"travelClass":"ECONOMY","intent":"search","preferences":[]}}

Query: "Where can I travel in Europe for under $500?"
Response: {{"destination":"Europe","adults":1,"travelClass":"ECONOMY","intent":"recommend","preferences":["budget friendly","under $500"]}}"""

CHAT_SYSTEM_PROMPT = """You are a helpful flight search assistant. Help users find flights naturally and conversationally.
Be concise, friendly, and guide them through their search. If they ask vague questions, help them narrow down options.
Current date: {today}"""


def strip_code_fences(content: str) -> str:
    """Remove markdown code fences models wrap around JSON."""
    return _CODE_FENCE_RE.sub("", content).strip()


def parse_intent(content: str) -> FlightSearchIntent:
    """
    Parse model output into a FlightSearchIntent.

    Anything that is not a JSON object, or fails validation, yields
    the default intent.
    """
    cleaned = strip_code_fences(content)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.warning("Failed to parse AI response: %s", cleaned[:200])
        return FlightSearchIntent()

    if not isinstance(payload, dict):
        logger.warning("AI response is not a JSON object: %s", cleaned[:200])
        return FlightSearchIntent()

    try:
        return FlightSearchIntent.model_validate(payload)
    except ValidationError as e:
        logger.warning("AI response failed validation: %s", e)
        return FlightSearchIntent()


class OpenRouterIntentExtractor(IntentExtractor):
    """
    Intent extractor backed by OpenRouter chat completions.

    Attributes:
        _api_key: OpenRouter API key.
        _model: Model identifier.
        _site_url: Sent as HTTP-Referer.
        _timeout_seconds: Per-request timeout.
        _today: Clock used to anchor relative dates in prompts.
        _client: Lazily created async HTTP client.
    """

    def __init__(
        self,
        api_key: str,
        model: str = REASONING_MODEL,
        site_url: str = "http://localhost:3000",
        timeout_seconds: float = 20.0,
        today: Callable[[], date] = date.today,
    ) -> None:
        if not api_key:
            raise ConfigurationError("OPENROUTER_API_KEY")

        self._api_key = api_key
        self._model = model
        self._site_url = site_url
        self._timeout_seconds = timeout_seconds
        self._today = today

        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenRouterIntentExtractor":
        return cls(
            api_key=settings.openrouter_api_key,
            model=settings.openrouter_model,
            site_url=settings.site_url,
            timeout_seconds=settings.request_timeout_seconds,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=OPENROUTER_API_URL,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                    "HTTP-Referer": self._site_url,
                    "X-Title": APP_TITLE,
                },
                timeout=httpx.Timeout(self._timeout_seconds, connect=5.0),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _chat(
        self, messages: List[Dict[str, str]], temperature: float
    ) -> str:
        """
        Send a chat completion request and return the first message content.

        Raises:
            IntentExtractionError: On network failure or error status.
        """
        body: Dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": MAX_TOKENS,
        }
        if self._model == REASONING_MODEL:
            body["reasoning"] = {"enabled": True}

        client = await self._get_client()
        try:
            response = await client.post("/chat/completions", json=body)
        except httpx.HTTPError as e:
            logger.error("Network error calling OpenRouter: %s", e)
            raise IntentExtractionError(f"Network error: {e}") from e

        if response.status_code >= 400:
            logger.error(
                "OpenRouter API error %d: %s", response.status_code, response.text[:200]
            )
            raise IntentExtractionError(
                f"OpenRouter API error: {response.status_code} - {response.text}",
                response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise IntentExtractionError(f"Invalid JSON response: {e}") from e

        if not isinstance(payload, dict):
            raise IntentExtractionError("Unexpected OpenRouter response format")

        choices = payload.get("choices") or []
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get("message")
        if not isinstance(message, dict):
            return ""
        return message.get("content") or ""

    async def extract_intent(self, query: str) -> FlightSearchIntent:
        messages = [
            {
                "role": "system",
                "content": EXTRACT_SYSTEM_PROMPT.format(today=self._today().isoformat()),
            },
            {"role": "user", "content": query},
        ]
        content = await self._chat(messages, EXTRACT_TEMPERATURE)
        intent = parse_intent(content or "{}")
        logger.debug("Extracted intent %s from %r", intent.intent, query)
        return intent

    async def generate_response(
        self, query: str, context: Optional[str] = None
    ) -> str:
        messages = [
            {
                "role": "system",
                "content": CHAT_SYSTEM_PROMPT.format(today=self._today().isoformat()),
            }
        ]
        if context:
            messages.append({"role": "assistant", "content": context})
        messages.append({"role": "user", "content": query})

        content = await self._chat(messages, CHAT_TEMPERATURE)
        return content or DEFAULT_CHAT_REPLY

    @property
    def name(self) -> str:
        return "OpenRouter"
