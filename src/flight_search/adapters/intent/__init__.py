"""
Intent extraction adapters.
"""

from src.flight_search.adapters.intent.openrouter_extractor import (
    OpenRouterIntentExtractor,
    parse_intent,
    strip_code_fences,
)

__all__ = [
    "OpenRouterIntentExtractor",
    "parse_intent",
    "strip_code_fences",
]
