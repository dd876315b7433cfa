"""
Relevance service module for location autocomplete.

Scores location lookup results by how well the free-text query matches
their country names, then orders (and for strong country matches,
narrows) the list.
"""

import unicodedata
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.flight_search.schemas.location import Location, RankedLocations

__all__ = [
    "EXACT_MATCH_SCORE",
    "PREFIX_MATCH_SCORE",
    "CONTAINS_MATCH_SCORE",
    "BASELINE_SCORE",
    "country_score",
    "rank_by_country_relevance",
]

EXACT_MATCH_SCORE = 1000
PREFIX_MATCH_SCORE = 500
CONTAINS_MATCH_SCORE = 100
BASELINE_SCORE = 1

MAX_STRONG_MATCH_COUNTRIES = 3


def country_score(country: str, query: str) -> int:
    """
    Score a single country name against the query (case-insensitive).

    Args:
        country: Country name as returned by the provider.
        query: Raw user query.

    Returns:
        1000 exact, 500 prefix, 100 substring, otherwise 1.
    """
    needle = query.strip().casefold()
    if not needle:
        return BASELINE_SCORE

    name = country.strip().casefold()
    if name == needle:
        return EXACT_MATCH_SCORE
    if name.startswith(needle):
        return PREFIX_MATCH_SCORE
    if needle in name:
        return CONTAINS_MATCH_SCORE
    return BASELINE_SCORE


def _collation_key(text: str) -> Tuple[str, str]:
    """Accent- and case-insensitive sort key, original text as tie-breaker."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _top_countries(scores: Dict[str, int], limit: int) -> List[str]:
    # sorted() is stable: equal scores keep first-seen order
    ranked = sorted(scores.items(), key=lambda item: -item[1])
    return [country for country, _ in ranked[:limit]]


def rank_by_country_relevance(
    locations: Sequence[Location],
    query: str,
) -> RankedLocations:
    """
    Rank location results by country relevance.

    Each country's score is the best score any of its locations achieved.
    Locations are ordered by country score (descending) and then by city
    name. When the best country scored at least a prefix match, only the
    three best-scoring countries are kept, so any country matching the
    query textually outranks the unrelated ones that fill remaining slots.

    The matched country is the first country reaching a prefix match in
    input order; the first exact match always overrides it.

    Args:
        locations: Airports and cities from the lookup provider.
        query: Raw user query.

    Returns:
        RankedLocations with the display list, matched country and scores.
    """
    if not locations:
        return RankedLocations()

    scores: Dict[str, int] = {}
    matched_country: Optional[str] = None
    matched_exact = False

    for location in locations:
        country = location.country
        score = country_score(country, query)
        if score > scores.get(country, 0):
            scores[country] = score

        if score == EXACT_MATCH_SCORE and not matched_exact:
            matched_country = country
            matched_exact = True
        elif score == PREFIX_MATCH_SCORE and matched_country is None:
            matched_country = country

    ordered: Iterable[Location] = sorted(
        locations,
        key=lambda loc: (-scores[loc.country], _collation_key(loc.city)),
    )

    if max(scores.values()) >= PREFIX_MATCH_SCORE:
        keep = set(_top_countries(scores, MAX_STRONG_MATCH_COUNTRIES))
        ordered = [loc for loc in ordered if loc.country in keep]

    return RankedLocations(
        ranked=tuple(ordered),
        matched_country=matched_country,
        scores=scores,
    )
