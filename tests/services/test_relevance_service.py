"""
Tests for the country relevance ranker.

Tests cover:
- Per-country scoring (exact, prefix, substring, baseline)
- Matched country selection
- Ordering by score then city
- Narrowing to the top countries on strong matches
- Idempotency
"""

import pytest

from src.flight_search.services.relevance_service import (
    BASELINE_SCORE,
    CONTAINS_MATCH_SCORE,
    EXACT_MATCH_SCORE,
    PREFIX_MATCH_SCORE,
    country_score,
    rank_by_country_relevance,
)


class TestCountryScore:
    """Tests for scoring a single country name."""

    @pytest.mark.parametrize(
        "country, query, expected",
        [
            ("France", "france", EXACT_MATCH_SCORE),
            ("France", "  FRANCE ", EXACT_MATCH_SCORE),
            ("France", "fra", PREFIX_MATCH_SCORE),
            ("United Kingdom", "kingdom", CONTAINS_MATCH_SCORE),
            ("Germany", "franc", BASELINE_SCORE),
        ],
    )
    def test_scores(self, country, query, expected):
        assert country_score(country, query) == expected

    def test_blank_query_scores_baseline(self):
        assert country_score("France", "   ") == BASELINE_SCORE


class TestRankByCountryRelevance:
    """Tests for rank_by_country_relevance."""

    def test_empty_input(self):
        result = rank_by_country_relevance([], "paris")

        assert result.ranked == ()
        assert result.matched_country is None
        assert result.scores == {}

    def test_prefix_match_scenario(self, make_location):
        """'franc' ranks both French locations before the German one."""
        locations = [
            make_location("NCE", "Nice", "France"),
            make_location("FRA", "Frankfurt", "Germany"),
            make_location("CDG", "Paris", "France"),
        ]

        result = rank_by_country_relevance(locations, "franc")

        assert result.scores == {"France": 500, "Germany": 1}
        assert result.matched_country == "France"
        assert [loc.country for loc in result.ranked] == ["France", "France", "Germany"]

    def test_within_country_sorted_by_city(self, make_location):
        locations = [
            make_location("ORY", "Paris", "France"),
            make_location("LYS", "Lyon", "France"),
            make_location("BOD", "Bordeaux", "France"),
        ]

        result = rank_by_country_relevance(locations, "xyz")

        assert [loc.city for loc in result.ranked] == ["Bordeaux", "Lyon", "Paris"]

    def test_city_sort_ignores_accents_and_case(self, make_location):
        locations = [
            make_location("ZRH", "Zurich", "Switzerland"),
            make_location("GVA", "genève", "Switzerland"),
            make_location("BSL", "Bâle", "Switzerland"),
        ]

        result = rank_by_country_relevance(locations, "sw")

        assert [loc.code for loc in result.ranked] == ["BSL", "GVA", "ZRH"]

    def test_exact_match_overrides_earlier_prefix(self, make_location):
        """An exact match wins even when a prefix match came first."""
        locations = [
            make_location("PNH", "Phnom Penh", "Indonesiana"),
            make_location("CGK", "Jakarta", "Indonesia"),
        ]

        result = rank_by_country_relevance(locations, "indonesia")

        assert result.matched_country == "Indonesia"
        assert result.ranked[0].country == "Indonesia"

    def test_exact_match_beats_larger_country(self, make_location):
        """Matched country is the exact match, not the most frequent one."""
        locations = [
            make_location("MEX", "Mexico City", "Mexico"),
            make_location("IAH", "Houston", "United States"),
            make_location("AUS", "Austin", "United States"),
            make_location("ELP", "El Paso", "United States"),
        ]

        result = rank_by_country_relevance(locations, "mexico")

        assert result.matched_country == "Mexico"
        assert result.scores["Mexico"] == EXACT_MATCH_SCORE

    def test_country_score_is_best_of_its_locations(self, make_location):
        locations = [
            make_location("AAA", "Alpha", "Spain"),
            make_location("BBB", "Beta", "Spain"),
        ]

        result = rank_by_country_relevance(locations, "spa")

        assert result.scores == {"Spain": PREFIX_MATCH_SCORE}

    def test_strong_match_keeps_three_best_countries(self, make_location):
        locations = [
            make_location("A1", "A", "Guinea"),
            make_location("B1", "B", "Guinea-Bissau"),
            make_location("C1", "C", "Equatorial Guinea"),
            make_location("D1", "D", "Papua New Guinea"),
            make_location("E1", "E", "Ghana"),
        ]

        result = rank_by_country_relevance(locations, "guinea")

        countries = [loc.country for loc in result.ranked]
        assert countries == ["Guinea", "Guinea-Bissau", "Equatorial Guinea"]
        assert "Ghana" not in countries

    def test_weak_matches_return_full_list(self, make_location):
        """Without a prefix-or-better match nothing is dropped."""
        locations = [
            make_location("LHR", "London", "United Kingdom"),
            make_location("YXU", "London", "Canada"),
            make_location("LGW", "London", "United Kingdom"),
            make_location("JFK", "New York", "United States"),
        ]

        result = rank_by_country_relevance(locations, "london")

        assert result.matched_country is None
        assert len(result.ranked) == 4

    def test_ranking_is_idempotent(self, make_location):
        locations = [
            make_location("FRA", "Frankfurt", "Germany"),
            make_location("NCE", "Nice", "France"),
            make_location("CDG", "Paris", "France"),
            make_location("MUC", "Munich", "Germany"),
        ]

        once = rank_by_country_relevance(locations, "ger")
        twice = rank_by_country_relevance(list(once.ranked), "ger")

        assert twice.ranked == once.ranked
        assert twice.matched_country == once.matched_country
