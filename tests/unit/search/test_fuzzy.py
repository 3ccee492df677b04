"""Unit tests for edit distance and fuzzy vocabulary scans."""

import pytest

from shiro_search.search.fuzzy import find_fuzzy_matches, levenshtein_distance


@pytest.mark.unit
class TestLevenshteinDistance:
    @pytest.mark.parametrize(
        ("s1", "s2", "expected"),
        [
            ("kitten", "sitting", 3),
            ("grocry", "grocery", 1),
            ("budget", "budget", 0),
            ("", "abc", 3),
            ("abc", "", 3),
            ("flaw", "lawn", 2),
        ],
    )
    def test_distance(self, s1, s2, expected):
        assert levenshtein_distance(s1, s2) == expected

    def test_symmetric(self):
        assert levenshtein_distance("program", "progrm") == levenshtein_distance("progrm", "program")

    def test_early_exit_on_length_difference(self):
        assert levenshtein_distance("ab", "abcdefgh", max_distance=2) == 3

    def test_early_exit_when_row_exceeds_limit(self):
        assert levenshtein_distance("abcdef", "uvwxyz", max_distance=2) == 3

    def test_within_limit_returns_exact_distance(self):
        assert levenshtein_distance("budget", "budgte", max_distance=2) == 2


@pytest.mark.unit
class TestFindFuzzyMatches:
    def test_excludes_exact_and_distant_tokens(self):
        vocabulary = ["budget", "budgets", "gadget", "widget", "bud"]
        assert find_fuzzy_matches("budget", vocabulary, 2) == [("budgets", 1), ("gadget", 2), ("widget", 2)]

    def test_sorted_by_distance_then_token(self):
        vocabulary = ["grocer", "grocery", "grocers"]
        assert find_fuzzy_matches("grocry", vocabulary, 2) == [("grocery", 1), ("grocer", 2), ("grocers", 2)]

    def test_zero_max_distance(self):
        assert find_fuzzy_matches("budget", ["budgets"], 0) == []

    def test_empty_term(self):
        assert find_fuzzy_matches("", ["a"], 2) == []
