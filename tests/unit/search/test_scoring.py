"""Unit tests for multi-term aggregation and ranking."""

import pytest

from shiro_search.domain.model import DocumentKind, Note
from shiro_search.domain.search import SearchResult
from shiro_search.search.scoring import aggregate_matches, rank_results, to_results
from shiro_search.search.search_index import build_index
from tests.fixtures.clock import NOW


def _result(document_id, matched, relevance):
    return SearchResult(
        document_id=document_id,
        kind=DocumentKind.NOTE,
        relevance=relevance,
        matched_term_count=matched,
        total_term_count=2,
    )


@pytest.mark.unit
class TestAggregateMatches:
    def test_later_hits_count_half(self):
        index = build_index([Note(id="n", content="alpha beta")], now=NOW)
        scored = aggregate_matches(["alpha", "beta"], index)
        entry = scored[(DocumentKind.NOTE, "n")]
        # 2.0 for the first term, 0.5 * 2.0 for the second
        assert entry.relevance == pytest.approx(3.0)
        assert entry.matched_term_count == 2

    def test_several_strategies_count_one_term(self):
        index = build_index([Note(id="n", content="budget budgets")], now=NOW)
        entry = aggregate_matches(["budget"], index)[(DocumentKind.NOTE, "n")]
        assert entry.matched_term_count == 1
        # exact 2.0, then prefix 1.6 and fuzzy 1.0 both halved
        assert entry.relevance == pytest.approx(2.0 + 0.8 + 0.5)

    def test_repeated_term_counts_twice(self):
        index = build_index([Note(id="n", content="alpha")], now=NOW)
        entry = aggregate_matches(["alpha", "alpha"], index)[(DocumentKind.NOTE, "n")]
        assert entry.matched_term_count == 2

    def test_unmatched_documents_are_absent(self):
        index = build_index([Note(id="n", content="alpha"), Note(id="m", content="gamma")], now=NOW)
        assert list(aggregate_matches(["alpha"], index)) == [(DocumentKind.NOTE, "n")]

    def test_no_terms(self):
        index = build_index([Note(id="n", content="alpha")], now=NOW)
        assert aggregate_matches([], index) == {}

    def test_to_results_carries_title_and_totals(self):
        index = build_index([Note(id="n", title="Alpha note", content="beta")], now=NOW)
        scored = aggregate_matches(["alpha", "missing"], index)
        (result,) = to_results(scored, index, 2)
        assert result.title == "Alpha note"
        assert result.matched_term_count == 1
        assert result.total_term_count == 2


@pytest.mark.unit
class TestRankResults:
    def test_term_count_dominates_relevance(self):
        ranked = rank_results([_result("a", 1, 100.0), _result("b", 2, 1.0)])
        assert [result.document_id for result in ranked] == ["b", "a"]

    def test_relevance_breaks_ties(self):
        ranked = rank_results([_result("a", 1, 1.0), _result("b", 1, 5.0)])
        assert [result.document_id for result in ranked] == ["b", "a"]

    def test_stable_for_equal_keys(self):
        ranked = rank_results([_result("a", 1, 2.0), _result("b", 1, 2.0), _result("c", 1, 2.0)])
        assert [result.document_id for result in ranked] == ["a", "b", "c"]
