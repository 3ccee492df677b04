"""Combine per-term matches into ranked per-document results."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from shiro_search.config import RelevanceWeights
from shiro_search.domain.model import DocumentKind
from shiro_search.domain.search import SearchResult
from shiro_search.search.matcher import match_term
from shiro_search.search.search_index import DocumentKey, InvertedIndex


@dataclass(slots=True)
class ScoredDocument:
    """Mutable accumulator for one document while a query is scored."""

    kind: DocumentKind
    document_id: str
    relevance: float = 0.0
    matched_terms: set[int] = field(default_factory=set)

    @property
    def matched_term_count(self) -> int:
        return len(self.matched_terms)


def aggregate_matches(
    terms: Sequence[str],
    index: InvertedIndex,
    weights: RelevanceWeights | None = None,
) -> dict[DocumentKey, ScoredDocument]:
    """Score every document reached by any of ``terms``.

    The first hit on a document contributes its full weighted relevance;
    every later hit, from any term or strategy, contributes ``multi_term``
    times its relevance. A document's matched term count is the number of
    distinct query terms that reached it. Insertion order follows first hit.
    """
    weights = weights or RelevanceWeights()
    scored: dict[DocumentKey, ScoredDocument] = {}

    for position, term in enumerate(terms):
        for match in match_term(term, index, weights):
            entry = scored.get(match.key)
            if entry is None:
                entry = ScoredDocument(kind=match.posting.kind, document_id=match.posting.document_id)
                entry.relevance = match.relevance
                scored[match.key] = entry
            else:
                entry.relevance += match.relevance * weights.multi_term
            entry.matched_terms.add(position)

    return scored


def rank_key(result: SearchResult) -> tuple[int, float]:
    return (-result.matched_term_count, -result.relevance)


def rank_results(results: Sequence[SearchResult]) -> list[SearchResult]:
    """Documents matching more terms first, then by relevance.

    The sort is stable, so equal results keep the order they were first hit in.
    """
    return sorted(results, key=rank_key)


def to_results(
    scored: dict[DocumentKey, ScoredDocument],
    index: InvertedIndex,
    total_terms: int,
) -> list[SearchResult]:
    results = []
    for key, entry in scored.items():
        document = index.document(key)
        results.append(
            SearchResult(
                document_id=entry.document_id,
                kind=entry.kind,
                title=document.title if document is not None else "",
                relevance=entry.relevance,
                matched_term_count=entry.matched_term_count,
                total_term_count=total_terms,
            )
        )
    return results
