"""Search engine facade.

``SearchEngine`` owns the inverted index and the query history for one corpus.
It is synchronous; every public method runs to completion. Index rebuilds and
queries are serialized through a re-entrant lock, and a rebuild only becomes
visible once the new index is complete.

Typical wiring with a document store::

    store = InMemoryDocumentStore(documents)
    engine = SearchEngine(store)
    store.subscribe(engine.on_corpus_changed)
    response = engine.search("quarterly budget", SearchFilters(kind="note"))
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timezone
import logging
import threading
import time

from shiro_search.adapters.document_store import AbstractDocumentStore
from shiro_search.adapters.history_store import HistoryStore
from shiro_search.config import RelevanceWeights, Settings
from shiro_search.domain.model import CorpusChanged, Searchable
from shiro_search.domain.search import (
    QuickSearchHit,
    SearchFilters,
    SearchResponse,
    SearchResult,
    SearchStats,
    TagCount,
)
from shiro_search.observability.metrics import (
    INDEX_DOCUMENT_COUNT,
    INDEX_REBUILD_LATENCY,
    INDEX_TOKEN_COUNT,
    SEARCH_LATENCY,
    record_request,
    track_latency,
)
from shiro_search.observability.tracing import create_span
from shiro_search.search.analyzers import build_document_analyzer, split_query_terms
from shiro_search.search.filters import apply_filters
from shiro_search.search.history import SearchHistory
from shiro_search.search.scoring import aggregate_matches, rank_results, to_results
from shiro_search.search.search_index import InvertedIndex, build_index
from shiro_search.search.snippet import build_snippet
from shiro_search.search.suggestions import count_tags, filter_tags, history_suggestions, tag_suggestions


logger = logging.getLogger(__name__)

CorpusProvider = Callable[[], Iterable[Searchable]]
Clock = Callable[[], datetime]

TAG_MATCH_RELEVANCE = 10.0

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SearchEngine:
    """Full-text search over books, notes and events."""

    def __init__(
        self,
        corpus: AbstractDocumentStore | CorpusProvider,
        settings: Settings | None = None,
        *,
        weights: RelevanceWeights | None = None,
        history_store: HistoryStore | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.weights = weights or self.settings.relevance_weights()
        self._corpus_provider: CorpusProvider = (
            corpus.get_corpus if isinstance(corpus, AbstractDocumentStore) else corpus
        )
        self._history_store = history_store
        self._clock: Clock = clock or _utcnow
        self._analyzer = build_document_analyzer(self.settings.min_token_length)
        self._lock = threading.RLock()

        initial_history = history_store.load(self.settings.history_key) if history_store else []
        self._history = SearchHistory(initial_history, limit=self.settings.history_limit)
        self._index = InvertedIndex.empty()
        self.rebuild_index()

    # -- index lifecycle -------------------------------------------------

    @property
    def index(self) -> InvertedIndex:
        with self._lock:
            return self._index

    def rebuild_index(self) -> InvertedIndex:
        """Discard the current index and build a new one from the full corpus.

        If reading the corpus fails the previous index stays in place and the
        error propagates.
        """
        with create_span("search.rebuild_index"), track_latency(INDEX_REBUILD_LATENCY):
            started = time.perf_counter()
            corpus = list(self._corpus_provider())
            index = build_index(corpus, self.weights, now=self._clock(), analyzer=self._analyzer)
            with self._lock:
                self._index = index
            INDEX_DOCUMENT_COUNT.set(index.document_count)
            INDEX_TOKEN_COUNT.set(len(index))
        logger.info(
            "Search index rebuilt: %d of %d documents, %d tokens in %.1f ms",
            index.document_count,
            len(corpus),
            len(index),
            (time.perf_counter() - started) * 1000,
        )
        return index

    def on_corpus_changed(self, event: CorpusChanged | None = None) -> None:
        """Listener for document store mutations."""
        if event is not None:
            logger.debug("Rebuilding index after %s of %s %s", event.action.value, event.kind.value, event.document_id)
        self.rebuild_index()

    # -- queries ---------------------------------------------------------

    def search(self, query: str | None, filters: SearchFilters | dict | None = None) -> SearchResponse:
        """Rank documents for a free-text query, then filter and build suggestions.

        An empty or whitespace-only query returns an empty response and is
        not recorded in the history.
        """
        if not query or not query.strip():
            return SearchResponse.empty()
        active_filters = self._coerce_filters(filters)

        span_attributes = {"search.terms": len(query.split()), "search.filtered": not active_filters.is_empty}
        with create_span("search.query", span_attributes), track_latency(SEARCH_LATENCY, operation="search"):
            with self._lock:
                index = self._index
                self._record_history(query)
                history = self._history.entries()

            terms = split_query_terms(query)
            scored = aggregate_matches(terms, index, self.weights)
            ranked = rank_results(to_results(scored, index, len(terms)))
            results = apply_filters(ranked, active_filters, index, self._clock())

            suggestions = [
                *tag_suggestions(results, index, self.settings.tag_suggestion_limit),
                *history_suggestions(query, history, self.settings.history_suggestion_limit),
            ]
            response = SearchResponse(
                results=results,
                suggestions=suggestions,
                stats=SearchStats.from_results(results),
            )

        record_request("search", len(results))
        logger.debug(
            "Search %r: %d terms, %d candidates, %d results after filters",
            query,
            len(terms),
            len(scored),
            len(results),
        )
        return response

    def search_by_tag(self, tag: str) -> SearchResponse:
        """Documents carrying exactly ``tag``, most recently touched first."""
        with track_latency(SEARCH_LATENCY, operation="tag"):
            documents = [document for document in self._tag_candidates() if tag in document.tags]
            documents.sort(key=lambda document: document.timestamp() or _EPOCH, reverse=True)
            results = [
                SearchResult(
                    document_id=document.id,
                    kind=document.kind,
                    title=document.title,
                    relevance=TAG_MATCH_RELEVANCE,
                    matched_term_count=1,
                    total_term_count=1,
                )
                for document in documents
            ]
        record_request("tag", len(results))
        return SearchResponse(results=results, suggestions=[], stats=SearchStats.from_results(results))

    def quick_search(self, query: str | None, limit: int | None = None) -> list[QuickSearchHit]:
        """Top results of a full search with a short preview of each."""
        if not query or not query.strip() or len(query) < self.settings.quick_search_min_length:
            return []
        limit = self.settings.quick_search_limit if limit is None else limit
        if limit <= 0:
            return []

        index = self.index
        hits = []
        for result in self.search(query).results[:limit]:
            document = index.document((result.kind, result.document_id))
            if document is None:
                continue
            hits.append(
                QuickSearchHit(
                    document_id=result.document_id,
                    kind=result.kind,
                    title=document.title,
                    snippet=build_snippet(
                        document.snippet_text(),
                        query,
                        context_chars=self.settings.snippet_context_chars,
                        fallback_chars=self.settings.snippet_fallback_chars,
                    ),
                )
            )
        return hits

    # -- tags ------------------------------------------------------------

    def get_all_tags(self) -> list[TagCount]:
        """Tag usage across every readable document, most used first."""
        return count_tags(self._tag_candidates())

    def suggest_tags(self, fragment: str, limit: int | None = None) -> list[TagCount]:
        limit = self.settings.tag_autocomplete_limit if limit is None else limit
        return filter_tags(self.get_all_tags(), fragment, limit)

    def _tag_candidates(self) -> list[Searchable]:
        return [document for document in self.index.corpus if not document.encrypted]

    # -- history ---------------------------------------------------------

    def add_to_history(self, query: str) -> None:
        with self._lock:
            self._record_history(query)

    def get_history(self) -> list[str]:
        with self._lock:
            return self._history.entries()

    def clear_history(self) -> None:
        with self._lock:
            self._history.clear()
            self._persist_history()

    def _record_history(self, query: str) -> None:
        if self._history.add(query):
            self._persist_history()

    def _persist_history(self) -> None:
        if self._history_store is not None:
            self._history_store.save(self.settings.history_key, self._history.entries())

    @staticmethod
    def _coerce_filters(filters: SearchFilters | dict | None) -> SearchFilters:
        if filters is None:
            return SearchFilters()
        if isinstance(filters, SearchFilters):
            return filters
        return SearchFilters.model_validate(filters)
