"""Post-ranking structured filters."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from shiro_search.domain.model import Searchable
from shiro_search.domain.search import EncryptedState, KindFilter, SearchFilters, SearchResult
from shiro_search.search.relevance import SECONDS_PER_DAY
from shiro_search.search.search_index import InvertedIndex


def age_in_days(document: Searchable, now: datetime) -> float | None:
    stamp = document.timestamp()
    if stamp is None:
        return None
    return (now - stamp).total_seconds() / SECONDS_PER_DAY


def matches_filters(document: Searchable, filters: SearchFilters, now: datetime) -> bool:
    """True when ``document`` passes every active filter."""
    if filters.kind is not KindFilter.ALL and document.kind.value != filters.kind.value:
        return False

    max_age = filters.date_range.max_age_days
    if max_age is not None:
        age = age_in_days(document, now)
        # Undated documents are never excluded by age
        if age is not None and age > max_age:
            return False

    if filters.tags and not set(filters.tags).intersection(document.tags):
        return False

    if filters.encrypted is EncryptedState.ENCRYPTED and not document.encrypted:
        return False
    if filters.encrypted is EncryptedState.UNENCRYPTED and document.encrypted:
        return False

    return True


def apply_filters(
    results: Iterable[SearchResult],
    filters: SearchFilters,
    index: InvertedIndex,
    now: datetime,
) -> list[SearchResult]:
    """Keep the results whose documents pass ``filters``, preserving order."""
    if filters.is_empty:
        return list(results)

    kept = []
    for result in results:
        document = index.document((result.kind, result.document_id))
        if document is not None and matches_filters(document, filters, now):
            kept.append(result)
    return kept
