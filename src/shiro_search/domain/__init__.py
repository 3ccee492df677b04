"""Domain layer - documents and search value objects with no infrastructure dependencies."""

from shiro_search.domain.model import (
    Book,
    ChangeAction,
    Chapter,
    CorpusChanged,
    Document,
    DocumentKind,
    DocumentNotFoundError,
    Event,
    Note,
    Searchable,
    ShiroSearchError,
    is_indexable,
)
from shiro_search.domain.search import (
    DateRange,
    EncryptedState,
    KindFilter,
    QuickSearchHit,
    SearchFilters,
    SearchResponse,
    SearchResult,
    SearchStats,
    Suggestion,
    TagCount,
)


__all__ = [
    "Book",
    "ChangeAction",
    "Chapter",
    "CorpusChanged",
    "DateRange",
    "Document",
    "DocumentKind",
    "DocumentNotFoundError",
    "EncryptedState",
    "Event",
    "KindFilter",
    "Note",
    "QuickSearchHit",
    "SearchFilters",
    "SearchResponse",
    "SearchResult",
    "SearchStats",
    "Searchable",
    "ShiroSearchError",
    "Suggestion",
    "TagCount",
    "is_indexable",
]
