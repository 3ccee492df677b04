"""Full-text search and relevance ranking for Shiro Notes books, notes and events."""

from shiro_search.config import RelevanceWeights, Settings
from shiro_search.domain import (
    Book,
    Chapter,
    DocumentKind,
    Event,
    Note,
    QuickSearchHit,
    SearchFilters,
    SearchResponse,
    SearchResult,
    SearchStats,
    Suggestion,
    TagCount,
)
from shiro_search.engine import SearchEngine


__version__ = "0.1.0"

__all__ = [
    "Book",
    "Chapter",
    "DocumentKind",
    "Event",
    "Note",
    "QuickSearchHit",
    "RelevanceWeights",
    "SearchEngine",
    "SearchFilters",
    "SearchResponse",
    "SearchResult",
    "SearchStats",
    "Settings",
    "Suggestion",
    "TagCount",
]
