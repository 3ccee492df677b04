"""Query suggestions derived from result sets, tags and search history."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from shiro_search.domain.model import Searchable
from shiro_search.domain.search import SearchResult, Suggestion, TagCount
from shiro_search.search.search_index import InvertedIndex


def count_tags(documents: Iterable[Searchable]) -> list[TagCount]:
    """Tag frequencies, most used first; ties keep first-seen order."""
    counts: Counter[str] = Counter()
    for document in documents:
        counts.update(dict.fromkeys(document.tags, 1))
    # Counter.most_common is stable for equal counts
    return [TagCount(name=name, count=count) for name, count in counts.most_common()]


def tag_suggestions(results: Sequence[SearchResult], index: InvertedIndex, limit: int = 5) -> list[Suggestion]:
    """The most frequent tags among the matched documents."""
    if limit <= 0 or not results:
        return []
    documents = []
    for result in results:
        document = index.document((result.kind, result.document_id))
        if document is not None:
            documents.append(document)
    return [Suggestion(type="tag", text=tag.name, count=tag.count) for tag in count_tags(documents)[:limit]]


def history_suggestions(query: str, history: Sequence[str], limit: int = 3) -> list[Suggestion]:
    """Earlier queries that extend the current one, most recent first.

    ``history`` is ordered most-recent-first. The current query itself is
    never suggested back.
    """
    current = query.strip()
    needle = current.lower()
    if limit <= 0 or not needle:
        return []

    suggestions = []
    for past in history:
        if past == current or needle not in past.lower():
            continue
        suggestions.append(Suggestion(type="history", text=past))
        if len(suggestions) >= limit:
            break
    return suggestions


def filter_tags(tags: Sequence[TagCount], fragment: str, limit: int = 8) -> list[TagCount]:
    """Tags containing ``fragment`` (case-insensitive), keeping count order."""
    needle = fragment.strip().lower()
    if not needle:
        return []
    return [tag for tag in tags if needle in tag.name.lower()][:limit]
