"""Static, query-independent relevance of a token within a document."""

from __future__ import annotations

from datetime import datetime

from shiro_search.config import RelevanceWeights
from shiro_search.domain.model import Searchable


SECONDS_PER_DAY = 60 * 60 * 24


def recency_bonus(last_modified: datetime | None, now: datetime, weights: RelevanceWeights) -> float:
    """Linear decay from ``recency_max_bonus`` down to zero.

    Documents without a modification time get no bonus. Future timestamps are
    treated as modified now.
    """
    if last_modified is None:
        return 0.0
    days = max(0.0, (now - last_modified).total_seconds() / SECONDS_PER_DAY)
    return max(0.0, weights.recency_max_bonus - days / weights.recency_decay_days)


def static_relevance(token: str, document: Searchable, now: datetime, weights: RelevanceWeights) -> float:
    """Weight of ``token`` for ``document``: title bonuses, kind weight and recency."""
    relevance = 0.0
    title = document.title.lower() if document.title else ""

    if token in title:
        relevance += weights.title_match
    if title == token:
        relevance += weights.exact_title

    relevance += weights.kind_weight(document.kind)
    relevance += recency_bonus(document.last_modified, now, weights)
    return relevance
