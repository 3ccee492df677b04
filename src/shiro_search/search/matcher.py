"""Resolve a single query term against the inverted index.

Three strategies run side by side and all of their hits are returned:

- exact: postings of the token equal to the term, at full weight
- prefix: postings of longer tokens starting with the term
- fuzzy: postings of tokens a small edit distance away (long terms only)

A document can therefore appear several times for one term; the aggregator
decides what that means for its score.
"""

from __future__ import annotations

from shiro_search.config import RelevanceWeights
from shiro_search.search.fuzzy import find_fuzzy_matches
from shiro_search.search.models import WeightedPosting
from shiro_search.search.search_index import InvertedIndex


EXACT = "exact"
PREFIX = "prefix"
FUZZY = "fuzzy"


def match_term(term: str, index: InvertedIndex, weights: RelevanceWeights | None = None) -> list[WeightedPosting]:
    """Return every weighted posting the term reaches."""
    if not term:
        return []
    weights = weights or RelevanceWeights()
    matches: list[WeightedPosting] = []

    matches.extend(WeightedPosting(posting, 1.0, EXACT) for posting in index.postings(term))

    for token in index.tokens_with_prefix(term):
        if token == term:
            continue
        matches.extend(WeightedPosting(posting, weights.prefix, PREFIX) for posting in index.postings(token))

    if len(term) >= weights.fuzzy_min_term_length:
        for token, distance in find_fuzzy_matches(term, index.vocabulary, weights.fuzzy_max_distance):
            factor = weights.fuzzy_weight(distance)
            matches.extend(WeightedPosting(posting, factor, FUZZY) for posting in index.postings(token))

    return matches
