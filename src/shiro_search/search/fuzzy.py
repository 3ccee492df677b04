"""Typo tolerance: bounded edit distance and near-miss vocabulary lookup.

The vocabulary scan is linear in the number of indexed tokens. Tokens whose
length differs from the term by more than the allowed distance are rejected
before any distance is computed.
"""

from __future__ import annotations

from collections.abc import Iterable


def levenshtein_distance(source: str, target: str, max_distance: int | None = None) -> int:
    """Minimum number of single-character insertions, deletions and substitutions.

    With ``max_distance`` set, the computation stops as soon as every cell of
    a row exceeds it and ``max_distance + 1`` is returned instead of the exact
    distance.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("grocry", "grocery")
        1
    """
    if source == target:
        return 0
    if not source or not target:
        return len(source) or len(target)

    # Iterate over the longer string; rows are sized by the shorter one
    short, long = (source, target) if len(source) <= len(target) else (target, source)
    if max_distance is not None and len(long) - len(short) > max_distance:
        return max_distance + 1

    previous = list(range(len(short) + 1))
    for row, long_char in enumerate(long, start=1):
        current = [row]
        for col, short_char in enumerate(short, start=1):
            current.append(
                min(
                    previous[col] + 1,
                    current[col - 1] + 1,
                    previous[col - 1] + (short_char != long_char),
                )
            )
        if max_distance is not None and min(current) > max_distance:
            return max_distance + 1
        previous = current
    return previous[-1]


def find_fuzzy_matches(term: str, vocabulary: Iterable[str], max_distance: int) -> list[tuple[str, int]]:
    """Vocabulary tokens between 1 and ``max_distance`` edits away from ``term``.

    Identical tokens are left to exact matching. The result is ordered by
    distance, then alphabetically.
    """
    if not term or max_distance < 1:
        return []

    found = []
    for token in vocabulary:
        if abs(len(token) - len(term)) > max_distance:
            continue
        distance = levenshtein_distance(term, token, max_distance)
        if 0 < distance <= max_distance:
            found.append((token, distance))
    return sorted(found, key=lambda pair: (pair[1], pair[0]))
