"""Context snippets for autocomplete previews.

A snippet is a fixed window of characters around the first occurrence of the
raw query in a document's visible text, with ellipses marking truncation.
"""

from __future__ import annotations


ELLIPSIS = "..."


def find_match(text: str, query: str) -> int:
    """Position of the first case-insensitive occurrence of ``query`` in ``text``, or -1."""
    if not text or not query:
        return -1
    return text.lower().find(query.lower())


def window_snippet(text: str, match_position: int, match_length: int, context_chars: int = 50) -> str:
    """Cut ``context_chars`` on each side of a match and mark the cut edges."""
    start = max(0, match_position - context_chars)
    end = min(len(text), match_position + match_length + context_chars)
    snippet = text[start:end]
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(text):
        snippet = snippet + ELLIPSIS
    return snippet


def leading_snippet(text: str, max_chars: int = 100) -> str:
    if len(text) > max_chars:
        return text[:max_chars] + ELLIPSIS
    return text


def build_snippet(text: str | None, query: str, context_chars: int = 50, fallback_chars: int = 100) -> str:
    """Snippet around the raw query, or the start of the text when it does not occur.

    The query is matched as a whole string, not per term, so multi-word
    queries only anchor when the phrase appears verbatim.
    """
    if not text:
        return ""
    position = find_match(text, query)
    if position == -1:
        return leading_snippet(text, fallback_chars)
    return window_snippet(text, position, len(query), context_chars)
