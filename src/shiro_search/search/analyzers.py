"""Text analysis for the inverted index.

A tokenizer splits raw text into positioned ``Token`` objects and a chain of
filters reshapes that stream. The default pipeline keeps word runs of two or
more characters, lowercases them and drops repeats, so a document yields each
token once no matter how often the word occurs.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
import re
from typing import Protocol

from shiro_search.domain.model import Searchable


DEFAULT_MIN_TOKEN_LENGTH = 2

WORD_PATTERN = r"\w+"


@dataclass(frozen=True, slots=True)
class Token:
    """A word run and where it sits in the source text."""

    text: str
    position: int
    start_char: int
    end_char: int


class Tokenizer(Protocol):
    def __call__(self, text: str) -> Iterator[Token]: ...


class TokenFilter(Protocol):
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]: ...


class RegexTokenizer:
    """Emit every match of ``pattern`` as a token, numbered in order."""

    def __init__(self, pattern: str = WORD_PATTERN) -> None:
        self.pattern = re.compile(pattern)

    def __call__(self, text: str) -> Iterator[Token]:
        for index, found in enumerate(self.pattern.finditer(text)):
            yield Token(found.group(), index, found.start(), found.end())


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> None:
        self.min_length = min_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        return (token for token in tokens if len(token.text) >= self.min_length)


class LowercaseFilter:
    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            lowered = token.text.lower()
            yield token if lowered == token.text else replace(token, text=lowered)


class UniqueFilter:
    """Keeps the first occurrence of every distinct token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        seen: set[str] = set()
        for token in tokens:
            if token.text not in seen:
                seen.add(token.text)
                yield token


class Analyzer:
    """A tokenizer followed by a chain of filters."""

    def __init__(self, tokenizer: Tokenizer, filters: Iterable[TokenFilter] = ()) -> None:
        self.tokenizer = tokenizer
        self.filters = tuple(filters)

    def __call__(self, text: str) -> list[Token]:
        tokens: Iterable[Token] = self.tokenizer(text)
        for stage in self.filters:
            tokens = stage(tokens)
        return list(tokens)


def build_document_analyzer(min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> Analyzer:
    return Analyzer(RegexTokenizer(), [MinLengthFilter(min_length), LowercaseFilter(), UniqueFilter()])


_DEFAULT_ANALYZER = build_document_analyzer()


def document_text(document: Searchable) -> str:
    """Title, visible body and tags as one blob of searchable text."""
    parts = [document.title or "", document.body_text() or "", " ".join(document.tags or ())]
    return " ".join(part for part in parts if part)


def extract_tokens(document: Searchable, analyzer: Analyzer | None = None) -> frozenset[str]:
    """Return the distinct lowercased tokens of a document.

    Presence only: a word appearing ten times yields one token.
    """
    active = analyzer or _DEFAULT_ANALYZER
    return frozenset(token.text for token in active(document_text(document)))


def split_query_terms(query: str | None) -> list[str]:
    """Lowercased whitespace-delimited terms of a raw query, in order."""
    if not query:
        return []
    return query.lower().split()
