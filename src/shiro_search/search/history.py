"""Bounded, most-recent-first record of past queries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging


logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20


class SearchHistory:
    """Ordered, deduplicated query history with a fixed capacity.

    Entries are stripped of surrounding whitespace. Re-running a remembered
    query moves it back to the front. The oldest entry is evicted on overflow.
    """

    __slots__ = ("_entries", "limit")

    def __init__(self, entries: Iterable[str] = (), limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("history limit must be positive")
        self.limit = limit
        self._entries: list[str] = []
        for entry in entries:
            if not isinstance(entry, str):
                logger.debug("Ignoring non-string history entry: %r", entry)
                continue
            normalized = entry.strip()
            if normalized and normalized not in self._entries:
                self._entries.append(normalized)
        del self._entries[limit:]

    def add(self, query: str) -> bool:
        """Record ``query`` as the most recent search. Returns True if the history changed."""
        normalized = query.strip() if query else ""
        if not normalized:
            return False
        if self._entries and self._entries[0] == normalized:
            return False
        if normalized in self._entries:
            self._entries.remove(normalized)
        self._entries.insert(0, normalized)
        del self._entries[self.limit :]
        return True

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> list[str]:
        """A copy of the history, most recent first, ready for serialization."""
        return list(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, query: object) -> bool:
        return query in self._entries
