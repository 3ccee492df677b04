"""In-memory inverted index over a corpus snapshot.

The index is derived state: it is always built from scratch from the full
corpus and is never updated in place. A built ``InvertedIndex`` is read-only,
which lets the engine swap a finished index in atomically.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime, timezone
import logging

from shiro_search.config import RelevanceWeights
from shiro_search.domain.model import DocumentKind, Searchable, is_indexable
from shiro_search.search.analyzers import Analyzer, extract_tokens
from shiro_search.search.models import Posting
from shiro_search.search.relevance import static_relevance


logger = logging.getLogger(__name__)

DocumentKey = tuple[DocumentKind, str]


class InvertedIndex:
    """Token -> postings mapping plus the corpus snapshot it was built from."""

    __slots__ = ("_corpus", "_documents", "_postings", "_vocabulary", "built_at")

    def __init__(
        self,
        postings: dict[str, list[Posting]],
        documents: dict[DocumentKey, Searchable],
        corpus: Sequence[Searchable],
        built_at: datetime,
    ) -> None:
        self._postings = postings
        self._documents = documents
        self._corpus = tuple(corpus)
        self._vocabulary = sorted(postings)
        self.built_at = built_at

    @classmethod
    def empty(cls) -> InvertedIndex:
        return cls({}, {}, (), datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self._postings)

    def __contains__(self, token: object) -> bool:
        return token in self._postings

    @property
    def vocabulary(self) -> Sequence[str]:
        """Indexed tokens in sorted order."""
        return self._vocabulary

    @property
    def document_count(self) -> int:
        return len(self._documents)

    @property
    def corpus(self) -> tuple[Searchable, ...]:
        """Every document of the snapshot, including the ones excluded from indexing."""
        return self._corpus

    def postings(self, token: str) -> list[Posting]:
        """Postings stored under ``token``; an unknown token has none."""
        return self._postings.get(token, [])

    def document(self, key: DocumentKey) -> Searchable | None:
        return self._documents.get(key)

    def tokens_with_prefix(self, prefix: str) -> Iterator[str]:
        """Indexed tokens starting with ``prefix``, including ``prefix`` itself if indexed."""
        start = bisect_left(self._vocabulary, prefix)
        for token in self._vocabulary[start:]:
            if not token.startswith(prefix):
                break
            yield token

    def items(self) -> Iterator[tuple[str, list[Posting]]]:
        yield from self._postings.items()


def build_index(
    corpus: Iterable[Searchable],
    weights: RelevanceWeights | None = None,
    *,
    now: datetime | None = None,
    analyzer: Analyzer | None = None,
) -> InvertedIndex:
    """Build a complete index for ``corpus``.

    Encrypted books and notes are skipped; events are always indexed. Each
    (token, document) pair contributes exactly one posting.
    """
    weights = weights or RelevanceWeights()
    now = now or datetime.now(timezone.utc)
    snapshot = list(corpus)

    postings: dict[str, list[Posting]] = {}
    documents: dict[DocumentKey, Searchable] = {}
    skipped = 0

    for document in snapshot:
        if not is_indexable(document):
            skipped += 1
            continue
        key = (document.kind, document.id)
        if key in documents:
            logger.warning("Duplicate %s id %r in corpus, keeping the first copy", document.kind.value, document.id)
            continue
        documents[key] = document
        for token in extract_tokens(document, analyzer):
            postings.setdefault(token, []).append(
                Posting(
                    document_id=document.id,
                    kind=document.kind,
                    static_relevance=static_relevance(token, document, now, weights),
                )
            )

    logger.debug(
        "Built index: %d documents, %d tokens, %d encrypted documents skipped",
        len(documents),
        len(postings),
        skipped,
    )
    return InvertedIndex(postings, documents, snapshot, now)
