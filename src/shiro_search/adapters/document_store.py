"""Document store adapters feeding the search engine its corpus."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
import logging
from pathlib import Path
from typing import Any

import orjson

from shiro_search.domain.model import (
    Book,
    ChangeAction,
    CorpusChanged,
    Document,
    DocumentKind,
    DocumentNotFoundError,
    Event,
    Note,
)


logger = logging.getLogger(__name__)

CorpusListener = Callable[[CorpusChanged], None]

_MODELS: dict[DocumentKind, type[Book] | type[Note] | type[Event]] = {
    DocumentKind.BOOK: Book,
    DocumentKind.NOTE: Note,
    DocumentKind.EVENT: Event,
}

# Collection names used by the notes application's data export
_COLLECTIONS: dict[str, DocumentKind] = {
    "books": DocumentKind.BOOK,
    "notes": DocumentKind.NOTE,
    "events": DocumentKind.EVENT,
}


class AbstractDocumentStore(ABC):
    """Owner of books, notes and events; search only reads from it."""

    @abstractmethod
    def get_corpus(self) -> list[Document]:
        """Snapshot of every document, encrypted ones included."""
        raise NotImplementedError

    @abstractmethod
    def get(self, kind: DocumentKind, document_id: str) -> Document:
        """Fetch one document, raising ``DocumentNotFoundError`` if absent."""
        raise NotImplementedError


class InMemoryDocumentStore(AbstractDocumentStore):
    """Dictionary-backed store that notifies listeners after each mutation."""

    def __init__(self, documents: list[Document] | None = None) -> None:
        self._documents: dict[tuple[DocumentKind, str], Document] = {}
        self._listeners: list[CorpusListener] = []
        for document in documents or []:
            self._documents[(document.kind, document.id)] = document

    def subscribe(self, listener: CorpusListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: CorpusListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_corpus(self) -> list[Document]:
        return list(self._documents.values())

    def get(self, kind: DocumentKind, document_id: str) -> Document:
        try:
            return self._documents[(kind, document_id)]
        except KeyError:
            raise DocumentNotFoundError(kind, document_id) from None

    def __len__(self) -> int:
        return len(self._documents)

    def add(self, document: Document) -> None:
        self._documents[(document.kind, document.id)] = document
        self._publish(ChangeAction.CREATE, document.kind, document.id)

    def update(self, document: Document) -> None:
        self.get(document.kind, document.id)
        self._documents[(document.kind, document.id)] = document
        self._publish(ChangeAction.UPDATE, document.kind, document.id)

    def delete(self, kind: DocumentKind, document_id: str) -> None:
        self.get(kind, document_id)
        del self._documents[(kind, document_id)]
        self._publish(ChangeAction.DELETE, kind, document_id)

    def encrypt(self, kind: DocumentKind, document_id: str) -> None:
        self._set_encrypted(kind, document_id, encrypted=True)
        self._publish(ChangeAction.ENCRYPT, kind, document_id)

    def decrypt(self, kind: DocumentKind, document_id: str) -> None:
        self._set_encrypted(kind, document_id, encrypted=False)
        self._publish(ChangeAction.DECRYPT, kind, document_id)

    def _set_encrypted(self, kind: DocumentKind, document_id: str, *, encrypted: bool) -> None:
        document = self.get(kind, document_id)
        self._documents[(kind, document_id)] = document.model_copy(update={"encrypted": encrypted})

    def _publish(self, action: ChangeAction, kind: DocumentKind, document_id: str) -> None:
        event = CorpusChanged(action=action, kind=kind, document_id=document_id)
        logger.debug("Corpus changed: %s %s %s", action.value, kind.value, document_id)
        for listener in list(self._listeners):
            listener(event)


def parse_corpus(data: Mapping[str, Any]) -> list[Document]:
    """Build documents from an application export ``{"books": [...], "notes": [...], "events": [...]}``.

    Unknown collections are ignored.
    """
    documents: list[Document] = []
    for collection, kind in _COLLECTIONS.items():
        model = _MODELS[kind]
        for raw in data.get(collection) or []:
            documents.append(model.model_validate({**raw, "kind": kind}))
    return documents


def load_corpus(path: Path | str) -> InMemoryDocumentStore:
    """Read an application export from disk into a fresh store."""
    content = Path(path).read_bytes()
    data = orjson.loads(content)
    if not isinstance(data, dict):
        raise ValueError(f"Corpus file {path} must contain a JSON object")
    documents = parse_corpus(data)
    logger.info("Loaded %d documents from %s", len(documents), path)
    return InMemoryDocumentStore(documents)
