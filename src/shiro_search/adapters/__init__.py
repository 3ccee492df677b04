"""Adapters layer - document store and history persistence implementations."""

from .document_store import (
    AbstractDocumentStore,
    InMemoryDocumentStore,
    load_corpus,
    parse_corpus,
)
from .history_store import HistoryStore, InMemoryHistoryStore, JsonFileHistoryStore


__all__ = [
    "AbstractDocumentStore",
    "HistoryStore",
    "InMemoryDocumentStore",
    "InMemoryHistoryStore",
    "JsonFileHistoryStore",
    "load_corpus",
    "parse_corpus",
]
