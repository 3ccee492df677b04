"""Shared test fixtures: a pinned clock, sample corpora and engine factories."""

from datetime import datetime
import os

import pytest

from shiro_search.adapters.history_store import InMemoryHistoryStore
from shiro_search.config import Settings
from shiro_search.domain.model import Book, Chapter, Event, Note
from shiro_search.engine import SearchEngine
from tests.fixtures.clock import NOW, days_ago


# Configuration comes from the environment; make sure a developer's shell does not leak in
for key in [key for key in os.environ if key.upper().startswith("SHIRO_SEARCH_")]:
    del os.environ[key]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def meeting_note() -> Note:
    return Note(
        id="doc1",
        title="Meeting Notes",
        content="<p>Discuss <b>quarterly</b> budget</p>",
        tags=["work"],
        created=days_ago(10),
        last_modified=days_ago(2),
    )


@pytest.fixture
def grocery_note() -> Note:
    return Note(
        id="doc2",
        title="Grocery List",
        content="Buy milk and bread",
        tags=["home"],
        created=days_ago(40),
        last_modified=days_ago(40),
    )


@pytest.fixture
def scenario_corpus(meeting_note, grocery_note) -> list:
    return [meeting_note, grocery_note]


@pytest.fixture
def mixed_corpus(meeting_note, grocery_note) -> list:
    """Books, notes and events, including encrypted items."""
    return [
        meeting_note,
        grocery_note,
        Book(
            id="b1",
            title="Python Programming",
            description="A practical guide to programs and budgets",
            chapters=[Chapter(title="Getting started", content="<h1>Install</h1><p>Set up the interpreter.</p>")],
            tags=["work", "reading"],
            created=days_ago(400),
            last_modified=days_ago(200),
        ),
        Note(
            id="secret",
            title="Secret budget plans",
            content="Hidden",
            tags=["work", "private"],
            encrypted=True,
            last_modified=days_ago(1),
        ),
        Event(
            id="e1",
            title="Budget review",
            description="Quarterly budget review with finance",
            category="meeting",
            tags=["work"],
            created=days_ago(3),
        ),
        Event(
            id="e2",
            title="Dentist",
            description="Checkup",
            category="health",
            tags=["personal"],
            encrypted=True,
            created=days_ago(100),
        ),
    ]


@pytest.fixture
def make_engine(settings):
    """Build an engine over a fixed list of documents with the clock pinned to NOW."""

    def _make(documents, *, history_store=None, engine_settings=None, weights=None) -> SearchEngine:
        return SearchEngine(
            lambda: list(documents),
            engine_settings or settings,
            weights=weights,
            history_store=history_store,
            clock=lambda: NOW,
        )

    return _make


@pytest.fixture
def history_store() -> InMemoryHistoryStore:
    return InMemoryHistoryStore()
