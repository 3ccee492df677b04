"""Unit tests for the tokenizer pipeline."""

import pytest

from shiro_search.domain.model import Book, Chapter, Event, Note
from shiro_search.search.analyzers import (
    LowercaseFilter,
    MinLengthFilter,
    RegexTokenizer,
    UniqueFilter,
    build_document_analyzer,
    document_text,
    extract_tokens,
    split_query_terms,
)


@pytest.mark.unit
class TestFilters:
    def test_regex_tokenizer_positions(self):
        tokens = list(RegexTokenizer()("Hello, big world"))
        assert [token.text for token in tokens] == ["Hello", "big", "world"]
        assert [token.position for token in tokens] == [0, 1, 2]
        assert tokens[1].start_char == 7
        assert tokens[1].end_char == 10

    def test_min_length_filter(self):
        tokens = MinLengthFilter(2)(RegexTokenizer()("a bb c dd"))
        assert [token.text for token in tokens] == ["bb", "dd"]

    def test_lowercase_filter(self):
        tokens = LowercaseFilter()(RegexTokenizer()("MiXeD lower"))
        assert [token.text for token in tokens] == ["mixed", "lower"]

    def test_unique_filter_keeps_first(self):
        tokens = list(UniqueFilter()(RegexTokenizer()("one two one")))
        assert [token.text for token in tokens] == ["one", "two"]
        assert tokens[0].position == 0

    def test_configurable_min_length(self):
        analyzer = build_document_analyzer(min_length=4)
        assert [token.text for token in analyzer("the cat jumped")] == ["jumped"]


@pytest.mark.unit
class TestExtractTokens:
    def test_title_body_and_tags_are_tokenized(self, meeting_note):
        assert extract_tokens(meeting_note) == {"meeting", "notes", "discuss", "quarterly", "budget", "work"}

    def test_tokens_are_lowercased_and_deduplicated(self):
        note = Note(id="n", title="Budget BUDGET budget", content="Budget")
        assert extract_tokens(note) == {"budget"}

    def test_single_characters_are_dropped(self):
        note = Note(id="n", title="a b cd", content="x 42 7")
        assert extract_tokens(note) == {"cd", "42"}

    def test_markup_is_stripped_before_tokenizing(self):
        note = Note(id="n", content='<span class="highlight">Visible</span> text')
        assert extract_tokens(note) == {"visible", "text"}

    def test_book_includes_description_and_all_chapters(self):
        book = Book(
            id="b",
            title="Handbook",
            description="Intro",
            chapters=[
                Chapter(title="First", content="<p>alpha</p>"),
                Chapter(title="Second", content="<p>omega</p>"),
            ],
        )
        assert extract_tokens(book) == {"handbook", "intro", "first", "alpha", "second", "omega"}

    def test_event_includes_category(self):
        event = Event(id="e", title="Standup", description="Daily sync", category="meeting")
        assert "meeting" in extract_tokens(event)

    def test_missing_fields_contribute_nothing(self):
        note = Note(id="n", title=None, content=None, tags=None)
        assert document_text(note) == ""
        assert extract_tokens(note) == frozenset()

    def test_underscored_and_unicode_words(self):
        note = Note(id="n", content="snake_case café")
        assert extract_tokens(note) == {"snake_case", "café"}


@pytest.mark.unit
class TestSplitQueryTerms:
    def test_whitespace_split_and_lowercase(self):
        assert split_query_terms("  Quarterly\tBUDGET  ") == ["quarterly", "budget"]

    def test_empty(self):
        assert split_query_terms("") == []
        assert split_query_terms("   ") == []
        assert split_query_terms(None) == []
