"""Domain model - the searchable documents owned by the notes application.

Books, notes and calendar events have different shapes in the document store.
Search only needs a common view of them, exposed through ``Searchable``:
a kind, a title, the visible body text, the tag list and a timestamp.

Documents are immutable value objects here. The store replaces a document on
update rather than mutating it, so an index built from a corpus snapshot never
sees a half-edited document.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Protocol

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from shiro_search.utils.markup import strip_markup


class ShiroSearchError(Exception):
    """Base error for the search package."""


class DocumentNotFoundError(ShiroSearchError):
    """Raised when a document id is not present in the document store."""

    def __init__(self, kind: DocumentKind, document_id: str) -> None:
        super().__init__(f"{kind.value} {document_id!r} not found")
        self.kind = kind
        self.document_id = document_id


class DocumentKind(str, Enum):
    """The three document families that are searchable."""

    BOOK = "book"
    NOTE = "note"
    EVENT = "event"


class Searchable(Protocol):
    """Capability every indexable document exposes to the tokenizer and indexer."""

    id: str
    kind: DocumentKind
    title: str
    tags: list[str]
    encrypted: bool
    last_modified: datetime | None

    def body_text(self) -> str: ...

    def snippet_text(self) -> str: ...

    def timestamp(self) -> datetime | None: ...


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class _DocumentBase(BaseModel):
    """Fields shared by every document kind."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    title: str = ""
    tags: list[str] = Field(default_factory=list)
    created: datetime | None = Field(default=None, validation_alias=AliasChoices("created", "createdAt"))
    last_modified: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("last_modified", "lastModified", "lastModifiedAt", "updatedAt"),
    )
    encrypted: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        # The browser store hands out numeric auto-increment keys
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _none_to_list(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("created", "last_modified", mode="after")
    @classmethod
    def _normalize_timezone(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    def timestamp(self) -> datetime | None:
        """Most recent of creation and modification time."""
        stamps = [stamp for stamp in (self.last_modified, self.created) if stamp is not None]
        return max(stamps) if stamps else None


class Chapter(BaseModel):
    """A chapter of a book; ``content`` is editor HTML."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    content: str = ""

    @field_validator("title", "content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class Book(_DocumentBase):
    kind: Literal[DocumentKind.BOOK] = DocumentKind.BOOK
    description: str = ""
    chapters: list[Chapter] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def _description_none(cls, value: object) -> object:
        return "" if value is None else value

    def body_text(self) -> str:
        parts = [self.description]
        for chapter in self.chapters:
            parts.append(chapter.title)
            parts.append(strip_markup(chapter.content))
        return " ".join(part for part in parts if part)

    def snippet_text(self) -> str:
        # Previews only look at the description and the opening chapter
        if not self.chapters:
            return self.description
        return f"{self.description} {strip_markup(self.chapters[0].content)}"


class Note(_DocumentBase):
    kind: Literal[DocumentKind.NOTE] = DocumentKind.NOTE
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _content_none(cls, value: object) -> object:
        return "" if value is None else value

    def body_text(self) -> str:
        return strip_markup(self.content)

    def snippet_text(self) -> str:
        return self.body_text()


class Event(_DocumentBase):
    """Calendar event. Events are indexed even when flagged encrypted."""

    kind: Literal[DocumentKind.EVENT] = DocumentKind.EVENT
    description: str = ""
    category: str = ""

    @field_validator("description", "category", mode="before")
    @classmethod
    def _text_none(cls, value: object) -> object:
        return "" if value is None else value

    def body_text(self) -> str:
        return " ".join(part for part in (self.description, self.category) if part)

    def snippet_text(self) -> str:
        return self.description


Document = Annotated[Book | Note | Event, Field(discriminator="kind")]


def is_indexable(document: Searchable) -> bool:
    """Encrypted books and notes are opaque; events are always indexed."""
    return document.kind == DocumentKind.EVENT or not document.encrypted


class ChangeAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


@dataclass(frozen=True, slots=True)
class CorpusChanged:
    """Domain event published by the document store after any mutation."""

    action: ChangeAction
    kind: DocumentKind
    document_id: str
