"""Domain models for search requests and responses.

Value objects are immutable (frozen=True). Filters never reject input: an
unknown value for any selector collapses to ``all`` so a stale UI control can
only widen a search, never break it.
"""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shiro_search.domain.model import DocumentKind


class KindFilter(str, Enum):
    ALL = "all"
    BOOK = "book"
    NOTE = "note"
    EVENT = "event"


class DateRange(str, Enum):
    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def max_age_days(self) -> int | None:
        return {DateRange.WEEK: 7, DateRange.MONTH: 30, DateRange.YEAR: 365}.get(self)


class EncryptedState(str, Enum):
    ALL = "all"
    ENCRYPTED = "encrypted"
    UNENCRYPTED = "unencrypted"


def _coerce_choice(enum_cls: type[Enum], value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    return enum_cls("all")


class SearchFilters(BaseModel):
    """Structured filters, combined with AND semantics."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: KindFilter = Field(default=KindFilter.ALL, alias="type")
    date_range: DateRange = Field(default=DateRange.ALL, alias="dateRange")
    tags: list[str] = Field(default_factory=list)
    encrypted: EncryptedState = EncryptedState.ALL

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value: Any) -> Any:
        return _coerce_choice(KindFilter, value)

    @field_validator("date_range", mode="before")
    @classmethod
    def _coerce_date_range(cls, value: Any) -> Any:
        return _coerce_choice(DateRange, value)

    @field_validator("encrypted", mode="before")
    @classmethod
    def _coerce_encrypted(cls, value: Any) -> Any:
        return _coerce_choice(EncryptedState, value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, (list, tuple, set, frozenset)):
            return [str(tag) for tag in value if tag is not None and str(tag).strip()]
        return []

    @classmethod
    def cleared(cls) -> "SearchFilters":
        return cls()

    @property
    def is_empty(self) -> bool:
        return (
            self.kind is KindFilter.ALL
            and self.date_range is DateRange.ALL
            and not self.tags
            and self.encrypted is EncryptedState.ALL
        )


class SearchResult(BaseModel):
    """A single ranked match."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    kind: DocumentKind
    title: str = ""
    relevance: float
    matched_term_count: int
    total_term_count: int


class Suggestion(BaseModel):
    """Follow-up query proposed next to a result list."""

    model_config = ConfigDict(frozen=True)

    type: Literal["tag", "history"]
    text: str
    count: int | None = None


class SearchStats(BaseModel):
    """Result counts by document kind."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    books: int = 0
    notes: int = 0
    events: int = 0

    @classmethod
    def from_results(cls, results: list[SearchResult]) -> "SearchStats":
        by_kind = {kind: 0 for kind in DocumentKind}
        for result in results:
            by_kind[result.kind] += 1
        return cls(
            total=len(results),
            books=by_kind[DocumentKind.BOOK],
            notes=by_kind[DocumentKind.NOTE],
            events=by_kind[DocumentKind.EVENT],
        )


class SearchResponse(BaseModel):
    """Complete answer to a search: ranked results, suggestions and stats."""

    model_config = ConfigDict(frozen=True)

    results: list[SearchResult] = Field(default_factory=list)
    suggestions: list[Suggestion] = Field(default_factory=list)
    stats: SearchStats = Field(default_factory=SearchStats)

    @classmethod
    def empty(cls) -> "SearchResponse":
        return cls()


class QuickSearchHit(BaseModel):
    """Autocomplete entry with a short body preview."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    kind: DocumentKind
    title: str
    snippet: str


class TagCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    count: int
