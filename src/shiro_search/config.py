"""Centralized configuration for shiro-search using Pydantic Settings."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shiro_search.domain.model import DocumentKind


class RelevanceWeights(BaseModel):
    """Heuristic scoring constants shared by the indexer, matcher and aggregator.

    The values are the literal constants the notes application has always used;
    they are kept overridable rather than re-tuned.
    """

    model_config = ConfigDict(frozen=True)

    title_match: float = Field(default=10.0, ge=0.0)
    exact_title: float = Field(default=20.0, ge=0.0)
    book: float = Field(default=3.0, ge=0.0)
    note: float = Field(default=2.0, ge=0.0)
    event: float = Field(default=1.0, ge=0.0)
    recency_max_bonus: float = Field(default=5.0, ge=0.0)
    recency_decay_days: float = Field(default=30.0, gt=0.0)
    prefix: float = Field(default=0.8, ge=0.0)
    fuzzy_base: float = Field(default=0.6, ge=0.0)
    fuzzy_distance_penalty: float = Field(default=0.1, ge=0.0)
    fuzzy_min_term_length: int = Field(default=4, ge=1)
    fuzzy_max_distance: int = Field(default=2, ge=0)
    multi_term: float = Field(default=0.5, ge=0.0)

    def kind_weight(self, kind: DocumentKind) -> float:
        if kind == DocumentKind.BOOK:
            return self.book
        if kind == DocumentKind.NOTE:
            return self.note
        return self.event

    def fuzzy_weight(self, distance: int) -> float:
        """Multiplier applied to a posting reached through an edit of ``distance``."""
        return self.fuzzy_base - self.fuzzy_distance_penalty * distance


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``SHIRO_SEARCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SHIRO_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Static relevance
    title_match_weight: float = Field(default=10.0, ge=0.0, description="Bonus when the token occurs in the title")
    exact_title_weight: float = Field(default=20.0, ge=0.0, description="Extra bonus when the title equals the token")
    book_weight: float = Field(default=3.0, ge=0.0, description="Kind weight for books")
    note_weight: float = Field(default=2.0, ge=0.0, description="Kind weight for notes")
    event_weight: float = Field(default=1.0, ge=0.0, description="Kind weight for events")
    recency_max_bonus: float = Field(default=5.0, ge=0.0, description="Recency bonus for a document modified now")
    recency_decay_days: float = Field(default=30.0, gt=0.0, description="Days per point of recency bonus lost")

    # Term matching
    prefix_weight: float = Field(default=0.8, ge=0.0, description="Multiplier for prefix matches")
    fuzzy_base_weight: float = Field(default=0.6, ge=0.0, description="Fuzzy multiplier before distance penalty")
    fuzzy_distance_penalty: float = Field(default=0.1, ge=0.0, description="Fuzzy multiplier lost per edit")
    fuzzy_min_term_length: int = Field(default=4, ge=1, description="Shortest query term eligible for fuzzy matching")
    fuzzy_max_distance: int = Field(default=2, ge=0, description="Largest edit distance accepted as a fuzzy match")
    multi_term_weight: float = Field(default=0.5, ge=0.0, description="Multiplier for a document's additional terms")

    # Tokenizer
    min_token_length: int = Field(default=2, ge=1, description="Shortest alphanumeric run kept as a token")

    # History and suggestions
    history_limit: int = Field(default=20, ge=1, description="Maximum remembered queries")
    history_key: str = Field(default="shiroNotesSearchHistory", min_length=1, description="Storage key for history")
    tag_suggestion_limit: int = Field(default=5, ge=0, description="Tag suggestions per search")
    history_suggestion_limit: int = Field(default=3, ge=0, description="History suggestions per search")
    tag_autocomplete_limit: int = Field(default=8, ge=1, description="Tags returned by tag autocomplete")

    # Quick search
    quick_search_limit: int = Field(default=5, ge=1, description="Default quick search result count")
    quick_search_min_length: int = Field(default=2, ge=1, description="Shortest query answered by quick search")
    snippet_context_chars: int = Field(default=50, ge=0, description="Characters kept on each side of a match")
    snippet_fallback_chars: int = Field(default=100, ge=0, description="Leading characters used without a match")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    json_logs: bool = Field(default=False, description="Emit structured JSON logs")

    def relevance_weights(self) -> RelevanceWeights:
        """Collect the scoring constants into an immutable value object."""
        return RelevanceWeights(
            title_match=self.title_match_weight,
            exact_title=self.exact_title_weight,
            book=self.book_weight,
            note=self.note_weight,
            event=self.event_weight,
            recency_max_bonus=self.recency_max_bonus,
            recency_decay_days=self.recency_decay_days,
            prefix=self.prefix_weight,
            fuzzy_base=self.fuzzy_base_weight,
            fuzzy_distance_penalty=self.fuzzy_distance_penalty,
            fuzzy_min_term_length=self.fuzzy_min_term_length,
            fuzzy_max_distance=self.fuzzy_max_distance,
            multi_term=self.multi_term_weight,
        )
