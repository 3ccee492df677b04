"""Search data models."""

from dataclasses import dataclass

from shiro_search.domain.model import DocumentKind


@dataclass(frozen=True, slots=True)
class Posting:
    """Presence of one token in one document, with the document's static weight for it."""

    document_id: str
    kind: DocumentKind
    static_relevance: float

    @property
    def key(self) -> tuple[DocumentKind, str]:
        return (self.kind, self.document_id)


@dataclass(frozen=True, slots=True)
class WeightedPosting:
    """A posting reached by a query term, scaled by how the term matched."""

    posting: Posting
    weight: float
    strategy: str

    @property
    def key(self) -> tuple[DocumentKind, str]:
        return self.posting.key

    @property
    def relevance(self) -> float:
        return self.posting.static_relevance * self.weight
