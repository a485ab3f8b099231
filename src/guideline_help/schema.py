from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Chunk:
    """One curated reference passage with its section label, tags, and citation."""

    chunk_id: str
    text: str
    section: str
    source: str
    keywords: tuple[str, ...] = ()

    def indexable_text(self) -> str:
        """Body, section label, and keyword tags joined by single spaces."""
        return " ".join([self.text, self.section, " ".join(self.keywords)])


@dataclass(frozen=True, slots=True)
class Corpus:
    """Ordered passage collection plus workflow-step tips.

    Passage order is significant: it breaks ranking ties.
    """

    chunks: tuple[Chunk, ...] = ()
    context_tips: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Corpus:
        return cls(chunks=(), context_tips={})

    def __len__(self) -> int:
        return len(self.chunks)


@dataclass(frozen=True, slots=True)
class Posting:
    """Passage id with the term's length-normalized frequency in that passage."""

    chunk_id: str
    tf: float


@dataclass(frozen=True, slots=True)
class SearchIndex:
    """Inverted index and IDF table derived from one corpus snapshot."""

    postings: Mapping[str, tuple[Posting, ...]]
    idf: Mapping[str, float]
    positions: Mapping[str, int]
    document_count: int

    @property
    def term_count(self) -> int:
        return len(self.postings)


@dataclass(slots=True)
class RetrievalResult:
    """Ranked passage returned to the query console."""

    chunk_id: str
    score: float
    text: str
    section: str
    source: str
    keywords: tuple[str, ...] = ()

    @property
    def score_percent(self) -> int:
        return round(self.score * 100)

    def keyword_preview(self, limit: int = 5) -> list[str]:
        return list(self.keywords[:limit])

    def to_dict(self) -> dict:
        return {
            "id": self.chunk_id,
            "text": self.text,
            "section": self.section,
            "source": self.source,
            "keywords": list(self.keywords),
            "score": self.score,
        }


@dataclass(slots=True)
class EvalQuery:
    """Evaluation query paired with the passage ids a good answer should surface."""

    query_id: str
    question: str
    relevant_chunk_ids: list[str]
