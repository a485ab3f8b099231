"""Help engine owning the corpus and its search index.

The engine publishes an immutable ``(corpus, index)`` snapshot. A reload
builds a complete new snapshot before swapping the reference, so queries
running concurrently keep reading the snapshot they started with.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from opentelemetry import trace

from .highlighting import highlight, render_highlighted
from .indexing import build_index
from .io_utils import load_corpus
from .retrieval import search_index
from .schema import Corpus, RetrievalResult, SearchIndex
from .settings import SearchSettings, load_settings
from .steps import resolve_step
from .tracing import ATTR_INDEX_DOCUMENTS, ATTR_INDEX_TERMS, traced_search

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Snapshot:
    corpus: Corpus
    index: SearchIndex


class HelpEngine:
    """Contextual help search over a curated passage corpus.

    Usage
    -----
    engine = HelpEngine("data/help_corpus.json")
    engine.initialize()
    results = engine.search("adopt or adapt", max_results=3)
    tips = engine.get_tips("pico")
    """

    def __init__(
        self,
        source: str | Path | Mapping[str, Any] | None = None,
        settings: SearchSettings | None = None,
        tracer: trace.Tracer | None = None,
    ) -> None:
        if source is None or settings is None:
            loaded_settings, paths = load_settings()
            source = paths.corpus_file if source is None else source
            settings = loaded_settings if settings is None else settings
        self._source = source
        self._settings = settings
        self._tracer = tracer
        self._snapshot: _Snapshot | None = None
        self._lock = threading.Lock()
        self._search = traced_search(self._run_search, tracer) if tracer is not None else self._run_search

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._snapshot is not None

    def initialize(self, reload: bool = False) -> None:
        """Load the corpus and build its index.

        Repeated calls are no-ops unless ``reload`` is true, in which case the
        corpus is read again and a fresh index replaces the current one.
        """
        if self._snapshot is not None and not reload:
            return
        with self._lock:
            if self._snapshot is not None and not reload:
                return
            corpus = load_corpus(self._source)
            snapshot = _Snapshot(corpus=corpus, index=self._build_index(corpus))
            self._snapshot = snapshot
        logger.info(
            "Help index ready: %d passages, %d terms",
            snapshot.index.document_count,
            snapshot.index.term_count,
        )

    def _build_index(self, corpus: Corpus) -> SearchIndex:
        if self._tracer is None:
            return build_index(corpus)
        with self._tracer.start_as_current_span("index-build") as span:
            index = build_index(corpus)
            span.set_attribute(ATTR_INDEX_DOCUMENTS, index.document_count)
            span.set_attribute(ATTR_INDEX_TERMS, index.term_count)
            return index

    def _current(self) -> _Snapshot:
        if self._snapshot is None:
            self.initialize()
        return self._snapshot

    @property
    def corpus(self) -> Corpus:
        return self._current().corpus

    @property
    def index(self) -> SearchIndex:
        return self._current().index

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search(self, query: str, max_results: int | None = None) -> list[RetrievalResult]:
        """Return passages ranked for ``query``, best first.

        Args:
            query: Free-text query from the help console.
            max_results: Result limit; defaults to ``SearchSettings.max_results``.
        """
        return self._search(query, max_results)

    def _run_search(self, query: str, max_results: int | None = None) -> list[RetrievalResult]:
        snapshot = self._current()
        limit = self._settings.max_results if max_results is None else max_results
        return search_index(
            snapshot.corpus,
            snapshot.index,
            query,
            max_results=limit,
            k1=self._settings.k1,
            keyword_boost=self._settings.keyword_boost,
        )

    def get_tips(self, step_id: str) -> list[str]:
        return list(self._current().corpus.context_tips.get(step_id, ()))

    def tips_for_location(self, location: str | None) -> list[str]:
        return self.get_tips(resolve_step(location))

    @staticmethod
    def highlight(text: str, query: str) -> str:
        return highlight(text, query)

    @staticmethod
    def render_text(text: str, query: str) -> str:
        return render_highlighted(text, query)
