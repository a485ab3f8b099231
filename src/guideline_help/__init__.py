"""Contextual help search over curated GRADE-ADOLOPMENT reference passages."""

from .engine import HelpEngine
from .schema import Chunk, Corpus, EvalQuery, Posting, RetrievalResult, SearchIndex

__all__ = ["HelpEngine", "Chunk", "Corpus", "Posting", "SearchIndex", "RetrievalResult", "EvalQuery"]
