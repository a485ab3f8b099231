from __future__ import annotations

from collections import defaultdict

from .expansion import expand_query
from .schema import Corpus, RetrievalResult, SearchIndex
from .tokenizer import tokenize

DEFAULT_K1 = 1.5
DEFAULT_KEYWORD_BOOST = 1.5


def bm25_term_score(tf: float, idf: float, k1: float = DEFAULT_K1) -> float:
    """Saturating BM25-style contribution of one term to one passage."""
    return idf * (tf * (k1 + 1)) / (tf + k1)


def _matches_keyword(query_tokens: list[str], keywords: tuple[str, ...]) -> bool:
    lowered = {keyword.lower() for keyword in keywords}
    return any(token in lowered for token in query_tokens)


def search_index(
    corpus: Corpus,
    index: SearchIndex,
    query: str,
    max_results: int = 5,
    k1: float = DEFAULT_K1,
    keyword_boost: float = DEFAULT_KEYWORD_BOOST,
) -> list[RetrievalResult]:
    """Rank corpus passages for a free-text query.

    Scores are summed over the expanded query terms. A passage whose keyword
    tags contain one of the literal query tokens gets its total multiplied by
    ``keyword_boost`` once. Equal scores keep corpus order.

    Args:
        corpus: Corpus the index was built from.
        index: Index snapshot for ``corpus``.
        query: Raw query text.
        max_results: Maximum number of results; values below one return nothing.
        k1: Term-frequency saturation constant.
        keyword_boost: Multiplier for passages tagged with a query token.

    Returns:
        Results sorted by descending score.
    """
    if max_results <= 0:
        return []

    query_tokens = tokenize(query)
    if not query_tokens:
        return []

    scores: dict[str, float] = defaultdict(float)
    for term in expand_query(query_tokens):
        postings = index.postings.get(term)
        if not postings:
            continue
        idf = index.idf[term]
        for posting in postings:
            scores[posting.chunk_id] += bm25_term_score(posting.tf, idf, k1)

    chunks = corpus.chunks
    for chunk_id, score in scores.items():
        chunk = chunks[index.positions[chunk_id]]
        if score and _matches_keyword(query_tokens, chunk.keywords):
            scores[chunk_id] = score * keyword_boost

    ranked = sorted(scores.items(), key=lambda item: (-item[1], index.positions[item[0]]))[:max_results]

    results: list[RetrievalResult] = []
    for chunk_id, score in ranked:
        chunk = chunks[index.positions[chunk_id]]
        results.append(
            RetrievalResult(
                chunk_id=chunk.chunk_id,
                score=score,
                text=chunk.text,
                section=chunk.section,
                source=chunk.source,
                keywords=chunk.keywords,
            )
        )
    return results
