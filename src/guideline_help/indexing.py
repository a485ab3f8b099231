"""Inverted-index construction for the help corpus.

The index maps every term to one posting per passage that contains it. Each
posting carries the term's frequency normalized by the passage's total token
count, where the indexed text is the body, section label and keyword tags.

IDF uses the smoothed form::

    idf(term) = ln((N + 1) / (df + 1)) + 1

with ``N`` the number of passages in the corpus (including passages that
produced no tokens) and ``df`` the number of passages containing the term.
"""
from __future__ import annotations

import logging
import math
from collections import Counter, defaultdict

from .schema import Corpus, Posting, SearchIndex
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def smoothed_idf(document_count: int, document_frequency: int) -> float:
    return math.log((document_count + 1) / (document_frequency + 1)) + 1


def build_index(corpus: Corpus) -> SearchIndex:
    """Build the inverted index and IDF table for a corpus.

    Passages without any tokens keep their corpus position but get no
    postings. If the same id appears twice, only the first passage is indexed.

    Args:
        corpus: Loaded corpus; it is only read.

    Returns:
        Immutable :class:`SearchIndex` snapshot.
    """
    postings: dict[str, list[Posting]] = defaultdict(list)
    document_frequency: Counter[str] = Counter()
    positions: dict[str, int] = {}

    for position, chunk in enumerate(corpus.chunks):
        if chunk.chunk_id in positions:
            logger.warning("Ignoring duplicate chunk id '%s' at position %d", chunk.chunk_id, position)
            continue
        positions[chunk.chunk_id] = position

        tokens = tokenize(chunk.indexable_text())
        if not tokens:
            continue

        term_counts = Counter(tokens)
        total = len(tokens)
        for term, count in term_counts.items():
            postings[term].append(Posting(chunk_id=chunk.chunk_id, tf=count / total))
            document_frequency[term] += 1

    document_count = len(corpus.chunks)
    idf = {term: smoothed_idf(document_count, df) for term, df in document_frequency.items()}

    logger.debug("Built help index: %d unique terms from %d passages", len(postings), document_count)
    return SearchIndex(
        postings={term: tuple(entries) for term, entries in postings.items()},
        idf=idf,
        positions=positions,
        document_count=document_count,
    )
