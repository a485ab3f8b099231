from __future__ import annotations

from dataclasses import dataclass
import time

from .schema import EvalQuery, RetrievalResult


@dataclass(slots=True)
class EvalRow:
    """Single-query evaluation output used for aggregate reporting."""

    query_id: str
    recall_at_k: float
    mrr: float
    latency_ms: float


def recall_at_k(results: list[RetrievalResult], query: EvalQuery, k: int = 5) -> float:
    """Fraction of the query's relevant passages found in the top ``k`` results."""
    if not query.relevant_chunk_ids:
        return 0.0
    window = {result.chunk_id for result in results[:k]}
    hits = sum(1 for chunk_id in query.relevant_chunk_ids if chunk_id in window)
    return hits / len(query.relevant_chunk_ids)


def reciprocal_rank(results: list[RetrievalResult], query: EvalQuery) -> float:
    """Compute reciprocal rank of the first relevant passage."""
    relevant = set(query.relevant_chunk_ids)
    for rank, result in enumerate(results, start=1):
        if result.chunk_id in relevant:
            return 1.0 / rank
    return 0.0


def evaluate_single(query: EvalQuery, search_fn, top_k: int = 5) -> EvalRow:
    """Run one help query and compute ranking metrics.

    Args:
        query: Query with its expected passage ids.
        search_fn: Callable ``(query, max_results) -> list[RetrievalResult]``,
            typically :meth:`HelpEngine.search`.
        top_k: Result limit passed to the search and used for recall.

    Returns:
        `EvalRow` with recall, MRR, and latency values.
    """
    started = time.perf_counter()
    retrieved: list[RetrievalResult] = search_fn(query.question, top_k)
    elapsed_ms = (time.perf_counter() - started) * 1000

    return EvalRow(
        query_id=query.query_id,
        recall_at_k=recall_at_k(retrieved, query, k=top_k),
        mrr=reciprocal_rank(retrieved, query),
        latency_ms=elapsed_ms,
    )


def summarize(rows: list[EvalRow]) -> dict[str, float]:
    """Aggregate per-query metrics into simple mean summary values."""
    if not rows:
        return {"recall_at_k": 0.0, "mrr": 0.0, "latency_ms": 0.0}

    return {
        "recall_at_k": sum(row.recall_at_k for row in rows) / len(rows),
        "mrr": sum(row.mrr for row in rows) / len(rows),
        "latency_ms": sum(row.latency_ms for row in rows) / len(rows),
    }
