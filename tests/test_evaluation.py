"""Tests for evaluation.py — recall@k, reciprocal rank, aggregation."""
from __future__ import annotations

import pytest

from guideline_help.engine import HelpEngine
from guideline_help.evaluation import EvalRow, evaluate_single, recall_at_k, reciprocal_rank, summarize
from guideline_help.schema import EvalQuery


class TestRecallAtK:
    def test_hit_within_window(self, sample_results, sample_query):
        assert recall_at_k(sample_results, sample_query, k=2) == 1.0

    def test_hit_outside_window(self, sample_results, sample_query):
        assert recall_at_k(sample_results, sample_query, k=1) == 0.0

    def test_partial_recall(self, sample_results):
        query = EvalQuery(query_id="Q", question="q", relevant_chunk_ids=["A", "Z"])
        assert recall_at_k(sample_results, query, k=3) == pytest.approx(0.5)

    def test_no_relevant_ids(self, sample_results):
        query = EvalQuery(query_id="Q", question="q", relevant_chunk_ids=[])
        assert recall_at_k(sample_results, query) == 0.0


class TestReciprocalRank:
    def test_second_position(self, sample_results, sample_query):
        assert reciprocal_rank(sample_results, sample_query) == pytest.approx(0.5)

    def test_no_hit(self, sample_results):
        query = EvalQuery(query_id="Q", question="q", relevant_chunk_ids=["Z"])
        assert reciprocal_rank(sample_results, query) == 0.0


class TestEvaluateSingle:
    def test_runs_engine_search(self, corpus_file, search_settings):
        engine = HelpEngine(corpus_file, settings=search_settings)
        query = EvalQuery(query_id="Q-1", question="adopt", relevant_chunk_ids=["C-adopt"])
        row = evaluate_single(query, engine.search, top_k=3)
        assert row.query_id == "Q-1"
        assert row.recall_at_k == 1.0
        assert row.mrr == 1.0
        assert row.latency_ms >= 0.0


class TestSummarize:
    def test_empty_rows(self):
        assert summarize([]) == {"recall_at_k": 0.0, "mrr": 0.0, "latency_ms": 0.0}

    def test_means(self):
        rows = [
            EvalRow(query_id="Q-1", recall_at_k=1.0, mrr=1.0, latency_ms=2.0),
            EvalRow(query_id="Q-2", recall_at_k=0.0, mrr=0.5, latency_ms=4.0),
        ]
        assert summarize(rows) == {"recall_at_k": 0.5, "mrr": 0.75, "latency_ms": 3.0}
