"""Shared pytest fixtures for guideline_help unit tests."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from guideline_help.schema import Chunk, Corpus, EvalQuery, RetrievalResult
from guideline_help.settings import SearchSettings


@pytest.fixture()
def corpus_description() -> dict:
    return {
        "chunks": [
            {
                "id": "C-adopt",
                "text": "Adopt the guideline when judgements hold.",
                "section": "Adoption",
                "keywords": ["adopt", "Adoption"],
                "source": "GRADE-ADOLOPMENT 2017",
            },
            {
                "id": "C-adapt",
                "text": "Adapt the guideline when local costs differ.",
                "section": "Adaptation",
                "keywords": ["adapt"],
                "source": "GRADE-ADOLOPMENT 2017",
            },
            {
                "id": "C-agree",
                "text": "AGREE II appraises source guideline quality.",
                "section": "Assessment",
                "source": "AGREE Research Trust",
            },
        ],
        "contextTips": {
            "pico": ["Frame the population first.", "Rate outcome importance."],
            "etd": ["Review each judgement."],
        },
    }


@pytest.fixture()
def corpus_file(tmp_path: Path, corpus_description: dict) -> Path:
    path = tmp_path / "help_corpus.json"
    path.write_text(json.dumps(corpus_description), encoding="utf-8")
    return path


@pytest.fixture()
def sample_chunks() -> list[Chunk]:
    return [
        Chunk(chunk_id="A", text="adopt guideline", section="S", source="src"),
        Chunk(chunk_id="B", text="adapt guideline", section="S", source="src"),
        Chunk(chunk_id="C", text="unrelated text", section="S", source="src"),
    ]


@pytest.fixture()
def sample_corpus(sample_chunks) -> Corpus:
    return Corpus(
        chunks=tuple(sample_chunks),
        context_tips={"pico": ("Frame the population first.",)},
    )


@pytest.fixture()
def search_settings() -> SearchSettings:
    return SearchSettings(k1=1.5, keyword_boost=1.5, max_results=5)


@pytest.fixture()
def sample_query() -> EvalQuery:
    return EvalQuery(query_id="Q-0001", question="adopt", relevant_chunk_ids=["A"])


@pytest.fixture()
def sample_results() -> list[RetrievalResult]:
    return [
        RetrievalResult(chunk_id="B", score=0.9, text="adapt guideline", section="S", source="src"),
        RetrievalResult(chunk_id="A", score=0.7, text="adopt guideline", section="S", source="src"),
        RetrievalResult(chunk_id="C", score=0.1, text="unrelated text", section="S", source="src"),
    ]
