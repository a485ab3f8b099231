from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .schema import Chunk, Corpus, EvalQuery

logger = logging.getLogger(__name__)

_REQUIRED_CHUNK_FIELDS = ("id", "text", "section", "source")


class CorpusError(ValueError):
    """Raised when a corpus description or one of its entries is malformed."""


def _load_jsonl(path: str | Path) -> list[dict]:
    records: list[dict] = []
    with Path(path).open("r", encoding="utf-8") as file_handle:
        for line in file_handle:
            if line.strip():
                records.append(json.loads(line))
    return records


def parse_chunk(record: Any) -> Chunk:
    """Convert one ``chunks`` entry into a :class:`Chunk`.

    Raises:
        CorpusError: If a required field is missing or has the wrong type.
    """
    if not isinstance(record, Mapping):
        raise CorpusError(f"chunk entry must be an object, got {type(record).__name__}")

    for name in _REQUIRED_CHUNK_FIELDS:
        if not isinstance(record.get(name), str):
            raise CorpusError(f"chunk entry missing string field '{name}'")

    keywords = record.get("keywords") or []
    if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
        raise CorpusError(f"chunk '{record['id']}' has non-string keywords")

    return Chunk(
        chunk_id=record["id"],
        text=record["text"],
        section=record["section"],
        source=record["source"],
        keywords=tuple(keywords),
    )


def _parse_tips(raw_tips: Any) -> dict[str, tuple[str, ...]]:
    if raw_tips is None:
        return {}
    if not isinstance(raw_tips, Mapping):
        raise CorpusError("'contextTips' must be an object")

    tips: dict[str, tuple[str, ...]] = {}
    for step_id, step_tips in raw_tips.items():
        if not isinstance(step_tips, list) or not all(isinstance(t, str) for t in step_tips):
            logger.warning("Skipping malformed tip list for step %r", step_id)
            continue
        tips[str(step_id)] = tuple(step_tips)
    return tips


def parse_corpus(description: Any) -> Corpus:
    """Build a :class:`Corpus` from a decoded corpus description.

    Malformed passage entries and repeated ids are skipped with a warning; the
    first passage carrying a given id is the one kept.

    Args:
        description: Mapping with a ``chunks`` list and optional ``contextTips``.

    Returns:
        Corpus preserving the order of the valid entries.

    Raises:
        CorpusError: If the top-level structure itself is unusable.
    """
    if not isinstance(description, Mapping):
        raise CorpusError("corpus description must be an object")

    raw_chunks = description.get("chunks")
    if not isinstance(raw_chunks, list):
        raise CorpusError("corpus description needs a 'chunks' list")

    chunks: list[Chunk] = []
    seen_ids: set[str] = set()
    for position, record in enumerate(raw_chunks):
        try:
            chunk = parse_chunk(record)
        except CorpusError as exc:
            logger.warning("Skipping chunk #%d: %s", position, exc)
            continue
        if chunk.chunk_id in seen_ids:
            logger.warning("Skipping chunk #%d: duplicate id '%s'", position, chunk.chunk_id)
            continue
        seen_ids.add(chunk.chunk_id)
        chunks.append(chunk)

    return Corpus(chunks=tuple(chunks), context_tips=_parse_tips(description.get("contextTips")))


def load_corpus(source: str | Path | Mapping[str, Any]) -> Corpus:
    """Load a corpus from a JSON file path or an already-decoded mapping.

    Any failure to read or parse the description yields an empty corpus so
    the help feature stays usable.

    Args:
        source: Path to a JSON corpus description, or its decoded content.

    Returns:
        Parsed corpus, or :meth:`Corpus.empty` when loading fails.
    """
    try:
        if isinstance(source, Mapping):
            description = source
        else:
            description = json.loads(Path(source).read_text(encoding="utf-8"))
        corpus = parse_corpus(description)
    except (OSError, ValueError, TypeError, RecursionError) as exc:
        logger.error("Failed to load help corpus from %s: %s", _describe(source), exc)
        return Corpus.empty()

    logger.info("Loaded %d passages and %d tip lists", len(corpus.chunks), len(corpus.context_tips))
    return corpus


def _describe(source: Any) -> str:
    if isinstance(source, Mapping):
        return "<mapping>"
    return str(source)


def load_queries(path: str | Path = "data/queries.jsonl") -> list[EvalQuery]:
    return [EvalQuery(**record) for record in _load_jsonl(path)]
