from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CORPUS_FILENAME = "help_corpus.json"
QUERIES_FILENAME = "queries.jsonl"


@dataclass(slots=True)
class SearchSettings:
    """Ranking parameters for help queries."""

    k1: float = 1.5
    keyword_boost: float = 1.5
    max_results: int = 5


@dataclass(slots=True)
class Paths:
    """Corpus and log locations.

    ``corpus_file`` defaults to ``help_corpus.json`` inside ``data_dir``.
    """

    data_dir: str = "data"
    corpus_file: str = ""
    log_file: str | None = None

    def __post_init__(self) -> None:
        if not self.corpus_file:
            self.corpus_file = f"{self.data_dir}/{CORPUS_FILENAME}"

    @property
    def queries_file(self) -> str:
        return f"{self.data_dir}/{QUERIES_FILENAME}"


def _env_number(name: str, default, cast, positive: bool = False):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %r", name, raw, default)
        return default
    if not math.isfinite(value) or (positive and value <= 0):
        logger.warning("Ignoring out-of-range %s=%r, using %r", name, raw, default)
        return default
    return value


def load_settings() -> tuple[SearchSettings, Paths]:
    """Load environment-backed settings and return typed config objects.

    Returns:
        Tuple containing ranking settings and corpus/log path settings.
    """
    load_dotenv()
    return (
        SearchSettings(
            k1=_env_number("HELP_BM25_K1", 1.5, float, positive=True),
            keyword_boost=_env_number("HELP_KEYWORD_BOOST", 1.5, float, positive=True),
            max_results=_env_number("HELP_MAX_RESULTS", 5, int),
        ),
        Paths(
            data_dir=os.getenv("HELP_DATA_DIR") or "data",
            corpus_file=os.getenv("HELP_CORPUS_PATH") or "",
            log_file=os.getenv("HELP_LOG_FILE") or None,
        ),
    )
