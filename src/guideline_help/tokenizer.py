from __future__ import annotations

import re

_NON_TERM_CHARS = re.compile(r"[^a-z0-9\s]")
MIN_TERM_LENGTH = 3


def tokenize(text: str) -> list[str]:
    """Normalize raw text into index terms.

    Lower-cases, replaces everything outside ``[a-z0-9]`` and whitespace with a
    space, splits on whitespace runs and drops tokens shorter than three
    characters.

    Args:
        text: Passage, query, or tag text.

    Returns:
        Terms in their original order, duplicates kept.

    Examples:
        >>> tokenize("GRADE-ADOLOPMENT: adopt, adapt, or de novo?")
        ['grade', 'adolopment', 'adopt', 'adapt', 'novo']
    """
    if not text:
        return []
    cleaned = _NON_TERM_CHARS.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) >= MIN_TERM_LENGTH]
