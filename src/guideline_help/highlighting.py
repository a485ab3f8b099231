"""Query-term highlighting for result excerpts.

Highlighting is a single left-to-right scan over the display text. A query
term matches at a word start when the text there equals the term
(case-insensitively); the highlighted span then extends over any letters that
follow, so "adapt" marks "Adaptation". When several terms match at the same
position the longest span wins, and the first query term wins a tie. The scan
resumes after each span, so spans never overlap and nothing is wrapped twice.
"""
from __future__ import annotations

import string

from .tokenizer import tokenize

OPEN_MARK = "<mark>"
CLOSE_MARK = "</mark>"

_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_LETTERS = frozenset(string.ascii_letters)

_HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"}


def escape_html(text: str) -> str:
    if not text:
        return ""
    return "".join(_HTML_ESCAPES.get(char, char) for char in text)


def _span_at(text: str, start: int, term: str) -> int | None:
    """Return the end of the span for ``term`` at ``start``, or None."""
    end = start + len(term)
    if text[start:end].lower() != term:
        return None
    while end < len(text) and text[end] in _LETTERS:
        end += 1
    return end


def find_spans(text: str, terms: list[str]) -> list[tuple[int, int]]:
    """Locate non-overlapping highlight spans for ``terms`` in ``text``.

    Args:
        text: Display text to scan.
        terms: Lower-case query terms, in query order.

    Returns:
        Sorted ``(start, end)`` offsets.
    """
    unique_terms = list(dict.fromkeys(term for term in terms if term))
    if not text or not unique_terms:
        return []

    spans: list[tuple[int, int]] = []
    position = 0
    while position < len(text):
        if position > 0 and text[position - 1] in _WORD_CHARS:
            position += 1
            continue

        best_end = None
        for term in unique_terms:
            end = _span_at(text, position, term)
            if end is not None and (best_end is None or end > best_end):
                best_end = end

        if best_end is None:
            position += 1
        else:
            spans.append((position, best_end))
            position = best_end
    return spans


def _mark(text: str, query: str, escape) -> str:
    pieces: list[str] = []
    cursor = 0
    for start, end in find_spans(text, tokenize(query)):
        pieces.append(escape(text[cursor:start]))
        pieces.append(OPEN_MARK + escape(text[start:end]) + CLOSE_MARK)
        cursor = end
    pieces.append(escape(text[cursor:]))
    return "".join(pieces)


def highlight(text: str, query: str) -> str:
    """Wrap literal query terms (not their synonyms) found in ``text``.

    Examples:
        >>> highlight("Adaptation is key", "adapt")
        '<mark>Adaptation</mark> is key'
    """
    return _mark(text, query, lambda segment: segment)


def render_highlighted(text: str, query: str) -> str:
    """HTML-escape ``text`` and mark query terms for display.

    Escaping is applied per segment, so entity text such as ``&amp;`` is
    never itself matched by a query term.
    """
    return _mark(text or "", query, escape_html)
