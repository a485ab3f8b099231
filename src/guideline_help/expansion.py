"""Synonym expansion for help queries.

Common GRADE-ADOLOPMENT shorthand is widened to the vocabulary used in the
reference passages, e.g. "adopt" also searches "adoption", "adopting" and
"accept".
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence

# Declaration order is the order synonyms are appended.
SYNONYMS: dict[str, tuple[str, ...]] = {
    "adopt": ("adoption", "adopting", "accept"),
    "adapt": ("adaptation", "adapting", "modify", "adjust"),
    "denovo": ("novo", "new", "scratch", "develop"),
    "etd": ("evidence", "decision", "framework"),
    "agree": ("quality", "assessment", "appraisal", "trustworthiness"),
    "pico": ("population", "intervention", "comparison", "outcome", "question"),
    "cost": ("resources", "costs", "economic", "budget"),
    "equity": ("inequity", "disparity", "equality", "fairness"),
    "strength": ("strong", "conditional", "weak"),
    "certainty": ("quality", "evidence", "confidence"),
    "harms": ("harm", "risk", "adverse", "safety"),
    "benefits": ("benefit", "effectiveness", "efficacy"),
}


def expand_query(
    tokens: Sequence[str],
    synonyms: Mapping[str, Sequence[str]] = SYNONYMS,
) -> list[str]:
    """Append synonyms of known tokens to the query.

    The original tokens come first, untouched. Synonyms follow in query order
    and then table order, skipping any string already in the expanded list.

    Args:
        tokens: Lower-cased query terms from :func:`tokenize`.
        synonyms: Term to synonym table.

    Returns:
        Expanded term list.
    """
    expanded = list(tokens)
    present = set(expanded)
    for token in tokens:
        for synonym in synonyms.get(token, ()):
            if synonym not in present:
                expanded.append(synonym)
                present.add(synonym)
    return expanded
