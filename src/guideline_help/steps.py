from __future__ import annotations

WORKFLOW_STEPS = ("project", "pico", "sources", "etd", "decision", "recommendation")
DEFAULT_STEP = "project"


def resolve_step(location: str | None) -> str:
    """Map a UI location fragment such as ``"#pico"`` to a workflow step id.

    Unknown or empty locations resolve to :data:`DEFAULT_STEP`.
    """
    if not location:
        return DEFAULT_STEP
    step = location.removeprefix("#")
    return step if step in WORKFLOW_STEPS else DEFAULT_STEP
