"""
Routing logic for the story workflow.
"""

from .types import State


def route_from_vision(state: State) -> str:
    """
    Parse the model reply when there is one, otherwise go straight to the fallback.
    - raw_text present (non-blank) → normalize
    - missing key / upstream failure / empty reply → fallback
    """
    raw_text = state.get("raw_text")
    if raw_text and raw_text.strip():
        return "normalize"
    return "fallback"
