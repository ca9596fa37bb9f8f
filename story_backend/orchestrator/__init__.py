"""
Orchestrator package: image → model reply → normalized stories.
"""

from .graph import compile_graph
from .normalize import normalize
from .fallback import FALLBACK_STORIES
from .types import State, WorkItem

__all__ = ["compile_graph", "normalize", "FALLBACK_STORIES", "State", "WorkItem"]
