"""
LangGraph workflow definition and compilation.
"""

from typing import Optional

from langgraph.graph import StateGraph, START, END

from story_backend.libs.llm_vision import make_client
from story_backend.libs.settings import Settings
from .types import State
from .nodes import make_image_vision_node, normalize_node, fallback_node
from .routing import route_from_vision


def create_graph(settings: Settings, client=None) -> StateGraph:
    """Create and configure the story workflow."""
    if client is None and settings.xai_api_key:
        client = make_client(settings)

    graph = StateGraph(State)

    # Add nodes
    graph.add_node("image_vision", make_image_vision_node(settings, client))
    graph.add_node("normalize", normalize_node)
    graph.add_node("fallback", fallback_node)

    # START → image_vision → (normalize | fallback) → END
    graph.add_edge(START, "image_vision")
    graph.add_conditional_edges(
        "image_vision",
        route_from_vision,
        {"normalize": "normalize", "fallback": "fallback"},
    )
    graph.add_edge("normalize", END)
    graph.add_edge("fallback", END)

    return graph


def compile_graph(settings: Settings, client: Optional[object] = None):
    """Compile the workflow. No checkpointer: stories are never kept between requests."""
    return create_graph(settings, client).compile()
