"""
Visualize the story workflow graph.

Usage:
  - In notebooks: import visualize_graph() and call it
  - CLI: python -m story_backend.scripts.visualize_graph (saves graph.png if display not available)
"""
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from story_backend.libs.settings import Settings
from story_backend.orchestrator.graph import compile_graph


def visualize_graph(out_path: str = "graph.png"):
    # No API key: the graph shape is the same and no client gets created.
    compiled = compile_graph(Settings())
    try:
        from IPython.display import Image, display  # type: ignore
        display(Image(compiled.get_graph().draw_mermaid_png()))
        return
    except ImportError:
        # Not running in an IPython environment
        pass

    try:
        png_bytes = compiled.get_graph().draw_mermaid_png()
        Path(out_path).write_bytes(png_bytes)
        print(f"Saved graph visualization to {out_path}")
    except Exception as e:
        # mermaid.ink unreachable: print the source for an external renderer
        print(f"Could not render PNG ({e}). Mermaid source:\n")
        print(compiled.get_graph().draw_mermaid())


if __name__ == "__main__":
    visualize_graph()
