"""
Utility functions for formatting and display.
"""

from typing import Any, Dict, List


def fmt_points(points: Any) -> str:
    """Format story points as `J/M/S` (junior / mid-level / senior)."""
    if not isinstance(points, dict):
        return "-"
    return "/".join(str(points.get(k, "?")) for k in ("junior", "midLevel", "senior"))


def _cell(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(v) for v in value)
    return str(value if value is not None else "").replace("|", "\\|")


def md_stories_table(stories: List[Dict[str, Any]]) -> str:
    """Create markdown table for generated stories."""
    rows = ["| # | Summary | Priority | Points (J/M/S) | Assignee | Components |",
            "|---:|---|---|---|---|---|"]
    for i, s in enumerate(stories, start=1):
        if not isinstance(s, dict):
            rows.append(f"| {i} | {_cell(s)} | | | | |")
            continue
        rows.append(
            f"| {i} | {_cell(s.get('summary'))} | {_cell(s.get('priority'))} | "
            f"{fmt_points(s.get('storyPoints'))} | {_cell(s.get('assignee'))} | {_cell(s.get('components'))} |"
        )
    return "\n".join(rows)


def md_story_details(story: Dict[str, Any]) -> str:
    """Render one story as markdown (description + acceptance criteria)."""
    lines = [f"**{story.get('summary', '')}**", "", str(story.get("description", "")), ""]
    criteria = story.get("acceptanceCriteria") or []
    if criteria:
        lines.append("**Acceptance criteria**")
        lines.extend(f"- {c}" for c in criteria)
    labels = story.get("labels") or []
    if labels:
        lines.append("")
        lines.append("**Labels:** " + ", ".join(f"`{l}`" for l in labels))
    if story.get("epicLink"):
        lines.append(f"**Epic:** `{story['epicLink']}`")
    return "\n".join(lines)
