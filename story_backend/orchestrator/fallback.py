"""
Hand-authored stories served whenever the model reply cannot be used.
"""

from typing import Any, Dict, List

from .types import WorkItem

_FALLBACK_ITEMS = [
    WorkItem(
        summary="Build the main screen layout",
        description=(
            "Implement the page structure shown in the design: header, primary content "
            "area and footer, using the shared component library and responsive breakpoints."
        ),
        acceptanceCriteria=[
            "Layout matches the design at desktop, tablet and mobile widths",
            "Header and footer are reusable components",
            "No horizontal scrolling on viewports 320px and wider",
        ],
        storyPoints={"junior": 5, "midLevel": 3, "senior": 2},
        priority="High",
        assignee="Frontend Team",
        labels=["ui", "layout"],
        epicLink="",
        components=["UI"],
    ),
    WorkItem(
        summary="Implement interactive form controls",
        description=(
            "Build the inputs, buttons and validation states visible in the design, "
            "including disabled, focus and error styles."
        ),
        acceptanceCriteria=[
            "All inputs show inline validation messages",
            "Buttons expose hover, focus and disabled states",
            "Controls are reachable and operable by keyboard",
            "Form submission is blocked while required fields are empty",
        ],
        storyPoints={"junior": 8, "midLevel": 5, "senior": 3},
        priority="Medium",
        assignee="Frontend Team",
        labels=["ui", "forms", "accessibility"],
        epicLink="",
        components=["UI"],
    ),
    WorkItem(
        summary="Connect the screen to backend data",
        description=(
            "Wire the screen to the API endpoints that provide and persist its data, "
            "with loading and error states."
        ),
        acceptanceCriteria=[
            "Data is fetched when the screen loads",
            "A loading indicator is shown while requests are in flight",
            "API errors are shown to the user with a retry option",
        ],
        storyPoints={"junior": 8, "midLevel": 5, "senior": 3},
        priority="Medium",
        assignee="Full Stack Team",
        labels=["integration", "api"],
        epicLink="",
        components=["UI", "API"],
    ),
]

FALLBACK_STORIES: List[Dict[str, Any]] = [item.model_dump(by_alias=True) for item in _FALLBACK_ITEMS]
