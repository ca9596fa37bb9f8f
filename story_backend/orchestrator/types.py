"""
Type definitions for work-item stories and the workflow state.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict

Priority = Literal["High", "Medium", "Low"]


class StoryPoints(BaseModel):
    """Estimates keyed by experience level."""
    model_config = ConfigDict(populate_by_name=True)

    junior: Union[int, float]
    mid_level: Union[int, float] = Field(alias="midLevel")
    senior: Union[int, float]


class WorkItem(BaseModel):
    """One Jira-style story derived from a UI design image."""
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    description: str
    acceptance_criteria: List[str] = Field(alias="acceptanceCriteria", min_length=3, max_length=5)
    story_points: StoryPoints = Field(alias="storyPoints")
    priority: Priority
    assignee: str
    labels: List[str] = Field(default_factory=list)
    epic_link: str = Field(default="", alias="epicLink")
    components: List[str] = Field(default_factory=list)


class State(TypedDict, total=False):
    """State definition for the story workflow (one invocation per upload)."""
    image_bytes: bytes
    mime_type: Optional[str]
    raw_text: Optional[str]                 # untrusted model reply
    stories: List[Dict[str, Any]]
    source: Literal["model", "fallback"]
    error: Optional[str]
