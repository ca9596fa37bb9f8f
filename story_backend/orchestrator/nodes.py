"""
LangGraph nodes for turning an uploaded image into stories.
"""

import copy
import logging
from typing import Callable

import openai

from story_backend.libs.llm_vision import UpstreamHTTPError, request_stories
from story_backend.libs.settings import Settings
from .fallback import FALLBACK_STORIES
from .normalize import normalize_reply
from .types import State

logger = logging.getLogger(__name__)


def make_image_vision_node(settings: Settings, client) -> Callable[[State], State]:
    """Build the node that calls the vision model with the workflow's settings."""

    def image_vision_node(state: State) -> State:
        """Ask the vision model for stories; record (not raise) absorbable failures."""
        if not settings.xai_api_key:
            logger.warning("XAI_API_KEY is not configured; skipping the model call")
            return {"raw_text": None, "error": "API key not configured."}
        try:
            raw_text = request_stories(client, settings, state["image_bytes"], state.get("mime_type"))
        except openai.APIStatusError as e:
            text = e.response.text if getattr(e, "response", None) is not None else str(e)
            if settings.strict:
                raise UpstreamHTTPError(e.status_code, text) from e
            logger.error("vision API returned %s: %s", e.status_code, text)
            return {"raw_text": None, "error": f"upstream status {e.status_code}"}
        except openai.OpenAIError as e:
            logger.error("vision API call failed: %s", e)
            return {"raw_text": None, "error": str(e)}
        if not raw_text:
            logger.warning("vision API returned no content")
            return {"raw_text": None, "error": "No content in API response."}
        return {"raw_text": raw_text}

    return image_vision_node


def normalize_node(state: State) -> State:
    """Clean and parse the model reply; substitute the fallback if it will not parse."""
    stories, parsed = normalize_reply(state.get("raw_text"), FALLBACK_STORIES)
    if not parsed:
        return {"stories": stories, "source": "fallback", "error": "Failed to parse API response."}
    logger.info("parsed %d stories from the model reply", len(stories))
    return {"stories": stories, "source": "model"}


def fallback_node(state: State) -> State:
    """Serve the hand-authored stories."""
    logger.warning("serving fallback stories: %s", state.get("error") or "no model reply")
    return {"stories": copy.deepcopy(FALLBACK_STORIES), "source": "fallback"}
