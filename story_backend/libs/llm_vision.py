# llm_vision.py
from __future__ import annotations
import base64
import logging
from typing import Any, Dict, List, Optional
from openai import OpenAI

from .settings import Settings
from .prompts import SYSTEM_PROMPT, get_story_prompt

logger = logging.getLogger(__name__)


class UpstreamHTTPError(Exception):
    """Non-2xx answer from the completion API, kept for passthrough to the caller."""

    def __init__(self, status_code: int, text: str):
        super().__init__(f"upstream returned {status_code}: {text}")
        self.status_code = status_code
        self.text = text


def make_client(settings: Settings) -> OpenAI:
    """OpenAI SDK client pointed at the xAI (OpenAI-compatible) endpoint."""
    return OpenAI(
        api_key=settings.xai_api_key,
        base_url=settings.xai_base_url,
        timeout=settings.timeout,
    )


def image_data_uri(image_bytes: bytes, mime_type: Optional[str]) -> str:
    """Encode an upload as `data:image/<subtype>;base64,...`."""
    subtype = "png"
    if mime_type and "/" in mime_type:
        subtype = mime_type.split("/", 1)[1].strip() or "png"
    b64 = base64.b64encode(image_bytes).decode("ascii")
    return f"data:image/{subtype};base64,{b64}"


def build_messages(data_uri: str, story_count: int = 5) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": get_story_prompt(story_count)},
                {"type": "image_url", "image_url": {"url": data_uri}},
            ],
        },
    ]


def request_stories(client: OpenAI, settings: Settings, image_bytes: bytes, mime_type: Optional[str]) -> Optional[str]:
    """Send the image to the vision model and return its raw reply text.

    SDK errors (`openai.APIStatusError`, `openai.APIConnectionError`, ...)
    propagate; the workflow decides whether they reach the HTTP caller.
    """
    messages = build_messages(image_data_uri(image_bytes, mime_type), settings.story_count)
    logger.info("requesting %d stories from %s (%d image bytes)", settings.story_count, settings.xai_model, len(image_bytes))
    resp = client.chat.completions.create(
        model=settings.xai_model,
        messages=messages,
        stream=False,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
    )
    choices = getattr(resp, "choices", None) or []
    if not choices:
        logger.warning("completion response had no choices")
        return None
    content = choices[0].message.content
    logger.debug("raw model reply: %r", (content or "")[:500])
    return content
