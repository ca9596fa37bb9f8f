# settings.py
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from dotenv import load_dotenv

FAILURE_POLICIES = ("fallback", "strict")
DEFAULT_CORS_ORIGIN = "https://jira-story-backend.onrender.com"


@dataclass(frozen=True)
class Settings:
    """Configuration read once at startup and handed to the app and workflow."""
    xai_api_key: Optional[str] = None
    xai_base_url: str = "https://api.x.ai/v1"
    xai_model: str = "grok-vision-beta"
    max_tokens: int = 1000
    temperature: float = 0.0
    timeout: float = 60.0
    story_count: int = 5
    # fallback: always answer 200 with some stories; strict: surface config/upstream errors
    failure_policy: str = "fallback"
    cors_origins: Tuple[str, ...] = field(default=(DEFAULT_CORS_ORIGIN,))
    port: int = 3000
    log_level: str = "INFO"

    def __post_init__(self):
        if self.failure_policy not in FAILURE_POLICIES:
            raise ValueError(
                f"STORY_FAILURE_POLICY must be one of {', '.join(FAILURE_POLICIES)}, got {self.failure_policy!r}"
            )

    @property
    def strict(self) -> bool:
        return self.failure_policy == "strict"


def _split_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return (DEFAULT_CORS_ORIGIN,)
    return tuple(o.strip() for o in raw.split(",") if o.strip())


def load_settings() -> Settings:
    """Load settings from the environment (and `.env`, if present)."""
    load_dotenv()  # .env in the working directory, if any
    return Settings(
        xai_api_key=os.getenv("XAI_API_KEY") or None,
        xai_base_url=os.getenv("XAI_BASE_URL", "https://api.x.ai/v1"),
        xai_model=os.getenv("XAI_MODEL", "grok-vision-beta"),
        max_tokens=int(os.getenv("XAI_MAX_TOKENS", "1000")),
        temperature=float(os.getenv("XAI_TEMPERATURE", "0")),
        timeout=float(os.getenv("XAI_TIMEOUT", "60")),
        story_count=int(os.getenv("STORY_COUNT", "5")),
        failure_policy=os.getenv("STORY_FAILURE_POLICY", "fallback").strip().lower(),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS")),
        port=int(os.getenv("PORT", "3000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
