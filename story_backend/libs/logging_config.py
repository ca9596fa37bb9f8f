"""Centralized logging configuration for the story backend."""

import logging
import sys


def configure_logging(level=logging.INFO) -> None:
    """Configure app-wide logging. Call once at startup."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # SDK request chatter
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)
