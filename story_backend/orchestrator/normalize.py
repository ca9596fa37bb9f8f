"""
Normalization of model-produced text into a list of work-item records.

The vision model is asked for a bare JSON array but often wraps it in code
fences and lets quotation marks leak into string values. `normalize()` runs
a fixed list of small text transforms and then a strict JSON parse; anything
that still does not parse to a list is replaced by the caller-supplied
fallback sequence.

Known approximation: `escape_interior_quotes` guesses which quotes close a
string by looking at the next non-blank character. Escaped quotes are first
unescaped and then re-derived this way, so an interior quote followed by `,`
`:` `}` or `]` is misread even when the model escaped it. When that happens
the parse fails and the fallback is served.
"""

from __future__ import annotations

import copy
import json
import logging
import math
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\n?", flags=re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\n?```$")
_NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7E]")
_ARRAY_SPAN_RE = re.compile(r"\[\s*\{.*\}\s*\]", flags=re.DOTALL)

# What may follow the closing quote of a JSON string ("" is end of text).
_CLOSING_LOOKAHEAD = {":", ",", "}", "]", ""}


def trim(text: str) -> str:
    return text.strip()


def strip_code_fences(text: str) -> str:
    """Drop a leading ``` / ```json marker and a trailing ``` marker."""
    text = _FENCE_OPEN_RE.sub("", text)
    return _FENCE_CLOSE_RE.sub("", text)


def strip_backticks(text: str) -> str:
    return text.strip("`")


def replace_escaped_newlines(text: str) -> str:
    """Turn literal backslash-n sequences into a single space."""
    return text.replace("\\n", " ")


def unescape_quotes(text: str) -> str:
    return text.replace('\\"', '"')


def strip_non_printable(text: str) -> str:
    """Keep printable ASCII only (0x20-0x7E)."""
    return _NON_PRINTABLE_RE.sub("", text)


def _next_significant(text: str, start: int) -> str:
    for ch in text[start:]:
        if not ch.isspace():
            return ch
    return ""


def escape_interior_quotes(text: str) -> str:
    """Escape quotes that sit inside a string value instead of closing it.

    `{"description":"the "best" layout"}` becomes
    `{"description":"the \\"best\\" layout"}`. A quote counts as closing when
    the next non-blank character is a JSON separator or the end of the text.
    """
    out: List[str] = []
    in_string = False
    i = 0
    while i < len(text):
        ch = text[i]
        if in_string and ch == "\\" and i + 1 < len(text):
            out.append(text[i:i + 2])
            i += 2
            continue
        if ch == '"':
            if not in_string:
                in_string = True
                out.append(ch)
            elif _next_significant(text, i + 1) in _CLOSING_LOOKAHEAD:
                in_string = False
                out.append(ch)
            else:
                out.append('\\"')
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def extract_array_span(text: str) -> str:
    """Cut an object array out of surrounding prose.

    Only applies when the text starts with neither `[` nor `{`, so a bare
    object that itself holds arrays is never truncated.
    """
    if text.startswith("[") or text.startswith("{"):
        return text
    m = _ARRAY_SPAN_RE.search(text)
    return m.group(0) if m else text


def ensure_array_brackets(text: str) -> str:
    # An empty body stays empty so it fails to parse instead of becoming [].
    if not text or (text.startswith("[") and text.endswith("]")):
        return text
    return f"[{text}]"


CLEANUP_STEPS: Tuple[Tuple[str, Callable[[str], str]], ...] = (
    ("trim", trim),
    ("strip_code_fences", strip_code_fences),
    ("strip_backticks", strip_backticks),
    ("replace_escaped_newlines", replace_escaped_newlines),
    ("unescape_quotes", unescape_quotes),
    ("strip_non_printable", strip_non_printable),
    ("escape_interior_quotes", escape_interior_quotes),
    ("extract_array_span", extract_array_span),
    ("ensure_array_brackets", ensure_array_brackets),
)


def clean_model_text(raw_text: str) -> str:
    """Apply every cleanup step in order and return the candidate JSON text."""
    text = raw_text
    for name, step in CLEANUP_STEPS:
        cleaned = step(text)
        if cleaned != text:
            logger.debug("normalize[%s]: %r", name, cleaned[:200])
        text = cleaned
    return text


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {literal}")
    return value


def parse_stories(raw_text: Optional[str]) -> Optional[List[Dict[str, Any]]]:
    """Return the parsed story list, or None when the text cannot be trusted.

    The parse is strict JSON: NaN, Infinity and overflowing numbers are
    rejected so the result can always be serialized back to JSON.
    """
    if not raw_text or not raw_text.strip():
        logger.debug("normalize: empty model text")
        return None
    candidate = clean_model_text(raw_text)
    try:
        parsed = json.loads(candidate, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError) as e:
        logger.warning("normalize: model text did not parse as JSON: %s", e)
        return None
    if not isinstance(parsed, list):
        logger.warning("normalize: parsed value is %s, not a list", type(parsed).__name__)
        return None
    return parsed


def normalize_reply(raw_text: Optional[str], fallback: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], bool]:
    """Like `normalize`, also telling whether the model text was used (True) or the fallback (False)."""
    stories = parse_stories(raw_text)
    if stories is None:
        logger.warning("normalize: serving fallback stories (%d)", len(fallback))
        return copy.deepcopy(fallback), False
    return stories, True


def normalize(raw_text: Optional[str], fallback: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Turn untrusted model text into a story list. Never raises."""
    return normalize_reply(raw_text, fallback)[0]
