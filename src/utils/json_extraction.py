"""
JSON extraction from model output.

Models sometimes wrap structured output in a markdown code fence, either bare
(```` ``` ````) or tagged (```` ```json ````). Exactly one wrapping fence pair
is removed; anything else is left for the JSON decoder to reject.
"""

import json
import re
from typing import Any

FENCE = "```"

# Language tag directly after the opening fence, e.g. "json" in ```json
_FENCE_TAG = re.compile(r"[A-Za-z][\w+-]*")


class JSONExtractionError(ValueError):
    """Raised when model output is not valid JSON after fence stripping."""

    def __init__(self, message: str, content: str):
        self.content = content
        super().__init__(message)


def strip_code_fence(text: str) -> str:
    """
    Remove one leading/trailing code fence pair and surrounding whitespace.

    Text that does not start with a fence is only trimmed.
    """
    text = text.strip()
    if not text.startswith(FENCE):
        return text

    inner = text[len(FENCE):]
    tag = _FENCE_TAG.match(inner)
    if tag:
        inner = inner[tag.end():]
    if inner.endswith(FENCE):
        inner = inner[: -len(FENCE)]
    return inner.strip()


def extract_json(text: str) -> Any:
    """Strip an optional code fence and decode the remainder as JSON."""
    cleaned = strip_code_fence(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise JSONExtractionError(f"model did not return valid JSON: {e}", cleaned) from e
