"""
JSON extraction from model responses.

Models are told to answer with a bare JSON object but routinely wrap it in
prose or ```json fences. We take the widest {...} span first, then the whole
response, and give up with ParseError.
"""

import json
import re
from typing import Any

from errors import ParseError

# Greedy: first "{" through last "}", across lines
_OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


def _load_object(candidate: str) -> dict[str, Any] | None:
    try:
        data = json.loads(candidate)
    except (json.JSONDecodeError, TypeError):
        return None
    return data if isinstance(data, dict) else None


def extract_json_object(raw: str) -> dict[str, Any]:
    """
    Parse the JSON object embedded in a model response.

    Args:
        raw: Raw message content from the LLM

    Returns:
        The parsed object. No schema validation is applied.

    Raises:
        ParseError: if no JSON object can be recovered
    """
    if not isinstance(raw, str) or not raw.strip():
        raise ParseError("Empty model response")

    match = _OBJECT_SPAN.search(raw)
    if match:
        span = match.group(0)
        data = _load_object(span)
        if data is None:
            # Clean up common LLM JSON issues
            data = _load_object(_TRAILING_COMMA.sub(r"\1", span))
        if data is not None:
            return data

    data = _load_object(raw.strip())
    if data is not None:
        return data

    raise ParseError(f"No JSON object in model response: {raw[:100]!r}")
