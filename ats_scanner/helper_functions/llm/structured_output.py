"""structured_output.py
Best-effort extraction of a JSON payload from free-form LLM output.

Every function here is pure and returns None on malformed text, so callers
compose it with their own default value:

    >>> parsed = try_parse_structured(response, "object")
    >>> profile = coerce(parsed) if parsed is not None else DEFAULT
"""
import json
import re
from typing import Any, Literal, Optional

StructuredKind = Literal["object", "array"]

# Greedy: from the first opening bracket to the last closing one
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")

_MARKUP_TAG_PATTERN = re.compile(r"<[^>]*>")
_LEADING_FENCE_PATTERN = re.compile(r"^(```json|```|json)\s*", re.IGNORECASE)
_TRAILING_FENCE_PATTERN = re.compile(r"```\s*$")


def clean_llm_response(response_text: str) -> str:
    """
    Normalize an LLM response before searching it for JSON.

    Steps:
        1. Trim leading/trailing whitespace.
        2. Remove markup-like tags such as `<answer>` (the tags only, not their content).
        3. Remove a leading ```json / ``` / json marker.
        4. Remove a trailing ``` fence.
    """
    text = (response_text or "").strip()
    text = _MARKUP_TAG_PATTERN.sub("", text).strip()
    text = _LEADING_FENCE_PATTERN.sub("", text)
    text = _TRAILING_FENCE_PATTERN.sub("", text)
    return text.strip()


def extract_json_object(text: str) -> Optional[str]:
    """Return the substring from the first `{` to the last `}`, or None."""
    match = _OBJECT_PATTERN.search(text or "")
    return match.group(0) if match else None


def extract_json_array(text: str) -> Optional[str]:
    """Return the substring from the first `[` to the last `]`, or None."""
    match = _ARRAY_PATTERN.search(text or "")
    return match.group(0) if match else None


def try_parse_structured(text: str, kind: StructuredKind) -> Optional[Any]:
    """
    Locate and decode the first JSON object or array embedded in `text`.

    Args:
        text (str): Raw or cleaned LLM output.
        kind (Literal["object", "array"]): Which JSON container to look for.

    Returns:
        dict | list | None: The decoded container, or None if nothing was found,
            the candidate is not valid JSON, or it decodes to the wrong type.
    """
    if kind == "object":
        candidate, expected_type = extract_json_object(text), dict
    elif kind == "array":
        candidate, expected_type = extract_json_array(text), list
    else:
        raise ValueError(f"Unsupported structured kind: {kind!r}")

    if candidate is None:
        return None

    try:
        parsed = json.loads(candidate)
    except (json.JSONDecodeError, RecursionError):
        return None

    if not isinstance(parsed, expected_type):
        return None
    return parsed
