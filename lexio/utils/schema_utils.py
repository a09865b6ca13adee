"""
JSON extraction and validation for LLM output.

LLM replies are decoded in two stages: first a candidate JSON substring is
extracted (markdown fences removed), then it is decoded and validated against
a Pydantic type. Either stage raises, so callers can fall back on one except.
"""

import json
import re
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from lexio.exceptions import LLMError


T = TypeVar("T")

_FENCE_PATTERN = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


class LLMOutputError(LLMError):
    """Raised when LLM output cannot be extracted, parsed or validated."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Unusable output from {source}: {reason}")
        self.source = source
        self.reason = reason


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` (or bare ```) fence if present."""
    cleaned = text.strip()
    match = _FENCE_PATTERN.match(cleaned)
    if match:
        return match.group(1).strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def extract_json_candidate(text: Any, source: str = "llm") -> str:
    """Stage one: return the JSON substring of an LLM reply."""
    if not isinstance(text, str) or not text.strip():
        raise LLMOutputError(source, "empty response")
    candidate = strip_code_fence(text)
    if not candidate:
        raise LLMOutputError(source, "empty response")
    return candidate


def decode_json_as(candidate: str, target: Any, source: str = "llm") -> Any:
    """Stage two: parse the candidate and validate it against a type."""
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise LLMOutputError(source, f"invalid JSON ({e.msg})") from e
    try:
        return TypeAdapter(target).validate_python(data)
    except ValidationError as e:
        raise LLMOutputError(source, f"schema mismatch ({e.error_count()} errors)") from e


def parse_llm_json(text: Any, target: Any, source: str = "llm") -> Any:
    """Extract and decode in one call."""
    return decode_json_as(extract_json_candidate(text, source), target, source)
