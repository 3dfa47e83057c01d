"""Extraction of the JSON analysis object from free-form model output."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import ValidationError

from commitsight.errors import ResponseParseError
from commitsight.models.analysis import AnalysisResult

if TYPE_CHECKING:
    from collections.abc import Iterator

_JSON_FENCE = "```json"
_FENCE = "```"


def _tagged_fence(text: str) -> str | None:
    start = text.find(_JSON_FENCE)
    if start < 0:
        return None
    start += len(_JSON_FENCE)
    end = text.find(_FENCE, start)
    if end < 0:
        return None
    return text[start:end].strip()


def _generic_fence(text: str) -> str | None:
    start = text.find(_FENCE)
    if start < 0:
        return None
    start += len(_FENCE)
    # skip the info string on the opening line
    newline = text.find("\n", start)
    if newline >= 0:
        start = newline + 1
    end = text.find(_FENCE, start)
    if end < 0:
        return None
    content = text[start:end].strip()
    return content if content.startswith("{") else None


def _balanced_object(text: str) -> str | None:
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if escaped:
            escaped = False
        elif char == "\\" and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
        elif in_string:
            continue
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def iter_json_candidates(text: str) -> Iterator[str]:
    """Yield candidate JSON snippets in order of precedence."""

    for strategy in (_tagged_fence, _generic_fence, _balanced_object):
        candidate = strategy(text)
        if candidate:
            yield candidate


def extract_json(text: str) -> str:
    for candidate in iter_json_candidates(text):
        return candidate
    raise ResponseParseError("No valid JSON found in response")


def parse_analysis_response(text: str) -> AnalysisResult:
    """Parse model output into an ``AnalysisResult``.

    The first extraction strategy that finds a snippet wins; if that snippet is
    not a valid analysis object the response is rejected.
    """

    snippet = extract_json(text)
    try:
        payload = json.loads(snippet)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Failed to parse analysis response: {exc}") from exc
    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as exc:
        raise ResponseParseError(f"Analysis response does not match schema: {exc}") from exc
