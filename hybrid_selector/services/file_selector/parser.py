"""
AI file selector response parsing.

Parses the model's JSON response and repairs the path mistakes models
commonly make before validating against the repository file list.
"""

import json
import re

from hybrid_selector.services.file_selector.constants import (
    DEFAULT_AI_CONFIDENCE,
    GITHUB_PREFIX,
    SCRIPTS_PREFIX,
)
from hybrid_selector.services.file_selector.types import (
    ParsedSelection,
    ParseFailure,
    ParseResult,
)

# Greedy: first "{" through last "}"
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

NO_REASONING = "No reasoning provided"


def parse_response(response_text: str, available_files: list[str]) -> ParseResult:
    """
    Parse a selection response and validate file paths.

    Handles JSON wrapped in prose or markdown code blocks. Each returned path
    is repaired when needed and kept only if it exists in the repository.

    Args:
        response_text: Raw response text from the model
        available_files: Every file path in the repository

    Returns:
        ParsedSelection (possibly with no files) or ParseFailure with a reason
    """
    match = _JSON_OBJECT_RE.search(response_text)
    if not match:
        return ParseFailure(reason="No JSON found in AI response")

    try:
        parsed = json.loads(match.group())
    except json.JSONDecodeError as e:
        return ParseFailure(reason=f"Invalid JSON in AI response: {e.msg}")

    if not isinstance(parsed, dict) or not isinstance(parsed.get("selectedFiles"), list):
        return ParseFailure(reason="Invalid response structure: selectedFiles must be an array")

    available_set = set(available_files)
    selected: list[str] = []
    selected_set: set[str] = set()
    for raw_path in parsed["selectedFiles"]:
        if not isinstance(raw_path, str):
            continue
        path = repair_path(raw_path, available_set, available_files)
        if path and path not in selected_set:
            selected.append(path)
            selected_set.add(path)

    reasoning = parsed.get("reasoning")
    if not isinstance(reasoning, str) or not reasoning:
        reasoning = NO_REASONING

    return ParsedSelection(
        files=selected,
        reasoning=reasoning,
        confidence=clamp_confidence(parsed.get("confidence")),
    )


def repair_path(path: str, available_set: set[str], available_files: list[str]) -> str | None:
    """
    Map a model-returned path onto a real repository path.

    Tries, in order: the path as given, without a leading "./", with a
    missing leading dot restored on "github/", and a unique suffix match
    for "scripts/" paths the model lifted out of a subdirectory.

    Returns:
        The matching repository path, or None if nothing matches
    """
    candidate = path.strip()
    if candidate in available_set:
        return candidate

    if candidate.startswith("./"):
        candidate = candidate[2:]
        if candidate in available_set:
            return candidate

    if candidate.startswith(GITHUB_PREFIX):
        dotted = f".{candidate}"
        if dotted in available_set:
            return dotted

    if candidate.startswith(SCRIPTS_PREFIX):
        matches = [f for f in available_files if f.endswith(f"/{candidate}")]
        if len(matches) == 1:
            return matches[0]

    return None


def clamp_confidence(value: object) -> float:
    """Coerce a model-reported confidence into [0, 1]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_AI_CONFIDENCE
    return max(0.0, min(1.0, float(value)))
