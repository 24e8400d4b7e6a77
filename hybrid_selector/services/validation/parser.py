"""
Validation response parsing.
"""

import json
import re

from hybrid_selector.services.file_selector.parser import NO_REASONING, clamp_confidence
from hybrid_selector.services.file_selector.types import ParseFailure
from hybrid_selector.services.validation.types import ParsedCritique, ValidationSuggestions

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def parse_validation_response(response_text: str) -> ParsedCritique | ParseFailure:
    """
    Parse a model critique.

    Suggestion lists that are missing or not arrays become empty lists;
    non-string entries are dropped.

    Returns:
        ParsedCritique, or ParseFailure if no JSON object could be read
    """
    match = _JSON_OBJECT_RE.search(response_text)
    if not match:
        return ParseFailure(reason="No JSON found in response")

    try:
        parsed = json.loads(match.group())
    except json.JSONDecodeError as e:
        return ParseFailure(reason=f"Invalid JSON in response: {e.msg}")

    if not isinstance(parsed, dict):
        return ParseFailure(reason="Invalid response structure: expected an object")

    raw_suggestions = parsed.get("suggestions")
    if not isinstance(raw_suggestions, dict):
        raw_suggestions = {}

    reasoning = parsed.get("reasoning")
    if not isinstance(reasoning, str) or not reasoning:
        reasoning = NO_REASONING

    return ParsedCritique(
        is_valid=parsed.get("isValid") is True,
        confidence=clamp_confidence(parsed.get("confidence")),
        suggestions=ValidationSuggestions(
            missing_critical=_string_list(raw_suggestions.get("missingCritical")),
            redundant_files=_string_list(raw_suggestions.get("redundantFiles")),
            additional_recommended=_string_list(raw_suggestions.get("additionalRecommended")),
        ),
        reasoning=reasoning,
    )


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
