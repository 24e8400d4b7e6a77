"""
AI file selector data types.

Data classes for selection input and output, plus the tagged result of
parsing a model response.
"""

from dataclasses import dataclass, field
from typing import Literal

from hybrid_selector.core.types import CourseCriterion, TokenUsage

AISelectionMethod = Literal["ai_guided", "pattern_fallback"]


@dataclass
class AISelectionInput:
    """Input for AI-guided file selection."""

    repo_url: str
    course_id: str
    course_name: str
    criteria: list[CourseCriterion]
    files: list[str]
    max_files: int = 25


@dataclass
class AISelectionResult:
    """Result of AI-guided file selection."""

    selected_files: list[str]
    reasoning: str
    confidence: float
    method: AISelectionMethod = "ai_guided"
    token_usage: TokenUsage = field(default_factory=TokenUsage)
    processing_time: float = 0.0  # milliseconds
    used_fallback: bool = False  # True if the pattern fallback produced the files


@dataclass(frozen=True)
class ParsedSelection:
    """A model response that parsed into a selection."""

    files: list[str]
    reasoning: str
    confidence: float
    ok: Literal[True] = True


@dataclass(frozen=True)
class ParseFailure:
    """A model response that could not be parsed."""

    reason: str
    ok: Literal[False] = False


ParseResult = ParsedSelection | ParseFailure
