"""
Validation data types.
"""

from dataclasses import dataclass, field
from typing import Literal

from hybrid_selector.core.types import TokenUsage

ValidationAction = Literal["add", "remove"]
ChangeImportance = Literal["critical", "important", "optional"]


@dataclass
class ValidationRequest:
    """A selection to critique, with the repository it was drawn from."""

    all_files: list[str]
    selected_files: list[str]
    course_id: str
    course_name: str
    repo_url: str
    selection_method: str
    confidence: float


@dataclass
class ValidationSuggestions:
    """Files to add or drop, by category."""

    missing_critical: list[str] = field(default_factory=list)
    redundant_files: list[str] = field(default_factory=list)
    additional_recommended: list[str] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return len(self.missing_critical) + len(self.redundant_files)


@dataclass
class ValidationResult:
    """Outcome of validating a selection."""

    is_valid: bool
    confidence: float
    suggestions: ValidationSuggestions
    reasoning: str
    token_usage: TokenUsage = field(default_factory=TokenUsage)
    processing_time: float = 0.0  # milliseconds
    ai_reviewed: bool = False  # True if a model critique was merged in


@dataclass(frozen=True)
class ValidationChange:
    """One change applied to a selection."""

    action: ValidationAction
    file: str
    reason: str
    importance: ChangeImportance


@dataclass(frozen=True)
class ParsedCritique:
    """A model critique that parsed successfully."""

    is_valid: bool
    confidence: float
    suggestions: ValidationSuggestions
    reasoning: str
    ok: Literal[True] = True
