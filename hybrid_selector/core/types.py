"""Shared value types used across the selection services."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CourseCriterion:
    """One scoring rubric item of a course."""

    name: str
    description: str
    max_score: int


@dataclass(frozen=True)
class TokenUsage:
    """Token accounting for a single model call."""

    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
        )
