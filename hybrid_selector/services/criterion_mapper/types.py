"""
Criterion mapper data types.

Data classes for per-course file mappings and per-request coverage.
"""

from dataclasses import dataclass, field

from hybrid_selector.core.types import CourseCriterion


@dataclass(frozen=True)
class CriterionFileMapping:
    """Static knowledge of which files evidence a criterion."""

    criterion_name: str
    file_patterns: tuple[str, ...]
    content_keywords: tuple[str, ...]
    priority: int
    max_files: int
    weight: int


@dataclass
class CriterionCoverage:
    """How well the repository's files cover one criterion."""

    criterion_name: str
    relevant_files: list[str]
    coverage: float  # 0-1
    confidence: float
    missing_elements: list[str] = field(default_factory=list)


__all__ = ["CourseCriterion", "CriterionCoverage", "CriterionFileMapping"]
