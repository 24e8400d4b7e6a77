"""
Hybrid selection data types.
"""

from dataclasses import dataclass, field
from typing import Literal

from hybrid_selector.core.types import CourseCriterion, TokenUsage

SelectionMethod = Literal["cache", "fingerprint", "ai_guided"]
TierUsed = Literal[1, 2, 3]


@dataclass
class HybridSelectionRequest:
    """A repository to select evaluation files from."""

    repo_url: str
    course_id: str
    course_name: str
    criteria: list[CourseCriterion]
    files: list[str]
    max_files: int | None = None  # Defaults to settings.max_files_per_evaluation


@dataclass
class TierTimings:
    """Milliseconds spent per tier; None for tiers that did not run."""

    tier1_time: float | None = None
    tier2_time: float | None = None
    tier3_time: float | None = None
    validation_time: float | None = None


@dataclass(frozen=True)
class HybridSelectionResult:
    """Final selection with provenance."""

    selected_files: list[str]
    method: SelectionMethod
    confidence: float
    reasoning: str
    tier_used: TierUsed
    cache_hit: bool = False
    validation_applied: bool = False
    fallback_used: bool = False
    token_usage: TokenUsage = field(default_factory=TokenUsage)
    processing_time: float = 0.0  # milliseconds
    performance: TierTimings = field(default_factory=TierTimings)


@dataclass
class PerformanceStats:
    """Aggregate figures over every selection made by one HybridSelector."""

    total_selections: int = 0
    tier1_usage: float = 0.0  # Share of selections answered by each tier
    tier2_usage: float = 0.0
    tier3_usage: float = 0.0
    fallback_rate: float = 0.0
    average_processing_time: float = 0.0  # milliseconds
    average_token_usage: float = 0.0
    cache_hit_rate: float = 0.0
