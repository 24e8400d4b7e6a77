"""
Cache data types.

Entries are immutable: a refresh stores a new entry that supersedes the old
one under the same key rather than mutating it in place.
"""

from dataclasses import dataclass, field
from typing import Literal

from hybrid_selector.services.signature import RepoSignature


@dataclass(frozen=True)
class StrategyPerformance:
    """Observed quality of a cached selection."""

    accuracy: float
    processing_time: float  # milliseconds
    evaluation_quality: float
    usage_count: int = 1
    success_rate: float = 1.0


@dataclass(frozen=True)
class CachedStrategy:
    """A stored (signature, course) -> selection record."""

    id: str
    signature: RepoSignature
    course_id: str
    selected_files: tuple[str, ...]
    performance: StrategyPerformance
    created_at: float  # Unix timestamp, orders writes to the same key

    @property
    def key(self) -> str:
        """Store key; one live entry per course, structure and size."""
        return strategy_key(self.course_id, self.signature)


def strategy_key(course_id: str, signature: RepoSignature) -> str:
    """Build the store key for a course and signature."""
    return f"{course_id}:{signature.pattern_hash}:{signature.size_category}"


@dataclass(frozen=True)
class CacheResult:
    """A cache hit above the similarity threshold."""

    selected_files: list[str]
    confidence: float
    reasoning: str
    strategy_id: str
    similarity: float
    processing_time: float  # milliseconds
    strategy: CachedStrategy
    matched_features: list[str] = field(default_factory=list)
    method: Literal["cache"] = "cache"
    cache_hit: bool = True


@dataclass
class CacheStats:
    """Cache size and lookup effectiveness."""

    size: int
    hit_rate: float
    average_similarity: float
    total_usage: int
    lookups: int = 0
    hits: int = 0
