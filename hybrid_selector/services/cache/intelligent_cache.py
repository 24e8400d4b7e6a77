"""
Intelligent similarity cache - tier 1 of hybrid selection.

Reuses the selection of a previously evaluated repository whose signature is
similar enough to the current one. Store failures never propagate: a failed
lookup is a miss and a failed write is logged and dropped.
"""

import logging
import re
import time

from hybrid_selector.config.settings import Settings
from hybrid_selector.core.types import CourseCriterion
from hybrid_selector.services.cache.store import CacheStore, InMemoryCacheStore
from hybrid_selector.services.cache.types import (
    CachedStrategy,
    CacheResult,
    CacheStats,
    StrategyPerformance,
)
from hybrid_selector.services.signature import RepoSignature, SignatureGenerator

logger = logging.getLogger(__name__)

# Candidates at or below this similarity are not considered at all
MIN_CANDIDATE_SIMILARITY = 0.5
DEFAULT_SIMILARITY_THRESHOLD = 0.85


class IntelligentCache:
    """
    Similarity-based cache of past selection strategies.

    Lookups are scoped to one course: strategies cached for another course
    are never returned.
    """

    def __init__(
        self,
        store: CacheStore | None = None,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        signature_generator: SignatureGenerator | None = None,
    ) -> None:
        self.store = store or InMemoryCacheStore()
        self.similarity_threshold = similarity_threshold
        self.signature_generator = signature_generator or SignatureGenerator()
        self._lookups = 0
        self._hits = 0
        self._hit_similarity_total = 0.0

    @classmethod
    def from_settings(
        cls, settings: Settings, store: CacheStore | None = None
    ) -> "IntelligentCache":
        """Build a cache with an in-memory store sized from settings."""
        return cls(
            store=store
            or InMemoryCacheStore(
                ttl_seconds=settings.cache_ttl_seconds,
                max_entries=settings.max_cache_entries,
            ),
            similarity_threshold=settings.cache_similarity_threshold,
        )

    async def find_similar(
        self,
        signature: RepoSignature,
        course_id: str,
        criteria: list[CourseCriterion] | None = None,
    ) -> CacheResult | None:
        """
        Find the most similar cached strategy for a course.

        Args:
            signature: Signature of the repository being evaluated
            course_id: Only strategies for this course are considered
            criteria: Course criteria (reserved for coverage-aware ranking)

        Returns:
            CacheResult when the best candidate reaches the threshold, else None
        """
        start = time.perf_counter()
        self._lookups += 1

        try:
            candidates = await self.store.entries(course_id)
        except Exception as e:
            logger.warning(f"Cache lookup failed for {course_id}, treating as miss: {e}")
            return None

        best: CachedStrategy | None = None
        best_similarity = 0.0
        for strategy in candidates:
            if strategy.course_id != course_id:
                continue
            similarity = self.signature_generator.similarity(signature, strategy.signature)
            if similarity > MIN_CANDIDATE_SIMILARITY and similarity > best_similarity:
                best, best_similarity = strategy, similarity

        if best is None:
            logger.info(f"Cache miss for {course_id}: no similar strategies")
            return None

        if best_similarity < self.similarity_threshold:
            logger.info(
                f"Cache miss for {course_id}: best similarity {best_similarity:.2f} "
                f"below threshold {self.similarity_threshold}"
            )
            return None

        features = self.signature_generator.matched_features(signature, best.signature)
        self._hits += 1
        self._hit_similarity_total += best_similarity

        logger.info(
            f"Cache hit for {course_id}: strategy {best.id} "
            f"({best_similarity * 100:.1f}% similar, {len(best.selected_files)} files)"
        )
        return CacheResult(
            selected_files=list(best.selected_files),
            confidence=self._confidence(best_similarity, best.performance),
            reasoning=(
                f"Found cached strategy with {best_similarity * 100:.1f}% similarity. "
                f"Matched features: {', '.join(features)}."
            ),
            strategy_id=best.id,
            similarity=best_similarity,
            processing_time=(time.perf_counter() - start) * 1000,
            strategy=best,
            matched_features=features,
        )

    def _confidence(self, similarity: float, performance: StrategyPerformance) -> float:
        confidence = similarity
        confidence += performance.success_rate * 0.1
        confidence += min(performance.usage_count / 10, 0.1)
        return min(confidence, 1.0)

    async def put(
        self,
        signature: RepoSignature,
        course_id: str,
        selected_files: list[str],
        performance: StrategyPerformance,
    ) -> bool:
        """
        Cache a successful selection.

        Returns:
            True if the strategy was stored
        """
        now = time.time()
        entry = CachedStrategy(
            id=generate_strategy_id(signature, course_id, now),
            signature=signature,
            course_id=course_id,
            selected_files=tuple(selected_files),
            performance=performance,
            created_at=now,
        )
        return await self._write(entry)

    async def refresh(self, result: CacheResult, selected_files: list[str]) -> bool:
        """Supersede a hit with its validated selection and one more use."""
        old = result.strategy
        entry = CachedStrategy(
            id=old.id,
            signature=old.signature,
            course_id=old.course_id,
            selected_files=tuple(selected_files),
            performance=StrategyPerformance(
                accuracy=old.performance.accuracy,
                processing_time=old.performance.processing_time,
                evaluation_quality=old.performance.evaluation_quality,
                usage_count=old.performance.usage_count + 1,
                success_rate=old.performance.success_rate,
            ),
            created_at=max(time.time(), old.created_at),
        )
        return await self._write(entry)

    async def _write(self, entry: CachedStrategy) -> bool:
        try:
            stored = await self.store.put(entry)
        except Exception as e:
            logger.warning(f"Failed to cache strategy for {entry.course_id}: {e}")
            return False

        if stored:
            logger.info(
                f"Cached strategy {entry.id} ({len(entry.selected_files)} files, "
                f"usage {entry.performance.usage_count})"
            )
        return stored

    async def stats(self) -> CacheStats:
        """Cache size, hit rate and usage totals."""
        try:
            entries = await self.store.entries()
        except Exception as e:
            logger.warning(f"Failed to read cache stats: {e}")
            entries = []

        return CacheStats(
            size=len(entries),
            hit_rate=self._hits / self._lookups if self._lookups else 0.0,
            average_similarity=self._hit_similarity_total / self._hits if self._hits else 0.0,
            total_usage=sum(e.performance.usage_count for e in entries),
            lookups=self._lookups,
            hits=self._hits,
        )

    async def clear(self) -> None:
        """Drop every cached strategy and reset lookup counters."""
        await self.store.clear()
        self._lookups = 0
        self._hits = 0
        self._hit_similarity_total = 0.0


def generate_strategy_id(signature: RepoSignature, course_id: str, timestamp: float) -> str:
    """Build a unique, identifier-safe strategy id."""
    raw = f"{course_id}_{signature.pattern_hash}_{signature.size_category}_{int(timestamp * 1000)}"
    return re.sub(r"[^a-zA-Z0-9_]", "_", raw)
