"""
Cache package for tier 1 of hybrid selection.

Module structure:
- intelligent_cache.py: Main IntelligentCache class (similarity lookups)
- store.py: CacheStore interface and the in-memory TTL store
- types.py: Data types (CachedStrategy, CacheResult, CacheStats)
- warming.py: CacheWarmer for common project layouts
"""

from hybrid_selector.services.cache.intelligent_cache import (
    DEFAULT_SIMILARITY_THRESHOLD,
    MIN_CANDIDATE_SIMILARITY,
    IntelligentCache,
    generate_strategy_id,
)
from hybrid_selector.services.cache.store import CacheStore, InMemoryCacheStore
from hybrid_selector.services.cache.types import (
    CachedStrategy,
    CacheResult,
    CacheStats,
    StrategyPerformance,
    strategy_key,
)
from hybrid_selector.services.cache.warming import (
    CacheWarmer,
    WarmingPattern,
    WarmingStats,
    default_patterns,
)

__all__ = [
    # Main classes
    "IntelligentCache",
    "CacheWarmer",
    # Stores
    "CacheStore",
    "InMemoryCacheStore",
    # Types
    "CachedStrategy",
    "CacheResult",
    "CacheStats",
    "StrategyPerformance",
    "WarmingPattern",
    "WarmingStats",
    # Constants
    "DEFAULT_SIMILARITY_THRESHOLD",
    "MIN_CANDIDATE_SIMILARITY",
    # Utilities
    "default_patterns",
    "generate_strategy_id",
    "strategy_key",
]
