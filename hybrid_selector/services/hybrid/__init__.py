"""
Hybrid selection package: the three-tier orchestrator.

Module structure:
- selector.py: Main HybridSelector class and selection finalization
- types.py: Data types (HybridSelectionRequest, HybridSelectionResult, PerformanceStats)
- constants.py: Confidence policy and minimal fallback patterns
"""

from hybrid_selector.services.hybrid.constants import (
    CRITERION_SELECTION_CONFIDENCE,
    FALLBACK_MAX_CONFIDENCE,
    FALLBACK_MIN_CONFIDENCE,
    VALIDATION_CONFIDENCE_BONUS,
)
from hybrid_selector.services.hybrid.selector import (
    HybridSelector,
    finalize_selection,
    minimal_essential_selection,
)
from hybrid_selector.services.hybrid.types import (
    HybridSelectionRequest,
    HybridSelectionResult,
    PerformanceStats,
    TierTimings,
)

__all__ = [
    # Main class
    "HybridSelector",
    # Types
    "HybridSelectionRequest",
    "HybridSelectionResult",
    "PerformanceStats",
    "TierTimings",
    # Constants
    "CRITERION_SELECTION_CONFIDENCE",
    "FALLBACK_MAX_CONFIDENCE",
    "FALLBACK_MIN_CONFIDENCE",
    "VALIDATION_CONFIDENCE_BONUS",
    # Utilities
    "finalize_selection",
    "minimal_essential_selection",
]
