"""
Criterion mapper package for criterion-driven file selection.

Maps each course criterion to glob patterns and keyword hints, scores how
well a repository covers each criterion, and selects a bounded file set.

Module structure:
- mapper.py: Main CriterionMapper class
- types.py: Data types (CriterionFileMapping, CriterionCoverage)
- constants.py: Per-course mapping tables and limits
"""

from hybrid_selector.services.criterion_mapper.constants import (
    CRITERION_MAPPINGS,
    MAX_FILES_PER_EVALUATION,
    MAX_TEST_FILES,
    MISSING_MAPPING_NOTE,
)
from hybrid_selector.services.criterion_mapper.mapper import CriterionMapper
from hybrid_selector.services.criterion_mapper.types import (
    CriterionCoverage,
    CriterionFileMapping,
)

__all__ = [
    # Main class
    "CriterionMapper",
    # Types
    "CriterionCoverage",
    "CriterionFileMapping",
    # Constants
    "CRITERION_MAPPINGS",
    "MAX_FILES_PER_EVALUATION",
    "MAX_TEST_FILES",
    "MISSING_MAPPING_NOTE",
]
