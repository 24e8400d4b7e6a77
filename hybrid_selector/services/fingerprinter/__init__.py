"""
Repository fingerprinter package.

Detects repository type by weighted template scoring and selects files via
criteria, semantic analysis or static per-type tables.

Module structure:
- fingerprinter.py: Main RepositoryFingerprinter class
- types.py: Data types (RepoTypeResult, RepositoryAnalysis, FileSelectionStrategy)
- constants.py: Repository type templates and static selection tables
"""

from hybrid_selector.services.fingerprinter.constants import (
    DEFAULT_STRATEGY,
    REPO_TYPE_PATTERNS,
    SELECTION_STRATEGIES,
    UNKNOWN_REPO_TYPE,
)
from hybrid_selector.services.fingerprinter.fingerprinter import RepositoryFingerprinter
from hybrid_selector.services.fingerprinter.types import (
    FileSelectionStrategy,
    RepositoryAnalysis,
    RepoTypeResult,
    RepoTypeTemplate,
)

__all__ = [
    # Main class
    "RepositoryFingerprinter",
    # Types
    "FileSelectionStrategy",
    "RepositoryAnalysis",
    "RepoTypeResult",
    "RepoTypeTemplate",
    # Constants
    "DEFAULT_STRATEGY",
    "REPO_TYPE_PATTERNS",
    "SELECTION_STRATEGIES",
    "UNKNOWN_REPO_TYPE",
]
