"""
Fingerprinter data types.
"""

import re
from dataclasses import dataclass, field

from hybrid_selector.services.signature import RepoSignature


@dataclass(frozen=True)
class RepoTypeTemplate:
    """Scoring template for one repository type."""

    # Regexes (searched, case-insensitive) worth 20 points each
    indicators: tuple[re.Pattern[str], ...]
    # Path substrings or regexes worth 30 points each; at least one must match
    required: tuple[str | re.Pattern[str], ...]
    # Directory substrings worth 15 points each
    directories: tuple[str, ...] = ()


@dataclass
class RepoTypeResult:
    """Detected repository type."""

    type: str  # One of the template names, or "unknown"
    confidence: float
    matched_patterns: list[str] = field(default_factory=list)


@dataclass
class RepositoryAnalysis:
    """Repository type plus structural signature."""

    type_result: RepoTypeResult
    signature: RepoSignature


@dataclass(frozen=True)
class FileSelectionStrategy:
    """Static glob tables for a repository type."""

    essential: tuple[str, ...]
    important: tuple[str, ...]
    supporting: tuple[str, ...]
    max_files: int
    confidence: float
