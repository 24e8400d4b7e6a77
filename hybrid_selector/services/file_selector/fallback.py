"""
AI file selector fallback logic.

Deterministic pattern-based selections used when the model is unavailable,
returns nothing usable, or when running in mock mode.
"""

import re

from hybrid_selector.services.file_filters import (
    is_binary_or_media,
    is_large_dependency_file,
    is_noise_path,
)
from hybrid_selector.services.file_selector.constants import (
    FALLBACK_FILES_PER_PATTERN,
    FALLBACK_PATTERNS,
    MOCK_COURSE_PATTERNS,
    MOCK_FILES_PER_COURSE_PATTERN,
    MOCK_FILES_PER_GENERAL_PATTERN,
    MOCK_GENERAL_PATTERNS,
)

_README_RE = re.compile(r"README\.(md|txt)$", re.IGNORECASE)


def filter_candidates(files: list[str]) -> list[str]:
    """Drop binary, media, noise and large dependency files; they are never offered to the model."""
    return [
        f
        for f in files
        if not is_binary_or_media(f) and not is_large_dependency_file(f) and not is_noise_path(f)
    ]


def pattern_fallback(files: list[str], max_files: int) -> list[str]:
    """
    Select files by a fixed list of patterns.

    Takes up to FALLBACK_FILES_PER_PATTERN new matches for each pattern in
    order (README, requirements, package.json, Dockerfile, source files,
    notebooks, docs) until max_files is reached.

    Args:
        files: Candidate file paths
        max_files: Maximum files to select

    Returns:
        Selected file paths in pattern order
    """
    selected: list[str] = []
    selected_set: set[str] = set()

    for pattern in FALLBACK_PATTERNS:
        if len(selected) >= max_files:
            break
        _take_matches(pattern, files, FALLBACK_FILES_PER_PATTERN, max_files, selected, selected_set)

    return selected


def smart_mock_selection(files: list[str], course_id: str, max_files: int) -> list[str]:
    """
    Course-aware selection used in mock mode.

    README first, then course-specific patterns, then general project files
    to fill the remaining capacity.
    """
    selected: list[str] = []
    selected_set: set[str] = set()

    readme = next((f for f in files if _README_RE.search(f)), None)
    if readme:
        selected.append(readme)
        selected_set.add(readme)

    for pattern in MOCK_COURSE_PATTERNS.get(course_id, []):
        if len(selected) >= max_files:
            break
        _take_matches(
            pattern, files, MOCK_FILES_PER_COURSE_PATTERN, max_files, selected, selected_set
        )

    for pattern in MOCK_GENERAL_PATTERNS:
        if len(selected) >= max_files:
            break
        _take_matches(
            pattern, files, MOCK_FILES_PER_GENERAL_PATTERN, max_files, selected, selected_set
        )

    return selected[:max_files]


def _take_matches(
    pattern: str,
    files: list[str],
    per_pattern: int,
    max_files: int,
    selected: list[str],
    selected_set: set[str],
) -> None:
    """Append up to per_pattern unselected matches of pattern, respecting max_files."""
    regex = re.compile(pattern, re.IGNORECASE)
    taken = 0
    for path in files:
        if taken >= per_pattern or len(selected) >= max_files:
            break
        if path not in selected_set and regex.search(path):
            selected.append(path)
            selected_set.add(path)
            taken += 1
