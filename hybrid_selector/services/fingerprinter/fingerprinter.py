"""
Repository fingerprinting service.

Detects a repository's overall type from weighted template scoring and
produces a file selection, either criterion-driven (when course criteria are
supplied) or from semantic analysis with a static-table fallback.
"""

import logging
import re

from hybrid_selector.core.types import CourseCriterion
from hybrid_selector.services.criterion_mapper import MAX_FILES_PER_EVALUATION, CriterionMapper
from hybrid_selector.services.file_filters import is_large_dependency_file, is_noise_path
from hybrid_selector.services.fingerprinter.constants import (
    DEFAULT_STRATEGY,
    DIRECTORY_MATCH_POINTS,
    INDICATOR_MATCH_POINTS,
    REPO_TYPE_PATTERNS,
    REQUIRED_MATCH_POINTS,
    SELECTION_STRATEGIES,
    UNKNOWN_REPO_TYPE,
)
from hybrid_selector.services.fingerprinter.types import (
    FileSelectionStrategy,
    RepositoryAnalysis,
    RepoTypeResult,
    RepoTypeTemplate,
)
from hybrid_selector.services.glob_pattern import GlobPattern
from hybrid_selector.services.semantic_analyzer import SemanticFileAnalyzer
from hybrid_selector.services.signature import SignatureGenerator

logger = logging.getLogger(__name__)

# Semantic selection phases, in fill order
SEMANTIC_PHASES = ("essential", "important", "supporting")


class RepositoryFingerprinter:
    """
    Detect repository type and select files for evaluation.

    Criterion-driven selection always takes precedence over generic
    type-based selection when criteria exist.
    """

    def __init__(
        self,
        criterion_mapper: CriterionMapper | None = None,
        semantic_analyzer: SemanticFileAnalyzer | None = None,
        signature_generator: SignatureGenerator | None = None,
    ) -> None:
        self.criterion_mapper = criterion_mapper or CriterionMapper()
        self.semantic_analyzer = semantic_analyzer or SemanticFileAnalyzer()
        self.signature_generator = signature_generator or SignatureGenerator()

    def analyze_repository(self, files: list[str]) -> RepositoryAnalysis:
        """Detect the repository type and compute its signature."""
        return RepositoryAnalysis(
            type_result=self.detect_repo_type(files),
            signature=self.signature_generator.generate(files),
        )

    def detect_repo_type(self, files: list[str]) -> RepoTypeResult:
        """
        Score every repository type template and pick the best.

        Scoring:
        - 30 points per required pattern match (no match means score 0)
        - 20 points per indicator match
        - 15 points per directory hint match

        Returns:
            RepoTypeResult with confidence = min(score / 100, 1)
        """
        best_type = UNKNOWN_REPO_TYPE
        best_score = 0
        best_matches: list[str] = []

        for repo_type, template in REPO_TYPE_PATTERNS.items():
            score, matches = self._score_template(files, template)
            if score > best_score:
                best_type, best_score, best_matches = repo_type, score, matches

        return RepoTypeResult(
            type=best_type,
            confidence=min(best_score / 100, 1.0),
            matched_patterns=best_matches,
        )

    def _score_template(
        self, files: list[str], template: RepoTypeTemplate
    ) -> tuple[int, list[str]]:
        required = [p for p in template.required if any(_matches(f, p) for f in files)]
        if not required:
            return 0, []

        indicators = [p for p in template.indicators if any(p.search(f) for f in files)]
        lowered = [f.lower() for f in files]
        directories = [d for d in template.directories if any(d.lower() in f for f in lowered)]

        score = (
            len(required) * REQUIRED_MATCH_POINTS
            + len(indicators) * INDICATOR_MATCH_POINTS
            + len(directories) * DIRECTORY_MATCH_POINTS
        )
        matches = [_describe(p) for p in required] + [p.pattern for p in indicators] + directories
        return score, matches

    def get_file_selection_strategy(
        self,
        repo_type: str,
        confidence: float,
    ) -> FileSelectionStrategy:
        """Static selection tables for a repository type (default when unknown)."""
        strategy = SELECTION_STRATEGIES.get(repo_type)
        if strategy is None:
            return DEFAULT_STRATEGY
        return FileSelectionStrategy(
            essential=strategy.essential,
            important=strategy.important,
            supporting=strategy.supporting,
            max_files=strategy.max_files,
            confidence=confidence,
        )

    def select_files_by_strategy(
        self,
        files: list[str],
        repo_type: str,
        confidence: float,
    ) -> list[str]:
        """
        Select files using the static per-type glob tables.

        Essential patterns are always included; important and supporting
        patterns fill up to the strategy's max_files.
        """
        strategy = self.get_file_selection_strategy(repo_type, confidence)
        selected: list[str] = []
        seen: set[str] = set()

        for pattern in strategy.essential:
            for path in _glob_filter(files, pattern):
                if path not in seen:
                    selected.append(path)
                    seen.add(path)

        for patterns in (strategy.important, strategy.supporting):
            for pattern in patterns:
                if len(selected) >= strategy.max_files:
                    break
                for path in _glob_filter(files, pattern):
                    if len(selected) >= strategy.max_files:
                        break
                    if path not in seen:
                        selected.append(path)
                        seen.add(path)

        return selected

    def select_files(
        self,
        files: list[str],
        course_type: str,
        max_files: int = MAX_FILES_PER_EVALUATION,
        repo_type: str = UNKNOWN_REPO_TYPE,
        confidence: float = 0.5,
    ) -> list[str]:
        """
        Select files by semantic analysis, falling back to static tables.

        Args:
            files: Repository file paths
            course_type: Semantic course type (mlops, data-engineering, llm, general)
            max_files: Global cap on the selection
            repo_type: Detected repository type, used by the static fallback
            confidence: Detection confidence, used by the static fallback

        Returns:
            Selected file paths
        """
        try:
            return self.select_files_semantic(files, course_type, max_files)
        except Exception as e:
            logger.warning(f"Semantic analysis failed, using static strategy tables: {e}")
            return self.select_files_by_strategy(files, repo_type, confidence)[:max_files]

    def select_files_semantic(
        self,
        files: list[str],
        course_type: str,
        max_files: int = MAX_FILES_PER_EVALUATION,
    ) -> list[str]:
        """
        Fill the selection essential-first from semantic file groups.

        Each phase only uses the capacity left by the previous ones. Inside a
        group, files are taken in descending importance.
        """
        candidates = [f for f in files if not is_large_dependency_file(f) and not is_noise_path(f)]
        groups = self.semantic_analyzer.group_files_by_semantic(candidates, course_type)
        selected: list[str] = []

        def importance(path: str) -> float:
            return self.semantic_analyzer.analyze_file(path, course_type).importance_score

        for phase in SEMANTIC_PHASES:
            for group in groups:
                if group.importance != phase:
                    continue
                ranked = sorted(group.files, key=lambda f: -importance(f))
                for path in ranked:
                    if len(selected) >= max_files:
                        break
                    selected.append(path)
            if len(selected) >= max_files:
                break

        logger.debug(f"Semantic selection picked {len(selected)} of {len(files)} files")
        return selected

    def select_files_by_criteria(
        self,
        files: list[str],
        course_id: str,
        criteria: list[CourseCriterion],
        max_files: int = MAX_FILES_PER_EVALUATION,
    ) -> list[str]:
        """Criterion-driven selection, delegated to the CriterionMapper."""
        return self.criterion_mapper.select_optimal_files(files, course_id, criteria, max_files)


def _matches(path: str, pattern: str | re.Pattern[str]) -> bool:
    if isinstance(pattern, str):
        return pattern.lower() in path.lower()
    return pattern.search(path) is not None


def _describe(pattern: str | re.Pattern[str]) -> str:
    return pattern if isinstance(pattern, str) else pattern.pattern


def _glob_filter(files: list[str], pattern: str) -> list[str]:
    compiled = GlobPattern.compile(pattern)
    return [f for f in files if compiled.matches(f)]
