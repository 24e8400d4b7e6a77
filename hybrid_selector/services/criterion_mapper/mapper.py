"""
Criterion mapper service.

Maps course criteria to the repository files that evidence them and builds a
bounded, criterion-ordered selection from those matches.
"""

import logging

from hybrid_selector.core.types import CourseCriterion
from hybrid_selector.services.criterion_mapper.constants import (
    CRITERION_MAPPINGS,
    MAX_FILES_PER_EVALUATION,
    MAX_TEST_FILES,
    MISSING_MAPPING_NOTE,
)
from hybrid_selector.services.criterion_mapper.types import (
    CriterionCoverage,
    CriterionFileMapping,
)
from hybrid_selector.services.file_filters import (
    find_readme,
    is_large_dependency_file,
    is_test_path,
)
from hybrid_selector.services.glob_pattern import GlobPattern

logger = logging.getLogger(__name__)


class CriterionMapper:
    """
    Map course criteria to file patterns and score per-criterion coverage.

    Mappings are static per course; a criterion without a mapping is reported
    with zero coverage rather than raising.
    """

    def __init__(
        self,
        mappings: dict[str, list[CriterionFileMapping]] | None = None,
    ) -> None:
        self.mappings = mappings if mappings is not None else CRITERION_MAPPINGS

    def get_mapping(self, course_id: str, criterion_name: str) -> CriterionFileMapping | None:
        """Find the mapping for a criterion of a course."""
        for mapping in self.mappings.get(course_id, []):
            if mapping.criterion_name == criterion_name:
                return mapping
        return None

    def map_files_to_criteria(
        self,
        files: list[str],
        course_id: str,
        criteria: list[CourseCriterion],
    ) -> list[CriterionCoverage]:
        """
        Compute coverage of each criterion by the repository's files.

        Args:
            files: Repository file paths
            course_id: Course whose mapping table applies
            criteria: Criteria to evaluate, in rubric order

        Returns:
            One CriterionCoverage per criterion, in the same order
        """
        results: list[CriterionCoverage] = []

        for criterion in criteria:
            mapping = self.get_mapping(course_id, criterion.name)
            if mapping is None:
                results.append(
                    CriterionCoverage(
                        criterion_name=criterion.name,
                        relevant_files=[],
                        coverage=0.0,
                        confidence=0.0,
                        missing_elements=[MISSING_MAPPING_NOTE],
                    )
                )
                continue

            relevant, essential_match = self.find_relevant_files(files, mapping)
            coverage = CriterionCoverage(
                criterion_name=criterion.name,
                relevant_files=relevant[: mapping.max_files],
                coverage=self._coverage_score(relevant, mapping, essential_match),
                confidence=0.8 if relevant else 0.2,
                missing_elements=self._missing_elements(relevant, mapping),
            )
            logger.debug(
                f"Criterion '{criterion.name}': {len(relevant)} relevant files, "
                f"coverage {coverage.coverage:.2f}"
            )
            results.append(coverage)

        return results

    def find_relevant_files(
        self,
        files: list[str],
        mapping: CriterionFileMapping,
    ) -> tuple[list[str], bool]:
        """
        Find files matching any of a mapping's patterns.

        Returns:
            Tuple of (matching files in pattern order, whether an exact-name
            pattern matched)
        """
        relevant: list[str] = []
        seen: set[str] = set()
        essential_match = False

        for raw_pattern in mapping.file_patterns:
            pattern = GlobPattern.compile(raw_pattern)
            for path in files:
                if path in seen or not pattern.matches(path):
                    continue
                relevant.append(path)
                seen.add(path)
                if pattern.nested_literal:
                    essential_match = True

        return relevant, essential_match

    def _coverage_score(
        self,
        relevant: list[str],
        mapping: CriterionFileMapping,
        essential_match: bool,
    ) -> float:
        if not relevant:
            return 0.0
        score = min(len(relevant) / mapping.max_files, 1.0) * 0.7
        if essential_match:
            score += 0.3
        return min(score, 1.0)

    def _missing_elements(self, relevant: list[str], mapping: CriterionFileMapping) -> list[str]:
        missing: list[str] = []
        if not relevant:
            missing.append(
                f"No files found matching patterns: {', '.join(mapping.file_patterns)}"
            )
        if len(relevant) < mapping.max_files / 2:
            missing.append(
                f"Insufficient files for criterion (found {len(relevant)}, "
                f"expected ~{mapping.max_files})"
            )
        return missing

    def select_optimal_files(
        self,
        files: list[str],
        course_id: str,
        criteria: list[CourseCriterion],
        max_files: int = MAX_FILES_PER_EVALUATION,
    ) -> list[str]:
        """
        Select files that best cover the course criteria.

        Order of inclusion:
        1. The README, if present
        2. Matches per criterion, highest priority first, until max_files
        3. Up to MAX_TEST_FILES Python test modules

        Test modules are force-included and may push the list past
        max_files; the orchestrator applies the final cap.

        Returns:
            De-duplicated, order-stable list of file paths
        """
        coverage = self.map_files_to_criteria(files, course_id, criteria)
        selected: list[str] = []
        seen: set[str] = set()

        def add(path: str) -> None:
            if path not in seen:
                selected.append(path)
                seen.add(path)

        readme = find_readme(files)
        if readme:
            add(readme)

        # sorted() is stable, so equal priorities keep rubric order
        ranked = sorted(
            coverage,
            key=lambda c: -(self._priority(course_id, c.criterion_name)),
        )

        for cov in ranked:
            mapping = self.get_mapping(course_id, cov.criterion_name)
            if mapping is None:
                continue

            for path in cov.relevant_files:
                if len(selected) >= max_files:
                    break
                if not is_large_dependency_file(path):
                    add(path)

            if len(selected) >= max_files:
                break

        test_files = [f for f in files if is_test_path(f) and not is_large_dependency_file(f)]
        for path in test_files[:MAX_TEST_FILES]:
            add(path)

        logger.info(
            f"Criterion selection for {course_id}: {len(selected)} files "
            f"from {len(criteria)} criteria"
        )
        return selected

    def _priority(self, course_id: str, criterion_name: str) -> int:
        mapping = self.get_mapping(course_id, criterion_name)
        return mapping.priority if mapping else 0
