"""
Tests for the CriterionMapper service.

Tests cover:
- Per-criterion coverage scores and missing elements
- Criteria without a mapping
- Selection order (README, criterion priority, tests)
- Exclusion of dependency artifacts and unmatched noise
"""

from hybrid_selector.core.types import CourseCriterion
from hybrid_selector.services.criterion_mapper import (
    MAX_TEST_FILES,
    MISSING_MAPPING_NOTE,
    CriterionMapper,
)


class TestCoverage:
    """Tests for map_files_to_criteria."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.mapper = CriterionMapper()

    def test_problem_description_covered_by_readme(self, de_criteria) -> None:
        """README.md evidences the problem description with an exact-name bonus."""
        coverage = self.mapper.map_files_to_criteria(
            ["README.md", "src/main.py"], "data-engineering", de_criteria[:1]
        )

        assert coverage[0].criterion_name == "Problem description"
        assert coverage[0].relevant_files == ["README.md"]
        # 1 of 2 expected files (0.35) plus the exact-name bonus (0.3)
        assert abs(coverage[0].coverage - 0.65) < 1e-9
        assert coverage[0].confidence == 0.8
        assert coverage[0].missing_elements == []

    def test_uncovered_criterion(self, de_criteria) -> None:
        """A criterion with no matching files has zero coverage and explains why."""
        cloud = [c for c in de_criteria if c.name == "Cloud"]
        coverage = self.mapper.map_files_to_criteria(["README.md"], "data-engineering", cloud)

        assert coverage[0].coverage == 0.0
        assert coverage[0].confidence == 0.2
        assert coverage[0].missing_elements[0].startswith("No files found matching patterns")

    def test_unmapped_criterion(self) -> None:
        """A criterion without a mapping is reported, not raised."""
        criteria = [CourseCriterion("Creativity", "Novel ideas", 3)]
        coverage = self.mapper.map_files_to_criteria(["README.md"], "data-engineering", criteria)

        assert coverage[0].coverage == 0.0
        assert coverage[0].missing_elements == [MISSING_MAPPING_NOTE]

    def test_unknown_course(self, de_criteria) -> None:
        """Unknown courses have no mappings."""
        coverage = self.mapper.map_files_to_criteria(["README.md"], "astronomy", de_criteria)

        assert all(c.coverage == 0.0 for c in coverage)
        assert len(coverage) == len(de_criteria)

    def test_relevant_files_capped_per_criterion(self, de_criteria) -> None:
        """A criterion contributes at most its mapping's max_files."""
        files = [f"dbt/models/model_{i}.sql" for i in range(20)]
        transformations = [c for c in de_criteria if c.name.startswith("Transformations")]
        coverage = self.mapper.map_files_to_criteria(files, "data-engineering", transformations)

        assert len(coverage[0].relevant_files) == 8
        assert coverage[0].coverage == 0.7


class TestSelectOptimalFiles:
    """Tests for select_optimal_files."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.mapper = CriterionMapper()

    def test_dbt_project(self, de_criteria) -> None:
        """dbt models and project file are selected; vendored code is not."""
        files = [
            "README.md",
            "dbt/dbt_project.yml",
            "dbt/models/staging/a.sql",
            "node_modules/x/y.js",
        ]

        selected = self.mapper.select_optimal_files(files, "data-engineering", de_criteria)

        assert selected[0] == "README.md"
        assert "dbt/dbt_project.yml" in selected
        assert "dbt/models/staging/a.sql" in selected
        assert "node_modules/x/y.js" not in selected

    def test_priority_order(self, de_criteria) -> None:
        """Higher priority criteria contribute first."""
        files = ["dbt/models/a.sql", "terraform/main.tf", "README.md"]

        selected = self.mapper.select_optimal_files(files, "data-engineering", de_criteria)

        # Cloud (95) before Transformations (80)
        assert selected == ["README.md", "terraform/main.tf", "dbt/models/a.sql"]

    def test_respects_max_files_before_tests(self, de_criteria) -> None:
        """Criterion files stop at max_files; tests may still be appended."""
        files = ["README.md"] + [f"dbt/models/m_{i}.sql" for i in range(10)]
        files.append("tests/test_models.py")

        selected = self.mapper.select_optimal_files(
            files, "data-engineering", de_criteria, max_files=3
        )

        assert selected[:3] == ["README.md", "dbt/models/m_0.sql", "dbt/models/m_1.sql"]
        assert selected[3:] == ["tests/test_models.py"]

    def test_test_files_capped(self) -> None:
        """At most MAX_TEST_FILES test modules are force-included."""
        files = ["README.md"] + [f"tests/test_{i}.py" for i in range(MAX_TEST_FILES + 5)]

        selected = self.mapper.select_optimal_files(files, "mlops", [], max_files=1)

        assert len(selected) == 1 + MAX_TEST_FILES

    def test_skips_large_dependency_files(self, mlops_criteria) -> None:
        """Package stubs matched by a pattern are skipped."""
        files = ["README.md", "src/__init__.py", "src/pipeline/train.py"]

        selected = self.mapper.select_optimal_files(files, "mlops", mlops_criteria)

        assert "src/__init__.py" not in selected

    def test_no_duplicates(self, de_criteria) -> None:
        """A file matched by several criteria appears once."""
        files = ["README.md", "src/transform_trips.py"]

        selected = self.mapper.select_optimal_files(files, "data-engineering", de_criteria)

        assert len(selected) == len(set(selected))
