"""
Tests for the RepositoryFingerprinter.

Tests cover:
- Repository type detection by template scoring
- Static strategy tables
- Semantic selection (essential first, capped, noise excluded)
- Fallback to static tables when semantic analysis fails
- Criterion-driven selection delegation
"""

from unittest.mock import MagicMock

from hybrid_selector.services.fingerprinter import (
    DEFAULT_STRATEGY,
    UNKNOWN_REPO_TYPE,
    RepositoryFingerprinter,
)
from tests.helpers.repositories import DATA_ENGINEERING_FILES, LLM_FILES, MLOPS_FILES


class TestDetectRepoType:
    """Tests for detect_repo_type."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.fingerprinter = RepositoryFingerprinter()

    def test_data_engineering(self) -> None:
        """dbt, terraform and orchestration mark a data engineering project."""
        result = self.fingerprinter.detect_repo_type(DATA_ENGINEERING_FILES)

        assert result.type == "data-engineering"
        assert result.confidence == 1.0
        assert "dbt" in result.matched_patterns

    def test_llm_project(self) -> None:
        """A backend with rag and ingest modules is an LLM project."""
        result = self.fingerprinter.detect_repo_type(LLM_FILES)

        assert result.type == "llm-project"

    def test_unknown_without_required_patterns(self) -> None:
        """Listings that satisfy no template's required patterns are unknown."""
        result = self.fingerprinter.detect_repo_type(["notes.txt", "LICENSE"])

        assert result.type == UNKNOWN_REPO_TYPE
        assert result.confidence == 0.0
        assert result.matched_patterns == []

    def test_analyze_repository_includes_signature(self) -> None:
        """analyze_repository pairs the type with a structural signature."""
        analysis = self.fingerprinter.analyze_repository(MLOPS_FILES)

        assert analysis.type_result.type == "mlops-project"
        assert "python" in analysis.signature.technologies


class TestStrategySelection:
    """Tests for the static per-type tables."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.fingerprinter = RepositoryFingerprinter()

    def test_unknown_type_uses_default(self) -> None:
        """Unknown repository types get the default strategy."""
        strategy = self.fingerprinter.get_file_selection_strategy("cobol-project", 0.9)

        assert strategy == DEFAULT_STRATEGY

    def test_known_type_carries_confidence(self) -> None:
        """Known types report the detection confidence."""
        strategy = self.fingerprinter.get_file_selection_strategy("data-engineering", 0.7)

        assert strategy.confidence == 0.7
        assert strategy.max_files == 18

    def test_select_by_strategy(self) -> None:
        """Essential patterns first, then important matches."""
        selected = self.fingerprinter.select_files_by_strategy(
            DATA_ENGINEERING_FILES, "data-engineering", 1.0
        )

        assert selected[0] == "README.md"
        assert "dbt/models/staging/stg_trips.sql" in selected
        assert "terraform/main.tf" in selected
        assert "package-lock.json" not in selected


class TestSemanticSelection:
    """Tests for select_files and select_files_semantic."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.fingerprinter = RepositoryFingerprinter()

    def test_excludes_noise_and_dependencies(self) -> None:
        """Vendored code, lockfiles and stubs are never selected."""
        selected = self.fingerprinter.select_files(MLOPS_FILES, "mlops")

        assert "poetry.lock" not in selected
        assert "src/__init__.py" not in selected
        assert "README.md" in selected

    def test_respects_max_files(self) -> None:
        """The selection never exceeds max_files."""
        files = [f"src/module_{i}.py" for i in range(40)]

        selected = self.fingerprinter.select_files(files, "general", max_files=7)

        assert len(selected) == 7

    def test_essential_files_first(self) -> None:
        """Essential-group files fill the selection before supporting ones."""
        files = ["a/b/c/d/notes.py", "README.md"]

        selected = self.fingerprinter.select_files_semantic(files, "general", max_files=1)

        assert selected == ["README.md"]

    def test_falls_back_to_static_tables(self) -> None:
        """A failing semantic analyzer degrades to the static strategy tables."""
        analyzer = MagicMock()
        analyzer.group_files_by_semantic.side_effect = RuntimeError("boom")
        fingerprinter = RepositoryFingerprinter(semantic_analyzer=analyzer)

        selected = fingerprinter.select_files(
            DATA_ENGINEERING_FILES,
            "data-engineering",
            max_files=3,
            repo_type="data-engineering",
            confidence=1.0,
        )

        assert selected[0] == "README.md"
        assert len(selected) == 3


class TestCriteriaSelection:
    """Tests for select_files_by_criteria."""

    def test_delegates_to_criterion_mapper(self, de_criteria) -> None:
        """Criterion-driven selection is the mapper's selection."""
        mapper = MagicMock()
        mapper.select_optimal_files.return_value = ["README.md"]
        fingerprinter = RepositoryFingerprinter(criterion_mapper=mapper)

        selected = fingerprinter.select_files_by_criteria(
            DATA_ENGINEERING_FILES, "data-engineering", de_criteria, 10
        )

        assert selected == ["README.md"]
        mapper.select_optimal_files.assert_called_once_with(
            DATA_ENGINEERING_FILES, "data-engineering", de_criteria, 10
        )
