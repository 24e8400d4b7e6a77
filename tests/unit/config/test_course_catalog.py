"""
Tests for the course catalog and settings.

Tests cover:
- Catalog lookups and unknown-course behaviour
- Course type aliases used by semantic scoring
- Derived settings values
"""

import pytest

from hybrid_selector.config.courses import (
    COURSES,
    course_type_for,
    get_course,
    get_course_criteria,
    get_course_name,
)
from hybrid_selector.config.settings import Settings
from hybrid_selector.core.exceptions import UnknownCourseError


class TestCourseCatalog:
    """Tests for catalog lookups."""

    def test_known_courses(self) -> None:
        """Every supported course is in the catalog."""
        assert set(COURSES) == {
            "data-engineering",
            "machine-learning",
            "llm-zoomcamp",
            "mlops",
            "stock-markets",
        }

    def test_data_engineering_rubric(self) -> None:
        """The data engineering rubric has its eight criteria in order."""
        course = get_course("data-engineering")

        assert course.display_name == "Data Engineering Zoomcamp"
        assert [c.name for c in course.criteria] == [
            "Problem description",
            "Cloud",
            "Data Ingestion: Batch / Workflow orchestration",
            "Data Ingestion: Stream",
            "Data warehouse",
            "Transformations (dbt, spark, etc)",
            "Dashboard",
            "Reproducibility",
        ]

    def test_max_score(self) -> None:
        """max_score is the sum of criterion scores."""
        course = get_course("stock-markets")

        assert course.max_score == sum(c.max_score for c in course.criteria)

    def test_unknown_course_raises(self) -> None:
        """get_course raises for ids outside the catalog."""
        with pytest.raises(UnknownCourseError) as exc_info:
            get_course("astronomy")

        assert exc_info.value.message == "Unknown course: astronomy"

    def test_lenient_lookups(self) -> None:
        """Criteria and name lookups degrade gracefully for unknown ids."""
        assert get_course_criteria("astronomy") == []
        assert get_course_name("astronomy") == "astronomy"
        assert get_course_name("mlops") == "MLOps Zoomcamp"

    def test_criteria_are_copies(self) -> None:
        """Callers cannot mutate the catalog through returned criteria."""
        criteria = get_course_criteria("mlops")
        criteria.clear()

        assert len(get_course_criteria("mlops")) == 6

    @pytest.mark.parametrize(
        ("course_id", "course_type"),
        [
            ("mlops", "mlops"),
            ("data-engineering", "data-engineering"),
            ("llm-zoomcamp", "llm"),
            ("machine-learning", "general"),
            ("unknown", "general"),
        ],
    )
    def test_course_type_for(self, course_id: str, course_type: str) -> None:
        """Course ids map onto semantic course types."""
        assert course_type_for(course_id) == course_type


class TestSettings:
    """Tests for derived settings."""

    def test_defaults(self) -> None:
        """Defaults match the documented thresholds."""
        settings = Settings(_env_file=None)

        assert settings.cache_similarity_threshold == 0.85
        assert settings.fingerprint_confidence_threshold == 0.8
        assert settings.max_files_per_evaluation == 25
        assert settings.cache_ttl_seconds == 24 * 3600

    def test_timeout_in_seconds(self) -> None:
        """The AI timeout is configured in ms and exposed in seconds."""
        settings = Settings(_env_file=None, ai_selection_timeout_ms=2500)

        assert settings.ai_selection_timeout_seconds == 2.5

    def test_ai_available(self) -> None:
        """The model is available only with a key and mock mode off."""
        assert Settings(_env_file=None, anthropic_api_key="sk-test").ai_available is True
        assert Settings(_env_file=None, anthropic_api_key="").ai_available is False
        assert (
            Settings(_env_file=None, anthropic_api_key="sk-test", ai_mock_mode=True).ai_available
            is False
        )

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values are read from the environment."""
        monkeypatch.setenv("MAX_FILES_PER_EVALUATION", "12")
        monkeypatch.setenv("AI_MOCK_MODE", "true")

        settings = Settings(_env_file=None)

        assert settings.max_files_per_evaluation == 12
        assert settings.ai_mock_mode is True
