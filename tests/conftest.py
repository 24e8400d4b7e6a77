"""Root conftest: shared fixtures for the selection test suite.

Provides:
- Settings with mock AI mode and no .env file (no network, no API key)
- Settings that route tier 3 through an injected model
- Course rubrics from the catalog
"""

from __future__ import annotations

import pytest

from hybrid_selector.config.courses import get_course_criteria
from hybrid_selector.config.settings import Settings
from hybrid_selector.core.types import CourseCriterion


@pytest.fixture
def settings() -> Settings:
    """Settings for offline tests: mock AI, caching on, no .env."""
    return Settings(_env_file=None, ai_mock_mode=True, anthropic_api_key="")


@pytest.fixture
def ai_settings() -> Settings:
    """Settings that route tier 3 through an injected model."""
    return Settings(
        _env_file=None,
        ai_mock_mode=False,
        anthropic_api_key="sk-test",
        ai_selection_timeout_ms=200,
    )


@pytest.fixture
def de_criteria() -> list[CourseCriterion]:
    """Data engineering rubric from the course catalog."""
    return get_course_criteria("data-engineering")


@pytest.fixture
def mlops_criteria() -> list[CourseCriterion]:
    """MLOps rubric from the course catalog."""
    return get_course_criteria("mlops")
