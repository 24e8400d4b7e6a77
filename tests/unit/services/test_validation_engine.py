"""
Tests for the ValidationEngine.

Tests cover:
- Heuristic critique (missing essentials, redundant files, confidence bounds)
- Applying suggestions (remove first, capacity, idempotence)
- Model critique parsing and merging
- Model failures leaving the heuristic result in place
"""

from unittest.mock import AsyncMock

import anthropic
import httpx
import pytest

from hybrid_selector.config.settings import Settings
from hybrid_selector.services.file_selector import ParseFailure
from hybrid_selector.services.validation import (
    DEFAULT_ESSENTIAL_KEYWORDS,
    ESSENTIAL_KEYWORDS,
    ParsedCritique,
    ValidationEngine,
    ValidationRequest,
    essential_keywords_for,
    parse_validation_response,
)
from tests.helpers.repositories import DATA_ENGINEERING_FILES, ScriptedLanguageModel

PARTIAL_SELECTION = [
    "README.md",
    "dbt/models/staging/stg_trips.sql",
    "node_modules/lodash/index.js",
]

COMPLETE_SELECTION = [
    "README.md",
    "dbt/dbt_project.yml",
    "terraform/main.tf",
    "orchestration/dags/etl_dag.py",
]


def _request(
    selected: list[str],
    all_files: list[str] = DATA_ENGINEERING_FILES,
    course_id: str = "data-engineering",
) -> ValidationRequest:
    return ValidationRequest(
        all_files=all_files,
        selected_files=selected,
        course_id=course_id,
        course_name="Data Engineering Zoomcamp",
        repo_url="https://github.com/student/de-project",
        selection_method="ai_guided",
        confidence=0.85,
    )


@pytest.fixture
def validation_settings() -> Settings:
    """Settings with model critiques enabled."""
    return Settings(
        _env_file=None,
        ai_mock_mode=False,
        anthropic_api_key="sk-test",
        enable_ai_validation=True,
        ai_selection_timeout_ms=200,
    )


class TestHeuristicCritique:
    """Tests for heuristic_critique."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.engine = ValidationEngine(Settings(_env_file=None, ai_mock_mode=True))

    def test_missing_and_redundant(self) -> None:
        """Absent essentials are suggested; vendored files are redundant."""
        result = self.engine.heuristic_critique(_request(PARTIAL_SELECTION))

        assert result.suggestions.missing_critical == [
            "dbt/dbt_project.yml",
            "terraform/main.tf",
            "orchestration/dags/etl_dag.py",
        ]
        assert result.suggestions.redundant_files == ["node_modules/lodash/index.js"]
        assert result.is_valid is False
        # 0.8 * 3 selected / 4 issues
        assert result.confidence == pytest.approx(0.6)
        assert result.reasoning == (
            "Heuristic validation: 3 missing critical files, 1 redundant files identified."
        )

    def test_complete_selection_is_valid(self) -> None:
        """A selection covering every keyword has no issues."""
        result = self.engine.heuristic_critique(_request(COMPLETE_SELECTION))

        assert result.is_valid is True
        assert result.suggestions.issue_count == 0
        assert result.confidence == 0.95

    def test_confidence_floor(self) -> None:
        """Confidence never drops below 0.5."""
        result = self.engine.heuristic_critique(_request(["node_modules/lodash/index.js"]))

        assert result.confidence == 0.5

    def test_keywords_are_case_insensitive(self) -> None:
        """A lowercase readme satisfies the README keyword."""
        result = self.engine.heuristic_critique(
            _request(
                ["readme.md", "requirements.txt"],
                ["readme.md", "requirements.txt"],
                "general",
            )
        )

        assert result.suggestions.missing_critical == []

    def test_shallowest_match_suggested(self) -> None:
        """The shallowest file containing a keyword is the one suggested."""
        all_files = ["docs/README.md", "README.md", "src/app.py"]

        result = self.engine.heuristic_critique(_request(["src/app.py"], all_files, "general"))

        assert result.suggestions.missing_critical == ["README.md"]

    def test_unusable_files_never_suggested(self) -> None:
        """Lockfiles are not offered even when they match a keyword."""
        all_files = ["README.md", "requirements.lock"]

        result = self.engine.heuristic_critique(_request(["README.md"], all_files, "general"))

        assert result.suggestions.missing_critical == []

    def test_essential_keywords_by_course(self) -> None:
        """Keyword lists follow the course type, with a default."""
        assert essential_keywords_for("llm-zoomcamp") == ESSENTIAL_KEYWORDS["llm"]
        assert essential_keywords_for("mlops") == ESSENTIAL_KEYWORDS["mlops"]
        assert essential_keywords_for("stock-markets") == DEFAULT_ESSENTIAL_KEYWORDS


class TestApplySuggestions:
    """Tests for apply_validation_suggestions."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.engine = ValidationEngine(Settings(_env_file=None, ai_mock_mode=True))

    def test_removes_then_adds(self) -> None:
        """Redundant files go first, then missing-critical files are appended."""
        validation = self.engine.heuristic_critique(_request(PARTIAL_SELECTION))

        improved, changes = self.engine.apply_validation_suggestions(
            PARTIAL_SELECTION, DATA_ENGINEERING_FILES, validation, max_files=10
        )

        assert improved == [
            "README.md",
            "dbt/models/staging/stg_trips.sql",
            "dbt/dbt_project.yml",
            "terraform/main.tf",
            "orchestration/dags/etl_dag.py",
        ]
        assert [(c.action, c.importance) for c in changes] == [
            ("remove", "optional"),
            ("add", "critical"),
            ("add", "critical"),
            ("add", "critical"),
        ]

    def test_additions_respect_capacity(self) -> None:
        """Additions stop at max_files."""
        validation = self.engine.heuristic_critique(_request(PARTIAL_SELECTION))

        improved, _ = self.engine.apply_validation_suggestions(
            PARTIAL_SELECTION, DATA_ENGINEERING_FILES, validation, max_files=3
        )

        assert improved == [
            "README.md",
            "dbt/models/staging/stg_trips.sql",
            "dbt/dbt_project.yml",
        ]

    @pytest.mark.asyncio
    async def test_revalidation_is_a_no_op(self) -> None:
        """Validating and applying twice changes nothing the second time."""
        first = await self.engine.validate_selection(_request(PARTIAL_SELECTION))
        improved, _ = self.engine.apply_validation_suggestions(
            PARTIAL_SELECTION, DATA_ENGINEERING_FILES, first, max_files=10
        )

        second = await self.engine.validate_selection(_request(improved))
        again, changes = self.engine.apply_validation_suggestions(
            improved, DATA_ENGINEERING_FILES, second, max_files=10
        )

        assert again == improved
        assert changes == []


class TestCritiqueParsing:
    """Tests for parse_validation_response."""

    def test_full_response(self) -> None:
        """All suggestion categories are read."""
        response = (
            '{"isValid": false, "confidence": 0.7, "suggestions": {'
            '"missingCritical": ["a.py"], "redundantFiles": ["b.py"], '
            '"additionalRecommended": ["c.py", 3]}, "reasoning": "Needs more"}'
        )

        result = parse_validation_response(response)

        assert isinstance(result, ParsedCritique)
        assert result.is_valid is False
        assert result.confidence == 0.7
        assert result.suggestions.missing_critical == ["a.py"]
        assert result.suggestions.redundant_files == ["b.py"]
        assert result.suggestions.additional_recommended == ["c.py"]
        assert result.reasoning == "Needs more"

    def test_missing_suggestions_default_empty(self) -> None:
        """Absent or malformed suggestion lists become empty."""
        result = parse_validation_response('{"isValid": "yes", "suggestions": []}')

        assert result.is_valid is False
        assert result.suggestions.issue_count == 0
        assert result.confidence == 0.5

    def test_no_json(self) -> None:
        """Prose without JSON is a failure."""
        result = parse_validation_response("Looks fine to me.")

        assert isinstance(result, ParseFailure)


class TestModelCritique:
    """Tests for merging a model critique into the heuristic one."""

    def test_model_unused_by_default(self, ai_settings: Settings) -> None:
        """AI validation is off unless enabled."""
        engine = ValidationEngine(ai_settings, ScriptedLanguageModel())

        assert engine.language_model is None

    def test_model_unused_in_mock_mode(self, settings: Settings) -> None:
        """Mock mode never calls a model."""
        engine = ValidationEngine(
            settings.model_copy(update={"enable_ai_validation": True}),
            ScriptedLanguageModel(),
        )

        assert engine.language_model is None

    @pytest.mark.asyncio
    async def test_merges_model_suggestions(self, validation_settings: Settings) -> None:
        """Usable model suggestions are unioned in and confidence is averaged."""
        model = ScriptedLanguageModel(
            '{"isValid": false, "confidence": 0.7, "suggestions": {'
            '"missingCritical": ["docker-compose.yml", "ghost.py"], '
            '"redundantFiles": ["README.md", "unselected.py"], '
            '"additionalRecommended": ["requirements.txt", "terraform/main.tf"]}, '
            '"reasoning": "Needs infra"}'
        )
        engine = ValidationEngine(validation_settings, model)

        result = await engine.validate_selection(_request(COMPLETE_SELECTION))

        assert result.ai_reviewed is True
        assert result.is_valid is False
        assert result.confidence == pytest.approx((0.95 + 0.7) / 2)
        assert result.suggestions.missing_critical == ["docker-compose.yml"]
        assert result.suggestions.redundant_files == ["README.md"]
        assert result.suggestions.additional_recommended == ["requirements.txt"]
        assert result.reasoning.endswith("AI review: Needs infra")
        assert result.token_usage.total_tokens == 1400

    @pytest.mark.asyncio
    async def test_model_error_keeps_heuristic(self, validation_settings: Settings) -> None:
        """An API error leaves the heuristic critique unchanged."""
        model = AsyncMock()
        model.complete.side_effect = anthropic.APIConnectionError(
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        )
        engine = ValidationEngine(validation_settings, model)

        result = await engine.validate_selection(_request(PARTIAL_SELECTION))

        assert result.ai_reviewed is False
        assert result.confidence == pytest.approx(0.6)
        assert len(result.suggestions.missing_critical) == 3

    @pytest.mark.asyncio
    async def test_unparseable_critique_keeps_heuristic(
        self, validation_settings: Settings
    ) -> None:
        """An unreadable critique leaves the heuristic suggestions, with its token cost."""
        engine = ValidationEngine(validation_settings, ScriptedLanguageModel("no json here"))

        result = await engine.validate_selection(_request(PARTIAL_SELECTION))

        assert result.ai_reviewed is False
        assert result.suggestions.redundant_files == ["node_modules/lodash/index.js"]
        assert result.token_usage.total_tokens == 1400
