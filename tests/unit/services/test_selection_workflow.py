"""
Tests for the selection workflow.

Tests cover:
- Discovery, selection and content fetch end to end
- Catalog defaults for course name and criteria
- Concurrency cap and per-file failure isolation while fetching
- Empty listings and disabled content fetch
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from hybrid_selector.config.settings import Settings
from hybrid_selector.core.exceptions import EmptyFileListError
from hybrid_selector.services.hybrid import HybridSelectionResult, HybridSelector
from hybrid_selector.services.workflow import (
    SelectionWorkflow,
    WorkflowRequest,
    fetch_selected_content,
)
from tests.helpers.repositories import DATA_ENGINEERING_FILES, MLOPS_FILES

REPO_URL = "https://github.com/student/project"


class StaticSource:
    """FileSource over a fixed listing."""

    def __init__(self, files: list[str]):
        self.files = files

    async def list_files(self) -> list[str]:
        return list(self.files)


class TrackingFetcher:
    """ContentFetcher that records peak concurrency and can fail per path."""

    def __init__(self, failing: set[str] | None = None, empty: set[str] | None = None):
        self.failing = failing or set()
        self.empty = empty or set()
        self.in_flight = 0
        self.peak = 0
        self.fetched: list[str] = []

    async def fetch_content(self, path: str) -> str | None:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(0.01)
            self.fetched.append(path)
            if path in self.failing:
                raise ConnectionError(f"cannot fetch {path}")
            if path in self.empty:
                return None
            return f"content of {path}"
        finally:
            self.in_flight -= 1


class RepositoryDouble(StaticSource, TrackingFetcher):
    """A source that can also fetch its own files."""

    def __init__(self, files: list[str]):
        StaticSource.__init__(self, files)
        TrackingFetcher.__init__(self)


class TestFetchSelectedContent:
    """Tests for fetch_selected_content."""

    @pytest.mark.asyncio
    async def test_concurrency_cap(self) -> None:
        """No more than max_concurrent fetches run at once."""
        fetcher = TrackingFetcher()
        paths = [f"src/m_{i}.py" for i in range(12)]

        content = await fetch_selected_content(fetcher, paths, max_concurrent=3)

        assert len(content) == 12
        assert fetcher.peak <= 3

    @pytest.mark.asyncio
    async def test_failures_are_omitted(self) -> None:
        """Failed and empty fetches drop only their own path."""
        fetcher = TrackingFetcher(failing={"b.py"}, empty={"c.py"})

        content = await fetch_selected_content(fetcher, ["a.py", "b.py", "c.py"])

        assert content == {"a.py": "content of a.py"}

    @pytest.mark.asyncio
    async def test_no_paths(self) -> None:
        """Nothing to fetch returns an empty mapping."""
        fetcher = TrackingFetcher()

        assert await fetch_selected_content(fetcher, []) == {}
        assert fetcher.fetched == []


class TestSelectionWorkflow:
    """Tests for SelectionWorkflow.process_repository."""

    @pytest.mark.asyncio
    async def test_end_to_end(self, settings: Settings) -> None:
        """Files are discovered, selected and fetched from the same repository."""
        repository = RepositoryDouble(DATA_ENGINEERING_FILES)
        workflow = SelectionWorkflow(HybridSelector(settings), settings)

        result = await workflow.process_repository(
            WorkflowRequest(repo_url=REPO_URL, course_id="data-engineering", source=repository)
        )

        assert result.total_files == len(DATA_ENGINEERING_FILES)
        assert "README.md" in result.selected_files
        assert set(result.content) == set(result.selected_files)
        assert result.content["README.md"] == "content of README.md"
        assert result.selection.tier_used == 3
        assert repository.peak <= settings.content_fetch_concurrency
        assert result.timings.total >= result.timings.selection

    @pytest.mark.asyncio
    async def test_catalog_defaults(self, settings: Settings, mlops_criteria) -> None:
        """Course name and criteria default to the catalog entry."""
        selector = AsyncMock(spec=HybridSelector)
        selector.select_files.return_value = HybridSelectionResult(
            selected_files=["README.md"],
            method="fingerprint",
            confidence=0.9,
            reasoning="test",
            tier_used=2,
        )
        workflow = SelectionWorkflow(selector, settings)

        await workflow.process_repository(
            WorkflowRequest(
                repo_url=REPO_URL,
                course_id="mlops",
                source=StaticSource(MLOPS_FILES),
                max_files=7,
            )
        )

        request = selector.select_files.call_args.args[0]
        assert request.course_name == "MLOps Zoomcamp"
        assert request.criteria == mlops_criteria
        assert request.files == MLOPS_FILES
        assert request.max_files == 7

    @pytest.mark.asyncio
    async def test_explicit_criteria_and_fetcher(self, settings: Settings) -> None:
        """Caller-supplied criteria and fetcher take precedence."""
        fetcher = TrackingFetcher()
        workflow = SelectionWorkflow(HybridSelector(settings), settings)

        result = await workflow.process_repository(
            WorkflowRequest(
                repo_url=REPO_URL,
                course_id="unlisted-course",
                source=StaticSource(DATA_ENGINEERING_FILES),
                fetcher=fetcher,
                course_name="Custom Course",
                criteria=[],
            )
        )

        assert result.selection.tier_used == 2
        assert set(fetcher.fetched) == set(result.selected_files)

    @pytest.mark.asyncio
    async def test_source_without_fetcher(self, settings: Settings) -> None:
        """A source that cannot fetch yields selection without content."""
        workflow = SelectionWorkflow(HybridSelector(settings), settings)

        result = await workflow.process_repository(
            WorkflowRequest(repo_url=REPO_URL, course_id="mlops", source=StaticSource(MLOPS_FILES))
        )

        assert result.selected_files
        assert result.content == {}
        assert result.timings.content_fetch == 0.0

    @pytest.mark.asyncio
    async def test_fetch_disabled(self, settings: Settings) -> None:
        """fetch_content=False skips the fetch phase."""
        repository = RepositoryDouble(MLOPS_FILES)
        workflow = SelectionWorkflow(HybridSelector(settings), settings)

        result = await workflow.process_repository(
            WorkflowRequest(
                repo_url=REPO_URL,
                course_id="mlops",
                source=repository,
                fetch_content=False,
            )
        )

        assert result.content == {}
        assert repository.fetched == []

    @pytest.mark.asyncio
    async def test_empty_listing(self, settings: Settings) -> None:
        """A repository with no files is rejected before selection."""
        selector = AsyncMock(spec=HybridSelector)
        workflow = SelectionWorkflow(selector, settings)

        with pytest.raises(EmptyFileListError) as exc_info:
            await workflow.process_repository(
                WorkflowRequest(repo_url=REPO_URL, course_id="mlops", source=StaticSource([]))
            )

        assert REPO_URL in str(exc_info.value)
        selector.select_files.assert_not_called()
