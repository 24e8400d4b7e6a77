"""
Selection workflow.

End-to-end processing of one repository: discover files, run hybrid
selection, then fetch content for the selected files under a concurrency cap.
File discovery and content fetching are protocols; the caller supplies the
host-specific implementations.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from hybrid_selector.config.courses import get_course_criteria, get_course_name
from hybrid_selector.config.settings import Settings
from hybrid_selector.core.exceptions import EmptyFileListError
from hybrid_selector.core.types import CourseCriterion
from hybrid_selector.services.hybrid import (
    HybridSelectionRequest,
    HybridSelectionResult,
    HybridSelector,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class FileSource(Protocol):
    """Lists every file path in a repository."""

    async def list_files(self) -> list[str]: ...


@runtime_checkable
class ContentFetcher(Protocol):
    """Fetches one file's text; None when unavailable."""

    async def fetch_content(self, path: str) -> str | None: ...


@dataclass
class WorkflowRequest:
    """A repository to process end to end."""

    repo_url: str
    course_id: str
    source: FileSource
    fetcher: ContentFetcher | None = None  # Defaults to source when it can fetch
    course_name: str | None = None  # Defaults to the catalog display name
    criteria: list[CourseCriterion] | None = None  # Defaults to the catalog criteria
    max_files: int | None = None
    fetch_content: bool = True


@dataclass
class WorkflowTimings:
    """Milliseconds spent per phase."""

    discovery: float = 0.0
    selection: float = 0.0
    content_fetch: float = 0.0
    total: float = 0.0


@dataclass
class WorkflowResult:
    """Selected files, their content, and how they were chosen."""

    selected_files: list[str]
    content: dict[str, str]
    selection: HybridSelectionResult
    total_files: int
    timings: WorkflowTimings = field(default_factory=WorkflowTimings)


async def fetch_selected_content(
    fetcher: ContentFetcher,
    paths: list[str],
    max_concurrent: int = 5,
) -> dict[str, str]:
    """
    Fetch content for paths with at most max_concurrent requests in flight.

    A failed or empty fetch only drops that path from the result.

    Returns:
        Dict mapping file paths to their contents
    """
    if not paths:
        return {}

    semaphore = asyncio.Semaphore(max_concurrent)

    async def fetch_with_limit(file_path: str) -> tuple[str, str | None]:
        async with semaphore:
            return (file_path, await fetcher.fetch_content(file_path))

    tasks = [fetch_with_limit(fp) for fp in paths]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    content: dict[str, str] = {}
    for path, result in zip(paths, results):
        if isinstance(result, BaseException):
            logger.warning(f"Failed to fetch content for {path}: {result}")
            continue
        if result[1]:
            content[path] = result[1]
    return content


class SelectionWorkflow:
    """
    Discover, select, and fetch for one repository at a time.

    Usage:
        workflow = SelectionWorkflow(selector, settings)
        result = await workflow.process_repository(
            WorkflowRequest(repo_url=url, course_id="mlops", source=repo)
        )
    """

    def __init__(self, selector: HybridSelector, settings: Settings) -> None:
        self.selector = selector
        self.settings = settings

    async def process_repository(self, request: WorkflowRequest) -> WorkflowResult:
        """
        Run discovery, hybrid selection, and content fetching.

        Raises:
            EmptyFileListError: If discovery finds no files
        """
        start = time.perf_counter()
        timings = WorkflowTimings()

        # Phase 1: discover repository files
        phase_start = time.perf_counter()
        files = await request.source.list_files()
        timings.discovery = _elapsed_ms(phase_start)
        logger.info(f"File discovery for {request.repo_url}: {len(files)} files")

        if not files:
            raise EmptyFileListError(request.repo_url)

        # Phase 2: hybrid selection
        criteria = (
            request.criteria
            if request.criteria is not None
            else get_course_criteria(request.course_id)
        )
        phase_start = time.perf_counter()
        selection = await self.selector.select_files(
            HybridSelectionRequest(
                repo_url=request.repo_url,
                course_id=request.course_id,
                course_name=request.course_name or get_course_name(request.course_id),
                criteria=criteria,
                files=files,
                max_files=request.max_files,
            )
        )
        timings.selection = _elapsed_ms(phase_start)

        # Phase 3: fetch content for the selected files
        content: dict[str, str] = {}
        fetcher = request.fetcher
        if fetcher is None and isinstance(request.source, ContentFetcher):
            fetcher = request.source

        if request.fetch_content and fetcher is not None:
            phase_start = time.perf_counter()
            content = await fetch_selected_content(
                fetcher,
                selection.selected_files,
                max_concurrent=self.settings.content_fetch_concurrency,
            )
            timings.content_fetch = _elapsed_ms(phase_start)
            logger.info(
                f"Fetched content for {len(content)}/{len(selection.selected_files)} files"
            )

        timings.total = _elapsed_ms(start)
        logger.info(
            f"Workflow for {request.repo_url} complete: {len(selection.selected_files)} files "
            f"via {selection.method} (tier {selection.tier_used}) in {timings.total:.0f}ms"
        )

        return WorkflowResult(
            selected_files=selection.selected_files,
            content=content,
            selection=selection,
            total_files=len(files),
            timings=timings,
        )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
