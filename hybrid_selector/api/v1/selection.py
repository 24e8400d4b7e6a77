import logging

from fastapi import APIRouter, Depends, HTTPException, status

from hybrid_selector.api.deps import get_selector
from hybrid_selector.config.courses import COURSES, get_course, get_course_name
from hybrid_selector.core.exceptions import EmptyFileListError, UnknownCourseError
from hybrid_selector.schemas.selection import (
    CacheStatsSchema,
    CourseSchema,
    CriterionSchema,
    PerformanceStatsSchema,
    SelectionRequestSchema,
    SelectionResponseSchema,
)
from hybrid_selector.services.hybrid import HybridSelectionRequest, HybridSelector

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/file-selection", tags=["file selection"])


@router.post("", response_model=SelectionResponseSchema)
async def select_files(
    data: SelectionRequestSchema,
    selector: HybridSelector = Depends(get_selector),
) -> SelectionResponseSchema:
    """
    Select the files to evaluate from a repository file list.

    Criteria default to the course catalog. An unknown course without
    explicit criteria returns 404; an empty file list returns 422.
    """
    if data.criteria is not None:
        criteria = [c.to_criterion() for c in data.criteria]
        course_name = data.course_name or get_course_name(data.course_id)
    else:
        try:
            course = get_course(data.course_id)
        except UnknownCourseError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
        criteria = list(course.criteria)
        course_name = data.course_name or course.display_name

    try:
        result = await selector.select_files(
            HybridSelectionRequest(
                repo_url=data.repo_url,
                course_id=data.course_id,
                course_name=course_name,
                criteria=criteria,
                files=data.files,
                max_files=data.max_files,
            )
        )
    except EmptyFileListError as e:
        logger.warning(f"Selection rejected for {data.repo_url}: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message
        ) from e

    return SelectionResponseSchema.from_result(result)


@router.get("/courses", response_model=list[CourseSchema])
async def list_courses() -> list[CourseSchema]:
    """List the course catalog with criteria."""
    return [
        CourseSchema(
            course_id=course.course_id,
            display_name=course.display_name,
            max_score=course.max_score,
            criteria=[
                CriterionSchema(
                    name=c.name, description=c.description, max_score=c.max_score
                )
                for c in course.criteria
            ],
        )
        for course in COURSES.values()
    ]


@router.get("/cache/stats", response_model=CacheStatsSchema)
async def get_cache_stats(
    selector: HybridSelector = Depends(get_selector),
) -> CacheStatsSchema:
    """Intelligent cache size and hit rate."""
    return CacheStatsSchema.from_stats(await selector.cache.stats())


@router.get("/stats", response_model=PerformanceStatsSchema)
async def get_performance_stats(
    selector: HybridSelector = Depends(get_selector),
) -> PerformanceStatsSchema:
    """Tier usage and averages since start-up."""
    return PerformanceStatsSchema.from_stats(selector.performance_stats())
