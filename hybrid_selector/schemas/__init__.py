"""Pydantic schemas for API request/response validation."""

from hybrid_selector.schemas.selection import (
    CacheStatsSchema,
    CourseSchema,
    CriterionSchema,
    PerformanceStatsSchema,
    SelectionRequestSchema,
    SelectionResponseSchema,
    TierTimingsSchema,
    TokenUsageSchema,
)

__all__ = [
    "CacheStatsSchema",
    "CourseSchema",
    "CriterionSchema",
    "PerformanceStatsSchema",
    "SelectionRequestSchema",
    "SelectionResponseSchema",
    "TierTimingsSchema",
    "TokenUsageSchema",
]
