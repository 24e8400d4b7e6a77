"""Pydantic schemas for the file-selection API.

Requests carry the repository file list and, optionally, the rubric to
select against. Responses mirror HybridSelectionResult field for field.
"""

from typing import Literal

from pydantic import BaseModel, Field

from hybrid_selector.core.types import CourseCriterion
from hybrid_selector.services.cache import CacheStats
from hybrid_selector.services.hybrid import HybridSelectionResult, PerformanceStats


class CriterionSchema(BaseModel):
    """One course rubric item."""

    name: str = Field(min_length=1, description="Criterion name, e.g. 'Reproducibility'")
    description: str = Field(default="", description="What the criterion rewards")
    max_score: int = Field(ge=0, description="Points available for the criterion")

    def to_criterion(self) -> CourseCriterion:
        return CourseCriterion(
            name=self.name, description=self.description, max_score=self.max_score
        )


class SelectionRequestSchema(BaseModel):
    """Select evaluation files from a known file list."""

    repo_url: str = Field(description="Repository URL, used for logging and prompts")
    course_id: str = Field(description="Course id, e.g. 'mlops' or 'data-engineering'")
    course_name: str | None = Field(
        default=None,
        description="Display name; defaults to the catalog name for course_id",
    )
    criteria: list[CriterionSchema] | None = Field(
        default=None,
        description="Rubric to select against; defaults to the catalog criteria",
    )
    files: list[str] = Field(description="Every file path in the repository")
    max_files: int | None = Field(
        default=None,
        ge=1,
        le=200,
        description="Maximum files to select; defaults to MAX_FILES_PER_EVALUATION",
    )



class TokenUsageSchema(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class TierTimingsSchema(BaseModel):
    tier1_time: float | None = None
    tier2_time: float | None = None
    tier3_time: float | None = None
    validation_time: float | None = None


class SelectionResponseSchema(BaseModel):
    """Selected files and how they were chosen."""

    selected_files: list[str]
    method: Literal["cache", "fingerprint", "ai_guided"]
    confidence: float = Field(ge=0, le=1)
    reasoning: str
    tier_used: Literal[1, 2, 3]
    cache_hit: bool
    validation_applied: bool
    fallback_used: bool
    token_usage: TokenUsageSchema
    processing_time: float = Field(description="Milliseconds")
    performance: TierTimingsSchema

    @classmethod
    def from_result(cls, result: HybridSelectionResult) -> "SelectionResponseSchema":
        return cls(
            selected_files=result.selected_files,
            method=result.method,
            confidence=result.confidence,
            reasoning=result.reasoning,
            tier_used=result.tier_used,
            cache_hit=result.cache_hit,
            validation_applied=result.validation_applied,
            fallback_used=result.fallback_used,
            token_usage=TokenUsageSchema(
                prompt_tokens=result.token_usage.prompt_tokens,
                completion_tokens=result.token_usage.completion_tokens,
                total_tokens=result.token_usage.total_tokens,
            ),
            processing_time=result.processing_time,
            performance=TierTimingsSchema(
                tier1_time=result.performance.tier1_time,
                tier2_time=result.performance.tier2_time,
                tier3_time=result.performance.tier3_time,
                validation_time=result.performance.validation_time,
            ),
        )



class CourseSchema(BaseModel):
    course_id: str
    display_name: str
    max_score: int
    criteria: list[CriterionSchema]


class CacheStatsSchema(BaseModel):
    size: int
    hit_rate: float
    average_similarity: float
    total_usage: int
    lookups: int
    hits: int

    @classmethod
    def from_stats(cls, stats: CacheStats) -> "CacheStatsSchema":
        return cls(
            size=stats.size,
            hit_rate=stats.hit_rate,
            average_similarity=stats.average_similarity,
            total_usage=stats.total_usage,
            lookups=stats.lookups,
            hits=stats.hits,
        )


class PerformanceStatsSchema(BaseModel):
    total_selections: int
    tier1_usage: float
    tier2_usage: float
    tier3_usage: float
    fallback_rate: float
    average_processing_time: float
    average_token_usage: float
    cache_hit_rate: float

    @classmethod
    def from_stats(cls, stats: PerformanceStats) -> "PerformanceStatsSchema":
        return cls(
            total_selections=stats.total_selections,
            tier1_usage=stats.tier1_usage,
            tier2_usage=stats.tier2_usage,
            tier3_usage=stats.tier3_usage,
            fallback_rate=stats.fallback_rate,
            average_processing_time=stats.average_processing_time,
            average_token_usage=stats.average_token_usage,
            cache_hit_rate=stats.cache_hit_rate,
        )
