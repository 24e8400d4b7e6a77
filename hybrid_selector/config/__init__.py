"""Configuration package."""

from hybrid_selector.config.courses import (
    COURSES,
    CourseConfig,
    course_type_for,
    get_course,
    get_course_criteria,
    get_course_name,
)
from hybrid_selector.config.settings import Settings

__all__ = [
    "CourseConfig",
    "COURSES",
    "course_type_for",
    "get_course",
    "get_course_criteria",
    "get_course_name",
    "Settings",
]
