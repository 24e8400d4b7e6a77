"""Exceptions for hybrid file selection.

Only EmptyFileListError is meant to reach callers of the selector; the rest
are raised by collaborators and absorbed into degraded results.
"""


class HybridSelectionError(Exception):
    """Base error for the hybrid selection package."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class EmptyFileListError(HybridSelectionError):
    """Repository discovery returned no files to select from."""

    def __init__(self, repo_url: str | None = None):
        self.repo_url = repo_url
        if repo_url:
            message = f"No files found in repository {repo_url}"
        else:
            message = "No files found in repository"
        super().__init__(message)


class CacheStoreError(HybridSelectionError):
    """The backing cache store could not be read or written."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message)


class UnknownCourseError(HybridSelectionError):
    """Course id is not present in the course catalog."""

    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__(f"Unknown course: {course_id}")

