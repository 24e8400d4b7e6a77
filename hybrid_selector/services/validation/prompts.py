"""
Validation prompt builders.
"""

from hybrid_selector.services.validation.constants import (
    COURSE_CONTEXTS,
    DEFAULT_COURSE_CONTEXT,
    MAX_PROMPT_FILES,
)
from hybrid_selector.services.validation.types import ValidationRequest


def get_course_context(course_id: str) -> str:
    """Course requirements summary shown to the reviewing model."""
    if course_id in COURSE_CONTEXTS:
        return COURSE_CONTEXTS[course_id]
    if course_id == "llm-zoomcamp":
        return COURSE_CONTEXTS["llm"]
    return DEFAULT_COURSE_CONTEXT


def build_validation_prompt(request: ValidationRequest) -> str:
    """
    Build the prompt asking a model to critique a selection by file names only.

    Args:
        request: Selection, repository files, and course information

    Returns:
        Formatted prompt string for the model
    """
    all_files = "\n".join(request.all_files[:MAX_PROMPT_FILES])
    remaining = len(request.all_files) - MAX_PROMPT_FILES
    if remaining > 0:
        all_files += f"\n... and {remaining} more files"

    sections = [
        f"You are an expert code reviewer analyzing a repository file selection for "
        f"{request.course_name} evaluation.",
        "",
        f"TASK: Validate if the selected files are sufficient for evaluating this "
        f"{request.course_id} project.",
        "",
        "REPOSITORY CONTEXT:",
        f"- Repository: {request.repo_url}",
        f"- Total files: {len(request.all_files)}",
        f"- Selected files: {len(request.selected_files)}",
        f"- Selection method: {request.selection_method}",
        f"- Selection confidence: {request.confidence * 100:.1f}%",
        "",
        f"COURSE REQUIREMENTS ({request.course_id}):",
        get_course_context(request.course_id),
        "",
        "ALL REPOSITORY FILES (names only):",
        all_files,
        "",
        "CURRENTLY SELECTED FILES:",
        "\n".join(request.selected_files),
        "",
        "ANALYSIS INSTRUCTIONS:",
        "1. Based on FILE NAMES AND PATHS ONLY (no content analysis)",
        f"2. Evaluate if selected files cover the key evaluation criteria for {request.course_id}",
        "3. Identify any critical files that are missing",
        "4. Identify any redundant or irrelevant files in the selection",
        "5. Consider the course-specific requirements and best practices",
        "",
        "Respond in JSON format:",
        "{",
        '  "isValid": boolean,',
        '  "confidence": number (0.0-1.0),',
        '  "suggestions": {',
        '    "missingCritical": ["file1.py", "file2.sql"],',
        '    "redundantFiles": ["file3.txt"],',
        '    "additionalRecommended": ["file4.yml"]',
        "  },",
        '  "reasoning": "Brief explanation of the validation decision"',
        "}",
        "",
        f"Focus on files that are ESSENTIAL for {request.course_id} evaluation. "
        "Be conservative - only flag truly critical missing files.",
    ]

    return "\n".join(sections)
