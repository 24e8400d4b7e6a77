"""
AI file selector prompt builders.

Functions for building the prompt sent to the model for file selection.
"""

from hybrid_selector.services.file_selector.constants import MAX_PROMPT_FILES
from hybrid_selector.services.file_selector.types import AISelectionInput


def build_selection_prompt(
    input_data: AISelectionInput,
    candidate_files: list[str],
    max_prompt_files: int = MAX_PROMPT_FILES,
) -> str:
    """
    Build the prompt for criterion-aware file selection.

    Args:
        input_data: Repository, course, and criteria information
        candidate_files: Files left after dropping large/binary files
        max_prompt_files: Number of candidate paths to list before truncating

    Returns:
        Formatted prompt string for the model
    """
    sections = [
        "You are tasked with selecting the most relevant files from a GitHub repository "
        "for evaluation against specific course criteria.",
        "",
        f"**Repository**: {input_data.repo_url}",
        f"**Course**: {input_data.course_name} ({input_data.course_id})",
        f"**Available Files**: {len(candidate_files)} "
        "(filtered to exclude large/binary files)",
        f"**Maximum Files to Select**: {input_data.max_files}",
        "",
        "**Evaluation Criteria**:",
    ]

    for index, criterion in enumerate(input_data.criteria, start=1):
        sections.append(
            f"{index}. **{criterion.name}** ({criterion.max_score} points): "
            f"{criterion.description}"
        )

    file_list = "\n".join(candidate_files[:max_prompt_files])
    if len(candidate_files) > max_prompt_files:
        file_list += "\n... [Additional files truncated for brevity]"

    sections.extend(
        [
            "",
            "**Repository Files**:",
            file_list,
            "",
            "**Your Task**:",
            f"Select up to {input_data.max_files} files that would be most useful for "
            "evaluating this repository against the criteria above. Focus on:",
            "",
            "1. **Essential files**: README, requirements, configuration files (especially "
            "Dockerfile, .pre-commit-config.yaml, and other infrastructure-related configs)",
            "2. **Criterion-specific files**: Files that directly demonstrate each "
            "criterion (pipelines, training scripts, deployment code, monitoring)",
            "3. **Implementation files**: Core source code showing the main functionality",
            "4. **Documentation files**: Files explaining setup, architecture, or results",
            "5. **Evidence files**: Tests, notebooks, and configs that prove a feature works",
            "",
            "**Response Format** (JSON only):",
            "```json",
            "{",
            '  "selectedFiles": ["README.md", "src/pipeline/train.py", '
            '"requirements.txt", "..."],',
            '  "reasoning": "Brief explanation of why these files were selected",',
            '  "confidence": 0.85',
            "}",
            "```",
            "",
            "**Important Guidelines**:",
            "- Only select files that appear in the file list above",
            "- Use the exact paths as listed",
            "- Always include the README if one exists",
            "- Prefer source files over generated or vendored files",
            "- Do not select lockfiles, binaries, datasets, or model artifacts",
            f"- Do not exceed {input_data.max_files} files",
            "- Set confidence between 0 and 1 based on how well the files cover the criteria",
            "",
            "Select the files now:",
        ]
    )

    return "\n".join(sections)
