"""
AI file selector constants and configuration.

Contains prompt limits, confidence values, prompt text, and the pattern tables used by
the fallback and mock selections.
"""

# Candidate paths listed in the prompt; Settings.ai_max_candidate_files overrides it
MAX_PROMPT_FILES = 200

# Confidence reported by degraded paths
NO_VALID_FILES_CONFIDENCE = 0.3
PARSE_FAILURE_CONFIDENCE = 0.2
REQUEST_FAILURE_CONFIDENCE = 0.2
DEFAULT_AI_CONFIDENCE = 0.5
MOCK_CONFIDENCE = 0.85

SYSTEM_PROMPT = (
    "You are an expert file selection assistant for code evaluation. Your job is to "
    "select the most relevant files for evaluating a repository against specific "
    "course criteria. Focus on files that provide the best evidence for assessment."
)

# Fallback selection: up to FALLBACK_FILES_PER_PATTERN matches per pattern
FALLBACK_PATTERNS = [
    r"README\.(md|txt)$",
    r"requirements\.txt$",
    r"package\.json$",
    r"Dockerfile$",
    r"\.py$",
    r"\.ipynb$",
    r"\.md$",
]
FALLBACK_FILES_PER_PATTERN = 5

# Mock selection: course priorities (2 matches each), then general fill (1 each)
MOCK_COURSE_PATTERNS: dict[str, list[str]] = {
    "mlops": [
        r"requirements\.txt$",
        r"Dockerfile$",
        r"pipeline.*\.py$",
        r"train.*\.py$",
        r"deploy.*\.py$",
        r"model.*\.py$",
        r"monitoring.*\.py$",
        r"\.ipynb$",
    ],
    "data-engineering": [
        r"dbt.*\.(sql|yml)$",
        r"terraform.*\.tf$",
        r"orchestration.*\.py$",
        r"etl.*\.py$",
        r"pipeline.*\.py$",
        r"dashboard.*\.(py|sql)$",
        r".*snowflake.*\.py$",
        r".*warehouse.*\.py$",
        r".*dwh.*\.py$",
        r".*refresh.*\.py$",
        r".*materialize.*\.py$",
        r".*transform.*\.py$",
    ],
    "llm-zoomcamp": [
        r"rag.*\.py$",
        r"ingest.*\.py$",
        r"prep.*\.py$",
        r"backend.*\.py$",
        r"api.*\.py$",
        r"\.env\.example$",
        r"\.ipynb$",
    ],
}
MOCK_GENERAL_PATTERNS = [
    r"setup\.py$",
    r"config\.(yaml|yml|json)$",
    r"docker-compose\.yml$",
    r"\.py$",
]
MOCK_FILES_PER_COURSE_PATTERN = 2
MOCK_FILES_PER_GENERAL_PATTERN = 1

# Path prefixes the model commonly mangles
GITHUB_PREFIX = "github/"
SCRIPTS_PREFIX = "scripts/"
