"""
Fingerprinter constants.

Repository type templates and the static per-type selection tables used when
semantic analysis is unavailable.
"""

import re

from hybrid_selector.services.fingerprinter.types import FileSelectionStrategy, RepoTypeTemplate

# Scoring weights
REQUIRED_MATCH_POINTS = 30
INDICATOR_MATCH_POINTS = 20
DIRECTORY_MATCH_POINTS = 15

UNKNOWN_REPO_TYPE = "unknown"


def _rx(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


REPO_TYPE_PATTERNS: dict[str, RepoTypeTemplate] = {
    "mlops-project": RepoTypeTemplate(
        indicators=(
            _rx(r"pipeline"),
            _rx(r"model"),
            _rx(r"train"),
            _rx(r"deploy"),
            _rx(r"mlflow"),
            _rx(r"kubeflow"),
        ),
        required=("requirements.txt", re.compile(r".*\.py$")),
        directories=("src/pipeline", "pipeline", "ml_pipeline", "workflows", "models"),
    ),
    "data-engineering": RepoTypeTemplate(
        indicators=(
            _rx(r"dbt"),
            _rx(r"terraform"),
            _rx(r"orchestration"),
            _rx(r"airflow"),
            _rx(r"prefect"),
            _rx(r"dagster"),
        ),
        required=(re.compile(r"\.(sql|tf|yml|yaml)$"),),
        directories=("dbt", "terraform", "orchestration", "dags", "processing"),
    ),
    "llm-project": RepoTypeTemplate(
        indicators=(
            _rx(r"rag"),
            _rx(r"backend"),
            _rx(r"ingest"),
            _rx(r"prep"),
            _rx(r"embedding"),
            _rx(r"vector"),
            _rx(r"llm"),
        ),
        required=(_rx(r"backend"), re.compile(r"\.py$")),
        directories=("backend", "rag", "ingest", "prep", "api"),
    ),
}

SELECTION_STRATEGIES: dict[str, FileSelectionStrategy] = {
    "mlops-project": FileSelectionStrategy(
        essential=("README.md", "requirements.txt"),
        important=(
            "src/pipeline/*.py",
            "pipeline/*.py",
            "ml_pipeline/*.py",
            "workflows/*.py",
            "models/*.py",
            "train*.py",
            "deploy*.py",
        ),
        supporting=("Dockerfile", "docker-compose.yml", "config.yaml", "setup.py", "*.ipynb"),
        max_files=20,
        confidence=0.0,
    ),
    "data-engineering": FileSelectionStrategy(
        essential=("README.md",),
        important=(
            "dbt/**/*.sql",
            "dbt/**/*.yml",
            "terraform/**/*.tf",
            "orchestration/**/*.py",
            "dags/**/*.py",
            "processing/**/*.py",
        ),
        supporting=(
            "docker-compose.yml",
            "requirements.txt",
            "scripts/**/*.sh",
            "config/**/*.yaml",
        ),
        max_files=18,
        confidence=0.0,
    ),
    "llm-project": FileSelectionStrategy(
        essential=("README.md",),
        important=(
            "backend/**/*.py",
            "rag/**/*.py",
            "ingest/**/*.py",
            "prep/**/*.py",
            "api/**/*.py",
            "main.py",
            "app.py",
        ),
        supporting=(
            "requirements.txt",
            "Dockerfile",
            ".env.example",
            "*.ipynb",
            "config/**/*.yaml",
        ),
        max_files=16,
        confidence=0.0,
    ),
}

DEFAULT_STRATEGY = FileSelectionStrategy(
    essential=("README.md",),
    important=("*.py", "*.js", "*.ts"),
    supporting=("requirements.txt", "package.json", "Dockerfile"),
    max_files=15,
    confidence=0.5,
)
