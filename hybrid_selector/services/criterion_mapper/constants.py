"""
Criterion mapper constants.

Per-course tables mapping each rubric criterion to the file patterns and
keywords that evidence it. Priorities order the criteria during selection
(higher first); max_files caps how many matches a criterion contributes.
"""

from hybrid_selector.services.criterion_mapper.types import CriterionFileMapping

# Global cap on selected files
MAX_FILES_PER_EVALUATION = 25

# Test files force-included after criterion selection
MAX_TEST_FILES = 10

MISSING_MAPPING_NOTE = "No file mapping defined for this criterion"

_REPRODUCIBILITY_PATTERNS = (
    "requirements.txt",
    "setup.py",
    "pyproject.toml",
    "Pipfile",
    "Dockerfile",
    "docker-compose.yml",
    "Makefile",
    "scripts/**/*.sh",
    ".github/**/*.yml",
    ".github/workflows/*.yml",
)

_NOTEBOOK_EVAL_PATTERNS = (
    "evaluation/**/*.py",
    "evaluation/**/*.ipynb",
    "eval/**/*.py",
    "eval/**/*.ipynb",
    "experiments/**/*.ipynb",
    "notebooks/**/*.ipynb",
)

MLOPS_MAPPINGS = [
    CriterionFileMapping(
        criterion_name="Problem description",
        file_patterns=("README.md", "README.rst", "docs/**/*.md", "*.ipynb"),
        content_keywords=("problem", "objective", "goal", "purpose", "description", "overview"),
        priority=100,
        max_files=5,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="Workflow orchestration",
        file_patterns=(
            "modeling/flows/*.py",
            "modeling/flows/**/*.py",
            "flows/*.py",
            "flows/**/*.py",
            "src/pipeline/*.py",
            "src/pipeline/**/*.py",
            "pipeline/*.py",
            "pipeline/**/*.py",
            "dags/**/*.py",
            "orchestration/**/*.py",
            "workflows/**/*.py",
            "airflow/**/*.py",
            "prefect/**/*.py",
            "dagster/**/*.py",
            "ml_pipeline/**/*.py",
            "orchestrate.py",
            "src/pipeline/orchestrate.py",
            "modeling/flows/collection_pipeline.py",
            "modeling/flows/training_pipeline.py",
            "modeling/flows/register_flows.py",
        ),
        content_keywords=(
            "dag",
            "workflow",
            "orchestration",
            "pipeline",
            "airflow",
            "prefect",
            "schedule",
            "flow",
        ),
        priority=95,
        max_files=8,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Model deployment",
        file_patterns=(
            "modeling/app.py",
            "modeling/service/*.py",
            "service/*.py",
            "lambda_function.py",
            "model.py",
            "src/models/*.py",
            "deploy/**/*.py",
            "deployment/**/*.py",
            "serve/**/*.py",
            "api/**/*.py",
            "app.py",
            "main.py",
            "Dockerfile",
            "docker-compose.yml",
            "kubernetes/**/*.yaml",
            "scripts/deploy*.py",
            "scripts/deploy*.sh",
            "modeling/service/model_creation.py",
            "modeling/service/model_optimization.py",
        ),
        content_keywords=(
            "deploy",
            "serve",
            "api",
            "endpoint",
            "docker",
            "container",
            "kubernetes",
            "lambda",
            "model",
        ),
        priority=90,
        max_files=8,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Model monitoring",
        file_patterns=(
            "modeling/service/metric_monitoring.py",
            "modeling/service/monitoring.py",
            "monitoring/**/*.py",
            "metrics/**/*.py",
            "alerts/**/*.py",
            "dashboard/**/*.py",
            "grafana/**/*",
            "prometheus/**/*",
            "service/metric_monitoring.py",
            "service/monitoring.py",
        ),
        content_keywords=(
            "monitor",
            "metrics",
            "alert",
            "dashboard",
            "grafana",
            "prometheus",
            "logging",
        ),
        priority=85,
        max_files=6,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Reproducibility",
        file_patterns=(*_REPRODUCIBILITY_PATTERNS, "integration_test/model/requirements.txt"),
        content_keywords=("install", "setup", "requirements", "dependencies", "environment"),
        priority=80,
        max_files=6,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Best practices",
        file_patterns=(
            "tests/**/*.py",
            "test_*.py",
            "*_test.py",
            "modeling/tests/*.py",
            "tests/model_test.py",
            "tests/train_test.py",
            "integration_test/**/*.py",
            ".github/**/*.yml",
            ".pre-commit-config.yaml",
            "pyproject.toml",
            "setup.cfg",
            "tox.ini",
            "client/scripts/*.sh",
            "scripts/*.sh",
        ),
        content_keywords=("test", "lint", "format", "ci", "cd", "quality", "coverage"),
        priority=75,
        max_files=15,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="MLOps Services",
        file_patterns=(
            "modeling/service/*.py",
            "service/*.py",
            "services/*.py",
            "modeling/service/training_configuration.py",
            "modeling/service/image_augmentations.py",
            "modeling/service/image_transformations.py",
            "modeling/service/cloud_storage.py",
        ),
        content_keywords=(
            "service",
            "configuration",
            "augmentation",
            "transformation",
            "storage",
            "training",
        ),
        priority=88,
        max_files=6,
        weight=4,
    ),
]

DATA_ENGINEERING_MAPPINGS = [
    CriterionFileMapping(
        criterion_name="Problem description",
        file_patterns=("README.md", "README.rst", "docs/**/*.md"),
        content_keywords=("problem", "objective", "data", "pipeline", "analytics"),
        priority=100,
        max_files=2,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="Cloud",
        file_patterns=(
            "terraform/**/*.tf",
            "infrastructure/**/*.tf",
            "cloudformation/**/*.yaml",
            "pulumi/**/*.py",
            "gcp/**/*",
            "aws/**/*",
            "azure/**/*",
        ),
        content_keywords=("cloud", "terraform", "aws", "gcp", "azure", "infrastructure"),
        priority=95,
        max_files=5,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Data Ingestion: Batch / Workflow orchestration",
        file_patterns=(
            "ingestion/**/*.py",
            "etl/**/*.py",
            "pipeline/**/*.py",
            "airflow/**/*.py",
            "orchestration/**/*.py",
            "workflows/**/*.py",
            "dags/**/*.py",
            "prefect/**/*.py",
            "dagster/**/*.py",
        ),
        content_keywords=(
            "ingest",
            "extract",
            "etl",
            "pipeline",
            "airflow",
            "orchestration",
            "workflow",
            "batch",
        ),
        priority=90,
        max_files=6,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Data Ingestion: Stream",
        file_patterns=(
            "streaming/**/*.py",
            "kafka/**/*.py",
            "pulsar/**/*.py",
            "stream/**/*.py",
            "realtime/**/*.py",
        ),
        content_keywords=("stream", "kafka", "pulsar", "realtime", "consumer", "producer"),
        priority=88,
        max_files=5,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Data warehouse",
        file_patterns=(
            "warehouse/**/*.sql",
            "dwh/**/*.sql",
            "models/**/*.sql",
            "bigquery/**/*.sql",
            "snowflake/**/*.sql",
            "**/*snowflake*.py",
            "**/*warehouse*.py",
            "**/*dwh*.py",
            "**/*refresh*.py",
            "**/*materialize*.py",
            "**/*transform*.py",
        ),
        content_keywords=(
            "warehouse",
            "dwh",
            "partition",
            "cluster",
            "optimize",
            "snowflake",
            "sql",
            "query",
        ),
        priority=85,
        max_files=6,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Transformations (dbt, spark, etc)",
        file_patterns=(
            "dbt/**/*.sql",
            "dbt/**/*.yml",
            "transformations/**/*.py",
            "spark/**/*.py",
            "sql/**/*.sql",
            "**/*transform*.py",
            "**/*etl*.py",
            "**/*extract*.py",
            "**/*load*.py",
            "**/*process*.py",
            "**/*clean*.py",
            "**/*prep*.py",
        ),
        content_keywords=(
            "transform",
            "dbt",
            "spark",
            "sql",
            "model",
            "etl",
            "extract",
            "load",
            "process",
        ),
        priority=80,
        max_files=8,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Dashboard",
        file_patterns=(
            "dashboard/**/*",
            "viz/**/*",
            "looker/**/*",
            "tableau/**/*",
            "streamlit/**/*.py",
            "dash/**/*.py",
            "**/*dashboard*.py",
            "**/*viz*.py",
            "**/*report*.py",
            "**/*utils*dashboard*.py",
            "**/*utils*viz*.py",
            "utils/**/*dashboard*.py",
            "utils/**/*viz*.py",
            "utils/**/*report*.py",
            "metabase/**/*",
            "grafana/**/*",
        ),
        content_keywords=(
            "dashboard",
            "visualization",
            "chart",
            "plot",
            "looker",
            "tableau",
            "report",
            "visualize",
        ),
        priority=75,
        max_files=8,
        weight=4,
    ),
    CriterionFileMapping(
        criterion_name="Reproducibility",
        file_patterns=_REPRODUCIBILITY_PATTERNS,
        content_keywords=(
            "install",
            "setup",
            "requirements",
            "dependencies",
            "environment",
            "reproduce",
        ),
        priority=70,
        max_files=6,
        weight=4,
    ),
]

LLM_ZOOMCAMP_MAPPINGS = [
    CriterionFileMapping(
        criterion_name="Problem description",
        file_patterns=("README.md", "docs/**/*.md"),
        content_keywords=("problem", "llm", "rag", "chatbot", "assistant"),
        priority=100,
        max_files=2,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="Retrieval flow",
        file_patterns=(
            "rag/**/*.py",
            "retrieval/**/*.py",
            "search/**/*.py",
            "embedding/**/*.py",
            "vector/**/*.py",
        ),
        content_keywords=("rag", "retrieval", "embedding", "vector", "search", "knowledge"),
        priority=95,
        max_files=4,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="Retrieval evaluation",
        file_patterns=(*_NOTEBOOK_EVAL_PATTERNS, "analysis/**/*.py"),
        content_keywords=(
            "evaluation",
            "eval",
            "experiment",
            "retrieval",
            "baseline",
            "metrics",
            "comparison",
        ),
        priority=90,
        max_files=4,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="LLM evaluation",
        file_patterns=_NOTEBOOK_EVAL_PATTERNS,
        content_keywords=(
            "evaluation",
            "eval",
            "experiment",
            "llm",
            "prompt",
            "response",
            "quality",
        ),
        priority=90,
        max_files=4,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="Interface",
        file_patterns=(
            "app/**/*.py",
            "frontend/**/*.py",
            "backend/**/*.py",
            "api/**/*.py",
            "streamlit/**/*.py",
            "gradio/**/*.py",
            "flask/**/*.py",
            "fastapi/**/*.py",
        ),
        content_keywords=("streamlit", "gradio", "flask", "fastapi", "interface", "ui", "app"),
        priority=85,
        max_files=3,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="Ingestion pipeline",
        file_patterns=(
            "ingest/**/*.py",
            "prep/**/*.py",
            "processing/**/*.py",
            "etl/**/*.py",
            "pipeline/**/*.py",
        ),
        content_keywords=("ingest", "process", "pipeline", "etl", "prepare"),
        priority=90,
        max_files=3,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="Monitoring",
        file_patterns=(
            "monitoring/**/*.py",
            "dashboard/**/*.py",
            "metrics/**/*.py",
            "feedback/**/*.py",
            "analytics/**/*.py",
        ),
        content_keywords=("monitor", "dashboard", "feedback", "metrics", "analytics"),
        priority=85,
        max_files=3,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="Best practices",
        file_patterns=(
            "*.ipynb",
            "notebooks/**/*.ipynb",
            "experiments/**/*.ipynb",
            "evaluation/**/*.py",
            "evaluation/**/*.ipynb",
            "eval/**/*.py",
            "eval/**/*.ipynb",
            "analysis/**/*.py",
            "analysis/**/*.ipynb",
            "results/**/*.json",
            "docs/**/*.md",
            "README.md",
            "experiments/**/*.md",
        ),
        content_keywords=(
            "hybrid",
            "search",
            "vector",
            "text",
            "rerank",
            "reranking",
            "re-rank",
            "re-ranking",
            "query",
            "rewrite",
            "rewriting",
            "evaluation",
            "experiment",
            "comparison",
            "baseline",
        ),
        priority=80,
        max_files=6,
        weight=3,
    ),
]

MACHINE_LEARNING_MAPPINGS = [
    CriterionFileMapping(
        criterion_name="Problem description",
        file_patterns=("README.md", "*.ipynb"),
        content_keywords=("problem", "dataset", "prediction", "classification", "regression"),
        priority=100,
        max_files=2,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="EDA",
        file_patterns=("*.ipynb", "eda/**/*.py", "analysis/**/*.py"),
        content_keywords=("eda", "exploratory", "analysis", "visualization", "correlation"),
        priority=95,
        max_files=3,
        weight=2,
    ),
    CriterionFileMapping(
        criterion_name="Model training",
        file_patterns=(
            "train/**/*.py",
            "training/**/*.py",
            "models/**/*.py",
            "*.ipynb",
            "ml/**/*.py",
        ),
        content_keywords=("train", "model", "fit", "sklearn", "xgboost", "lightgbm"),
        priority=90,
        max_files=4,
        weight=3,
    ),
    CriterionFileMapping(
        criterion_name="Exporting notebook to script",
        file_patterns=("train.py", "training.py", "model.py", "src/**/*.py"),
        content_keywords=("train", "model", "script", "export"),
        priority=85,
        max_files=2,
        weight=1,
    ),
]

CRITERION_MAPPINGS: dict[str, list[CriterionFileMapping]] = {
    "mlops": MLOPS_MAPPINGS,
    "data-engineering": DATA_ENGINEERING_MAPPINGS,
    "llm-zoomcamp": LLM_ZOOMCAMP_MAPPINGS,
    "machine-learning": MACHINE_LEARNING_MAPPINGS,
}
