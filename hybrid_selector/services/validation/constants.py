"""
Validation constants.

Essential keywords per course type, the course context shown to the model,
and confidence bounds for the heuristic critique.
"""

# A selection should contain a path with each keyword (case-insensitive)
ESSENTIAL_KEYWORDS: dict[str, list[str]] = {
    "mlops": ["README", "requirements", "pipeline", "model", "train"],
    "data-engineering": ["README", "dbt_project", "main.tf", "dag"],
    "llm": ["README", "ingest", "search", "app", "requirements"],
}
DEFAULT_ESSENTIAL_KEYWORDS = ["README", "requirements"]

# Heuristic confidence: max(MIN, min(MAX, FACTOR * selected / max(1, issues)))
MIN_HEURISTIC_CONFIDENCE = 0.5
MAX_HEURISTIC_CONFIDENCE = 0.95
HEURISTIC_CONFIDENCE_FACTOR = 0.8

# Model critique
VALIDATION_MAX_TOKENS = 1000
MAX_PROMPT_FILES = 100

VALIDATION_SYSTEM_PROMPT = (
    "You are an expert code reviewer. You judge whether a set of repository files, "
    "identified by name and path only, is sufficient to grade a course project."
)

COURSE_CONTEXTS: dict[str, str] = {
    "mlops": """MLOps projects should demonstrate:
- Data pipeline implementation (ingestion, processing, training)
- Model training and deployment automation
- Infrastructure as code (Terraform, Docker)
- CI/CD workflows for ML models
- Monitoring and logging setup
- Configuration management

Key file patterns to look for:
- Pipeline files: *pipeline*, *train*, *deploy*, *ingest*
- Infrastructure: *.tf, Dockerfile, docker-compose.yml
- Configuration: requirements.txt, config.*, setup.py
- Workflows: .github/workflows/*, scripts/*
- Models: model.*, *model*, lambda_function.py""",
    "data-engineering": """Data Engineering projects should demonstrate:
- Data modeling with dbt (staging, marts, core models)
- Infrastructure provisioning (Terraform)
- Data orchestration (Airflow, Prefect)
- Data processing pipelines
- Data quality and testing

Key file patterns to look for:
- DBT: dbt_project.yml, models/**/*.sql, dbt/profiles.yml
- Infrastructure: *.tf, terraform/*, infrastructure/*
- Orchestration: dags/*, orchestration/*, airflow/*
- Processing: processing/*, etl.*, dataflow/*
- Configuration: requirements.txt, docker-compose.yml""",
    "llm": """LLM/RAG projects should demonstrate:
- RAG system implementation (retrieval, generation)
- Data ingestion and preprocessing
- Vector database integration
- API implementation for search/query
- Backend services architecture

Key file patterns to look for:
- RAG: *rag*, *retrieval*, *ingest*, *prep*
- API: backend/api/*, *api*, app.py, main.py
- Processing: *prep*, *ingest*, *embedding*
- Configuration: requirements.txt, docker-compose.yml
- Database: *db*, *database*, *vector*""",
    "machine-learning": """Machine Learning projects should demonstrate:
- Model training and evaluation
- Data preprocessing and feature engineering
- Model deployment and serving
- Experiment tracking and reproducibility
- Testing and validation

Key file patterns to look for:
- Training: *train*, *model*, *ml*, *.ipynb
- Data: *data*, *preprocess*, *feature*
- Deployment: *deploy*, *serve*, *api*
- Configuration: requirements.txt, config.*
- Experiments: *experiment*, *track*""",
}
DEFAULT_COURSE_CONTEXT = (
    "General software project evaluation focusing on code quality, documentation, "
    "and best practices."
)
