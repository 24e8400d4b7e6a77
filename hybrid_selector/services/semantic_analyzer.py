"""
Semantic file analysis from paths alone.

Classifies each repository path into a coarse purpose (configuration,
documentation, testing, ...) and scores its importance for a course type,
without any hardcoded per-course file lists. Purpose predicates are checked
in a fixed order and the first match wins.
"""

import re
from dataclasses import dataclass, field
from typing import Literal

GroupImportance = Literal["essential", "important", "supporting"]

CONFIG_FILE_NAMES = {
    "requirements.txt",
    "package.json",
    "dockerfile",
    "docker-compose.yml",
    "config.yaml",
    "config.yml",
    "setup.py",
    "pyproject.toml",
    ".pre-commit-config.yaml",
}
CONFIG_EXTENSIONS = {"toml", "ini", "conf", "cfg", "yaml", "yml"}
FRONTEND_EXTENSIONS = {"html", "css", "js", "jsx", "ts", "tsx", "vue", "svelte"}
KNOWN_EXTENSIONS = {"py", "sql", "tf", "yml", "yaml", "json", "md"}

LANGUAGE_MAP = {
    "py": "python",
    "js": "javascript",
    "ts": "typescript",
    "sql": "sql",
    "tf": "terraform",
    "yml": "yaml",
    "yaml": "yaml",
    "json": "json",
    "sh": "shell",
    "dockerfile": "docker",
}

IMPORTANCE_ORDER: dict[str, int] = {"essential": 3, "important": 2, "supporting": 1}


def _rx(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


# Purpose predicates
_CONFIG_SEGMENT = _rx(r"config|conf|settings")
_CONFIG_NAME = _rx(r"config|settings")
_DOC_NAME = _rx(r"readme|doc|guide")
_TEST = _rx(r"test|spec")
_DEPLOY_PATH = _rx(r"deploy|infrastructure|terraform|k8s|kubernetes")
_DEPLOY_NAME = _rx(r"deploy|lambda|function")
_GITHUB_WORKFLOW = _rx(r"github.*workflow")
_DATA_PATH = _rx(r"pipeline|processing|etl|data")
_DATA_NAME = _rx(r"ingest|extract|transform|load|pipeline")
_ML_PATH = _rx(r"model|ml|train|predict|machine.learning")
_ML_NAME = _rx(r"train|model|predict|ml")
_API_PATH = _rx(r"api|backend|server|service")
_API_NAME = _rx(r"api|app|server|service")
_DB_PATH = _rx(r"database|db|migration|schema")
_DB_NAME = _rx(r"db|database|migration")
_ORCH_PATH = _rx(r"orchestration|workflow|dags|airflow|prefect|dagster")
_ORCH_NAME = _rx(r"orchestrat|workflow|dag")
_FRONTEND_PATH = _rx(r"frontend|ui|components|pages")
_SCRIPT_PATH = _rx(r"scripts|bin|tools")
_SCRIPT_NAME = _rx(r"script|run|build|deploy")
_DESCRIPTIVE_NAME = re.compile(r"[_-]")

# (context, pattern over path segments)
_SEGMENT_CONTEXTS = [
    ("dbt", _rx(r"dbt")),
    ("airflow", _rx(r"airflow|dags")),
    ("terraform", _rx(r"terraform|infrastructure")),
    ("docker", _rx(r"docker")),
    ("kubernetes", _rx(r"kubernetes|k8s")),
    ("ci_cd", _rx(r"github|workflows")),
]

# Course bonus tables: (target, pattern, points)
# target "path" = full path, "base" = file name, "dir" = parent directory
_MLOPS_BONUSES = [
    ("path", _rx(r"pipeline|workflow|orchestrat"), 80),
    ("base", _rx(r"train|model|predict"), 75),
    ("base", _rx(r"deploy|lambda|function"), 70),
    ("path", _rx(r"mlflow|wandb|kubeflow"), 60),
    ("path", _rx(r"monitoring|logging"), 55),
    ("path", _rx(r"github.*workflow"), 45),
]
_LLM_BONUSES = [
    ("path", _rx(r"rag|retrieval"), 80),
    ("base", _rx(r"ingest|prep|embedding"), 75),
    ("path", _rx(r"backend.*api"), 70),
    ("base", _rx(r"search|query"), 65),
    ("path", _rx(r"vector|chroma|pinecone|weaviate"), 60),
    ("base", _rx(r"database|db"), 55),
]
_GENERAL_BONUSES = [
    ("base", _rx(r"main|app|index"), 60),
    ("base", _rx(r"config|settings"), 50),
    ("base", _rx(r"utils|helpers"), 30),
    ("path", _TEST, 40),
]


@dataclass
class FileAnalysis:
    """Semantic classification of a single path."""

    semantic_purpose: str
    technical_context: str
    importance_score: float  # 0-100
    criterion_relevance: list[str] = field(default_factory=list)
    confidence: float = 0.5


@dataclass
class SemanticFileGroup:
    """Files sharing a semantic purpose."""

    purpose: str
    files: list[str]
    importance: GroupImportance
    confidence: float
    average_score: float = 0.0


@dataclass(frozen=True)
class _PathParts:
    path: str
    segments: list[str]
    base_name: str
    extension: str
    directory: str
    depth: int

    @classmethod
    def of(cls, path: str) -> "_PathParts":
        segments = path.split("/")
        base_name = segments[-1].lower()
        # Last dot-part of the whole path, or the whole path when dot-less
        extension = path.rsplit(".", 1)[-1].lower()
        return cls(
            path=path,
            segments=segments,
            base_name=base_name,
            extension=extension,
            directory=segments[-2] if len(segments) > 1 else "",
            depth=len(segments) - 1,
        )

    @property
    def joined(self) -> str:
        return "/".join(self.segments)


class SemanticFileAnalyzer:
    """Pattern-free file classifier and importance scorer."""

    def analyze_file(self, path: str, course_type: str) -> FileAnalysis:
        """
        Analyze a file's semantic purpose and importance.

        Args:
            path: Repository file path
            course_type: One of mlops, data-engineering, llm or general

        Returns:
            FileAnalysis for the path
        """
        parts = _PathParts.of(path)
        return FileAnalysis(
            semantic_purpose=self._semantic_purpose(parts),
            technical_context=self._technical_context(parts),
            importance_score=self._importance_score(parts, course_type),
            criterion_relevance=self._criterion_relevance(parts, course_type),
            confidence=self._confidence(parts),
        )

    def group_files_by_semantic(
        self,
        files: list[str],
        course_type: str,
    ) -> list[SemanticFileGroup]:
        """
        Bucket files by semantic purpose, essential groups first.

        Each group's importance tier comes from its average importance score:
        essential >= 85, important >= 60, otherwise supporting.
        """
        buckets: dict[str, list[tuple[str, FileAnalysis]]] = {}
        for path in files:
            analysis = self.analyze_file(path, course_type)
            buckets.setdefault(analysis.semantic_purpose, []).append((path, analysis))

        groups: list[SemanticFileGroup] = []
        for purpose, members in buckets.items():
            average = sum(a.importance_score for _, a in members) / len(members)
            avg_confidence = sum(a.confidence for _, a in members) / len(members)
            size_boost = min(0.1, len(members) * 0.02)
            groups.append(
                SemanticFileGroup(
                    purpose=purpose,
                    files=[p for p, _ in members],
                    importance=classify_importance(average),
                    confidence=min(0.95, avg_confidence + size_boost),
                    average_score=average,
                )
            )

        groups.sort(key=lambda g: -IMPORTANCE_ORDER[g.importance])
        return groups

    def _semantic_purpose(self, p: _PathParts) -> str:
        if self._is_configuration(p):
            return "configuration"
        if self._is_documentation(p):
            return "documentation"
        if self._is_test(p):
            return "testing"
        if self._is_deployment(p):
            return "deployment"
        if _DATA_PATH.search(p.joined) or _DATA_NAME.search(p.base_name):
            return "data_processing"
        if _ML_PATH.search(p.joined) or _ML_NAME.search(p.base_name):
            return "machine_learning"
        if _API_PATH.search(p.joined) or _API_NAME.search(p.base_name):
            return "api_backend"
        if p.extension == "sql" or _DB_PATH.search(p.joined) or _DB_NAME.search(p.base_name):
            return "database"
        if _ORCH_PATH.search(p.joined) or _ORCH_NAME.search(p.base_name):
            return "orchestration"
        if p.extension in FRONTEND_EXTENSIONS or _FRONTEND_PATH.search(p.joined):
            return "frontend"
        if (
            p.extension == "sh"
            or _SCRIPT_PATH.search(p.joined)
            or _SCRIPT_NAME.search(p.base_name)
        ):
            return "scripts"
        return "general"

    def _is_configuration(self, p: _PathParts) -> bool:
        return (
            p.base_name in CONFIG_FILE_NAMES
            or p.extension in CONFIG_EXTENSIONS
            or any(_CONFIG_SEGMENT.search(s) for s in p.segments)
            or bool(_CONFIG_NAME.search(p.base_name))
        )

    def _is_documentation(self, p: _PathParts) -> bool:
        return p.extension in ("md", "txt") or bool(_DOC_NAME.search(p.base_name))

    def _is_test(self, p: _PathParts) -> bool:
        return any(_TEST.search(s) for s in p.segments) or bool(_TEST.search(p.base_name))

    def _is_deployment(self, p: _PathParts) -> bool:
        return (
            bool(_DEPLOY_PATH.search(p.joined))
            or bool(_DEPLOY_NAME.search(p.base_name))
            or p.extension == "tf"
            or bool(_GITHUB_WORKFLOW.search(p.joined))
            or (".github" in p.segments and "workflows" in p.segments)
        )

    def _technical_context(self, p: _PathParts) -> str:
        contexts: list[str] = []
        language = LANGUAGE_MAP.get(p.extension)
        if language:
            contexts.append(language)

        for context, pattern in _SEGMENT_CONTEXTS:
            hit = any(pattern.search(s) for s in p.segments)
            if context == "docker":
                hit = hit or "docker" in p.base_name
            if hit:
                contexts.append(context)

        return "_".join(contexts) or "general"

    def _importance_score(self, p: _PathParts, course_type: str) -> float:
        score = 0

        if p.base_name.endswith(".ipynb"):
            score += 80
        if p.base_name == "readme.md":
            score += 90
        if p.base_name == "requirements.txt":
            score += 85
        if p.base_name == "dockerfile":
            score += 80
        if p.base_name == ".pre-commit-config.yaml":
            score += 75
        if ".github/workflows/" in p.path:
            score += 70

        if course_type == "mlops":
            score += self._score_mlops(p)
        elif course_type == "data-engineering":
            score += self._score_data_engineering(p)
        elif course_type == "llm":
            score += _apply_bonuses(_LLM_BONUSES, p)
        else:
            score += _apply_bonuses(_GENERAL_BONUSES, p)

        # Prefer files closer to the root
        score -= p.depth * 5
        return max(0, min(100, score))

    def _score_mlops(self, p: _PathParts) -> int:
        score = _apply_bonuses(_MLOPS_BONUSES, p)
        if _rx(r"ingest|data").search(p.base_name) and p.extension == "py":
            score += 65
        if p.extension == "tf" or re.search(r"terraform", p.directory, re.IGNORECASE):
            score += 50
        return score

    def _score_data_engineering(self, p: _PathParts) -> int:
        score = 0
        if re.search(r"dbt", p.path, re.IGNORECASE):
            if p.base_name == "dbt_project.yml":
                score += 90
            if p.extension == "sql":
                score += 75
            if re.search(r"staging|marts|core", p.path, re.IGNORECASE):
                score += 70
        if p.extension == "tf":
            if p.base_name == "main.tf":
                score += 85
            score += 60
        if re.search(r"airflow|dags|orchestration", p.path, re.IGNORECASE):
            score += 70
        if re.search(r"etl|pipeline", p.base_name, re.IGNORECASE):
            score += 65
        if re.search(r"processing|dataflow", p.directory, re.IGNORECASE):
            score += 60
        return score

    def _criterion_relevance(self, p: _PathParts, course_type: str) -> list[str]:
        relevance: list[str] = []
        path = p.path

        def hit(pattern: str) -> bool:
            return re.search(pattern, path, re.IGNORECASE) is not None

        if course_type == "mlops":
            if hit(r"pipeline|ingest|data"):
                relevance.append("data_pipeline")
            if hit(r"train|model"):
                relevance.append("model_training")
            if hit(r"deploy|lambda|function"):
                relevance.append("deployment")
            if hit(r"monitor|logging"):
                relevance.append("monitoring")
            if hit(r"test"):
                relevance.append("testing")
        elif course_type == "data-engineering":
            if hit(r"dbt"):
                relevance.append("data_modeling")
            if hit(r"terraform|infrastructure"):
                relevance.append("infrastructure")
            if hit(r"orchestration|airflow|dags"):
                relevance.append("orchestration")
            if hit(r"processing|etl"):
                relevance.append("data_processing")
        elif course_type == "llm":
            if hit(r"rag|retrieval"):
                relevance.append("retrieval_system")
            if hit(r"ingest|prep"):
                relevance.append("data_preparation")
            if hit(r"api|backend"):
                relevance.append("api_implementation")
            if hit(r"search|query"):
                relevance.append("search_functionality")

        if self._is_documentation(p):
            relevance.append("documentation")
        if _TEST.search(path) or _TEST.search(p.base_name):
            relevance.append("testing")
        if self._is_configuration(p):
            relevance.append("configuration")

        return relevance

    def _confidence(self, p: _PathParts) -> float:
        confidence = 0.5
        if p.extension in KNOWN_EXTENSIONS:
            confidence += 0.2
        if len(p.base_name) > 5 and _DESCRIPTIVE_NAME.search(p.base_name):
            confidence += 0.1
        if 0 < p.depth < 4:
            confidence += 0.1
        return min(0.95, confidence)


def _apply_bonuses(bonuses: list[tuple[str, re.Pattern[str], int]], p: _PathParts) -> int:
    score = 0
    for target, pattern, points in bonuses:
        subject = {"path": p.path, "base": p.base_name, "dir": p.directory}[target]
        if pattern.search(subject):
            score += points
    return score


def classify_importance(score: float) -> GroupImportance:
    """Map an average importance score to a group tier."""
    if score >= 85:
        return "essential"
    if score >= 60:
        return "important"
    return "supporting"
