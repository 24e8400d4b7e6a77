"""
Repository signatures for similarity lookups.

A signature reduces a file listing to its structural fingerprint: directory
prefixes, detected technologies, an extension histogram, a size bucket and a
pattern hash. Two signatures can then be compared without re-reading the
listing, which is what the intelligent cache keys on.
"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Literal

from hybrid_selector.services.glob_pattern import GlobPattern

logger = logging.getLogger(__name__)

SizeCategory = Literal["small", "medium", "large"]

DEFAULT_EXCLUDE_PATTERNS = [
    "node_modules",
    ".git",
    "__pycache__",
    ".pytest_cache",
    "venv",
    "env",
    ".env",
    "dist",
    "build",
    ".DS_Store",
    "Thumbs.db",
    "*.log",
    "*.tmp",
]

# Indicators: ".ext" = extension, "dir/" = directory token, otherwise a file name
TECHNOLOGY_INDICATORS: dict[str, list[str]] = {
    "python": [".py", "requirements.txt", "setup.py", "pyproject.toml", "Pipfile"],
    "javascript": [".js", ".jsx", "package.json"],
    "typescript": [".ts", ".tsx", "tsconfig.json"],
    "node": ["package.json"],
    "docker": ["Dockerfile", "docker-compose.yml", "docker-compose.yaml", ".dockerignore"],
    "kubernetes": ["k8s/", "kubernetes/", "helm/"],
    "terraform": [".tf", ".tfvars"],
    "sql": [".sql"],
    "dbt": ["dbt_project.yml", "profiles.yml"],
    "airflow": ["dags/", "airflow.cfg"],
    "jupyter": [".ipynb"],
    "git": [".gitignore", ".gitattributes"],
    "yaml": [".yml", ".yaml"],
    "json": [".json"],
    "markdown": [".md", ".markdown"],
    "shell": [".sh", ".bash", ".zsh"],
    "makefile": ["Makefile"],
    "go": [".go", "go.mod"],
    "rust": [".rs", "Cargo.toml"],
    "java": [".java", "pom.xml", "build.gradle"],
    "c": [".c", ".h"],
    "cpp": [".cpp", ".hpp", ".cc", ".cxx"],
    "csharp": [".cs", ".csproj", ".sln"],
    "php": [".php", "composer.json"],
    "ruby": [".rb", "Gemfile", "Rakefile"],
    "scala": [".scala", "build.sbt"],
    "kotlin": [".kt", ".kts"],
    "swift": [".swift", "Package.swift"],
    "r": [".r", "DESCRIPTION"],
    "html": [".html", ".htm"],
    "css": [".css", ".scss", ".sass", ".less"],
}

# Python frameworks detected from path substrings
PYTHON_FRAMEWORK_INDICATORS: dict[str, list[str]] = {
    "django": ["django", "settings.py", "urls.py", "wsgi.py"],
    "flask": ["flask", "app.py", "application.py"],
    "fastapi": ["fastapi", "main.py"],
    "mlflow": ["mlflow", "mlproject"],
    "wandb": ["wandb", "sweep"],
    "kubeflow": ["kubeflow", "pipeline"],
    "airflow": ["airflow", "dags/"],
    "prefect": ["prefect"],
    "dagster": ["dagster"],
}

SIMILARITY_WEIGHTS = {
    "pattern_hash": 0.4,
    "technologies": 0.3,
    "directory_structure": 0.2,
    "size_category": 0.1,
}


@dataclass(frozen=True)
class RepoSignature:
    """Structural fingerprint of a repository file listing."""

    directory_structure: tuple[str, ...]
    technologies: frozenset[str]
    file_types: dict[str, int]
    size_category: SizeCategory
    pattern_hash: str


def pattern_hash(files: list[str]) -> str:
    """
    Hash a file listing into an 8+ character hex string.

    32-bit polynomial string hash over the sorted paths. Deterministic across
    processes (unlike the builtin ``hash``) and deliberately non-cryptographic.
    """
    value = 0
    for char in "|".join(sorted(files)):
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    # Interpret as signed 32-bit before taking the magnitude
    if value >= 0x80000000:
        value -= 0x100000000
    return format(abs(value), "x").zfill(8)


def categorize_size(file_count: int) -> SizeCategory:
    """Bucket a repository by file count."""
    if file_count < 20:
        return "small"
    if file_count < 100:
        return "medium"
    return "large"


def jaccard(a: frozenset[str] | set[str], b: frozenset[str] | set[str]) -> float:
    """Jaccard overlap; two empty sets are identical."""
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


class SignatureGenerator:
    """Build and compare repository signatures."""

    def __init__(self, exclude_patterns: list[str] | None = None) -> None:
        self.exclude_patterns = exclude_patterns or DEFAULT_EXCLUDE_PATTERNS

    def generate(
        self,
        files: list[str],
        max_depth: int | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> RepoSignature:
        """
        Generate a signature for a file listing.

        Args:
            files: Repository file paths
            max_depth: Optional limit on directory prefix depth
            exclude_patterns: Extra exclusions on top of the defaults

        Returns:
            Immutable RepoSignature
        """
        filtered = self.filter_files(files, exclude_patterns)

        return RepoSignature(
            directory_structure=self._extract_directories(filtered, max_depth),
            technologies=self._detect_technologies(filtered),
            file_types=self._analyze_file_types(filtered),
            size_category=categorize_size(len(filtered)),
            pattern_hash=pattern_hash(filtered),
        )

    def filter_files(
        self,
        files: list[str],
        extra_patterns: list[str] | None = None,
    ) -> list[str]:
        """Drop VCS metadata, caches and build artifacts from a listing."""
        patterns = [*self.exclude_patterns, *(extra_patterns or [])]
        names = {p.lower() for p in patterns if "*" not in p}
        globs = [GlobPattern.compile(p) for p in patterns if "*" in p]

        kept: list[str] = []
        for path in files:
            segments = [s.lower() for s in path.strip("/").split("/")]
            if any(s in names for s in segments):
                continue
            if any(g.matches(segments[-1]) for g in globs):
                continue
            kept.append(path)
        return kept

    def _extract_directories(self, files: list[str], max_depth: int | None) -> tuple[str, ...]:
        directories: set[str] = set()

        for path in files:
            parts = path.strip("/").split("/")[:-1]
            if max_depth is not None:
                parts = parts[:max_depth]
            for i in range(1, len(parts) + 1):
                directories.add("/".join(parts[:i]))

        return tuple(sorted(directories))

    def _detect_technologies(self, files: list[str]) -> frozenset[str]:
        lowered = [f.lower() for f in files]
        technologies: set[str] = set()

        for tech, indicators in TECHNOLOGY_INDICATORS.items():
            for indicator in indicators:
                token = indicator.lower()
                if token.endswith("/"):
                    hit = any(f.startswith(token) or f"/{token}" in f for f in lowered)
                elif token.startswith("."):
                    hit = any(f.endswith(token) for f in lowered)
                else:
                    hit = any(f == token or f.endswith("/" + token) for f in lowered)
                if hit:
                    technologies.add(tech)
                    break

        if technologies & {"javascript", "typescript"}:
            if any(
                "react" in f or f.endswith((".jsx", ".tsx")) or "components/" in f
                for f in lowered
            ):
                technologies.add("react")

        if any(f.endswith(".vue") or "vue" in f for f in lowered):
            technologies.add("vue")
        if any("angular" in f for f in lowered):
            technologies.add("angular")

        if "python" in technologies:
            for framework, indicators in PYTHON_FRAMEWORK_INDICATORS.items():
                if any(ind in f for ind in indicators for f in lowered):
                    technologies.add(framework)

        return frozenset(technologies)

    def _analyze_file_types(self, files: list[str]) -> dict[str, int]:
        file_types: dict[str, int] = {}
        for path in files:
            ext = posixpath.splitext(posixpath.basename(path))[1].lstrip(".").lower()
            key = ext or "no_extension"
            file_types[key] = file_types.get(key, 0) + 1
        return file_types

    def similarity(self, a: RepoSignature, b: RepoSignature) -> float:
        """
        Weighted similarity between two signatures in [0, 1].

        0.4 pattern hash equality + 0.3 technology Jaccard + 0.2 directory
        Jaccard + 0.1 size category equality.
        """
        score = 0.0
        if a.pattern_hash == b.pattern_hash:
            score += SIMILARITY_WEIGHTS["pattern_hash"]
        score += SIMILARITY_WEIGHTS["technologies"] * jaccard(a.technologies, b.technologies)
        score += SIMILARITY_WEIGHTS["directory_structure"] * jaccard(
            frozenset(a.directory_structure), frozenset(b.directory_structure)
        )
        if a.size_category == b.size_category:
            score += SIMILARITY_WEIGHTS["size_category"]
        return min(1.0, max(0.0, score))

    def matched_features(self, a: RepoSignature, b: RepoSignature) -> list[str]:
        """Names of the signature features that two signatures share."""
        features: list[str] = []
        if a.pattern_hash == b.pattern_hash:
            features.append("pattern_hash")
        if a.size_category == b.size_category:
            features.append("size_category")
        if jaccard(a.technologies, b.technologies) > 0.5:
            features.append("technologies")
        if (
            jaccard(frozenset(a.directory_structure), frozenset(b.directory_structure))
            > 0.5
        ):
            features.append("directory_structure")
        return features
